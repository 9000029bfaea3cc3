from .hook import HookContext
from .provider import create_context, Context, UNSET
from .runtime import schedule_rerender, run_renders, mount
from .core import VNode, Text
from .children import Static, Dynamic, as_children
from .errors import PyProviderError, UsageError
from .core import component, hooks

__all__ = [
    "HookContext",
    "create_context",
    "Context",
    "UNSET",
    "schedule_rerender",
    "run_renders",
    "mount",
    "VNode",
    "Text",
    "Static",
    "Dynamic",
    "as_children",
    "PyProviderError",
    "UsageError",
    "component",
    "hooks",
]
