"""Console diagnostics: the mounted tree and a log of render passes.

Nothing here imports ``hook`` so that ``hook`` and ``runtime`` can import it
lazily; nodes are read through their ``name``/``key``/``props``/``children``
attributes only.
"""

from collections import deque
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Deque, List, Optional, Tuple

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
GRAY = "\x1b[90m"
YELLOW = "\x1b[33m"
MAGENTA = "\x1b[35m"
CYAN = "\x1b[36m"


def _short(value) -> str:
    if callable(value):
        return f"<fn {getattr(value, '__name__', type(value).__name__)}>"
    if isinstance(value, (list, tuple)):
        return f"[{len(value)}]"
    text = repr(value)
    return text if len(text) <= 40 else text[:39] + "…"


def render_tree(ctx, indent: int = 0) -> None:
    """Print ``ctx`` and its descendants, one line per node with its render count."""
    props = ", ".join(f"{k}={_short(v)}" for k, v in getattr(ctx, "props", {}).items())
    key = getattr(ctx, "key", None)
    key_part = f" {GRAY}key={RESET}{YELLOW}{key!r}{RESET}" if key is not None else ""
    print(
        f"{'  ' * indent}{GRAY}-{RESET} {MAGENTA}{ctx.name}{RESET}{key_part}"
        f" {GRAY}({props}) renders={getattr(ctx, 'render_count', '?')}{RESET}"
    )
    for child in getattr(ctx, "children", ()):
        render_tree(child, indent + 1)


# ---------------- render traces ----------------
@dataclass
class RenderTrace:
    root: str
    reasons: List[str]
    # (depth, node name, key) per rendered node, in render order
    renders: List[Tuple[int, str, Any]] = field(default_factory=list)


_enabled = False
_traces: Deque[RenderTrace] = deque(maxlen=50)
_active: ContextVar[Optional[RenderTrace]] = ContextVar("render_trace", default=None)
_depth: ContextVar[int] = ContextVar("render_depth", default=0)


def enable_tracing() -> None:
    global _enabled
    _enabled = True


def disable_tracing() -> None:
    global _enabled
    _enabled = False


def clear_traces() -> None:
    _traces.clear()


def record_schedule(ctx, reason: Optional[str] = None) -> None:
    """Remember why ``ctx`` was scheduled; the next trace of ``ctx`` lists it."""
    if _enabled and reason:
        ctx._debug_reasons = [*getattr(ctx, "_debug_reasons", []), reason]


def start_trace(ctx, reasons: Optional[List[str]] = None) -> None:
    if not _enabled:
        return
    trace = RenderTrace(root=ctx.name, reasons=list(reasons or []))
    _traces.append(trace)
    _active.set(trace)
    _depth.set(0)


def end_trace() -> None:
    _active.set(None)
    _depth.set(0)


def enter_render(ctx):
    trace = _active.get()
    if trace is None:
        return None
    depth = _depth.get()
    trace.renders.append((depth, ctx.name, getattr(ctx, "key", None)))
    return _depth.set(depth + 1)


def exit_render(token) -> None:
    if token is not None:
        _depth.reset(token)


def print_last_trace() -> None:
    if not _traces:
        print(f"{GRAY}[debug]{RESET} no render trace yet.")
        return
    trace = _traces[-1]
    print(f"\n{BOLD}{CYAN}Render Trace{RESET} {GRAY}root:{RESET} {YELLOW}{trace.root}{RESET}")
    if trace.reasons:
        print(f"{GRAY}reasons:{RESET} {', '.join(trace.reasons)}")
    for depth, name, key in trace.renders:
        kind = "origin" if depth == 0 else "child"
        key_part = f" key={key!r}" if key is not None else ""
        print(f"{'  ' * depth}- {kind}: {name}{key_part}")
