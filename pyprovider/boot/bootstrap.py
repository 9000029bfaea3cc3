from typing import Optional

from .app_runner import AppRunner
from .config import Settings


def bootstrap(app_component_fn, *, settings: Optional[Settings] = None, **props) -> AppRunner:
    """Create and start an AppRunner for the given root component.

    ``settings`` defaults to ``Settings.from_env()``; render tracing follows
    ``settings.trace``.
    """
    settings = settings or Settings.from_env()
    return AppRunner(app_component_fn, props=props, fps=settings.fps, trace=settings.trace)
