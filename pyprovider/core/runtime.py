# runtime.py -------------------------------------------------
from collections import deque
from typing import Deque


rerender_queue: Deque = deque()
_enqueued: set = set()


def schedule_rerender(ctx, reason: str = None):
    # Record schedule intent for debug tooling
    from .debug import record_schedule  # local import to avoid cycles

    record_schedule(ctx, reason)
    ctx._dirty = True
    if ctx in _enqueued:
        return
    _enqueued.add(ctx)
    rerender_queue.append(ctx)


def has_pending_renders() -> bool:
    return bool(rerender_queue)


def clear_pending_renders() -> None:
    rerender_queue.clear()
    _enqueued.clear()


async def run_renders() -> None:
    """Drain the rerender queue, rendering each dirty node and running its effects.

    Nodes already re-rendered as part of an ancestor's pass are skipped.
    Exceptions raised while rendering propagate to the caller.
    """
    from .debug import start_trace, end_trace

    while rerender_queue:
        ctx = rerender_queue.popleft()
        _enqueued.discard(ctx)
        if not getattr(ctx, "_mounted", True) or not getattr(ctx, "_dirty", True):
            continue
        start_trace(ctx, getattr(ctx, "_debug_reasons", []))
        # Clear reasons once consumed
        ctx._debug_reasons = []
        try:
            ctx.rerender()
            await ctx.run_effects()
        finally:
            end_trace()


async def mount(component_fn, **props):
    """Create a root node for ``component_fn``, render it and run its effects."""
    from .hook import HookContext  # import here to avoid infinite loop

    root = HookContext(component_fn.__name__, component_fn, props=props)
    schedule_rerender(root, reason="mount")
    await run_renders()
    return root
