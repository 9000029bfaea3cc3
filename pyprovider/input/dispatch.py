from typing import Callable, Iterator, List, Tuple

from pyprovider.core.hook import HookContext

EVENT_PREFIX = "on_"


def event_handlers(ctx: HookContext) -> dict:
    """Map event name -> handler for the ``on_*`` callables in ``ctx.props``."""
    return {
        k[len(EVENT_PREFIX):]: v
        for k, v in ctx.props.items()
        if k.startswith(EVENT_PREFIX) and callable(v)
    }


def is_host(ctx: HookContext) -> bool:
    return getattr(ctx.component_fn, "__is_html_tag__", False)


def node_id(ctx: HookContext) -> str:
    """Position of ``ctx`` below the root, e.g. ``"0.0.1"``; the root is ``""``."""
    parts: List[str] = []
    node = ctx
    while node.parent is not None:
        parts.append(str(node.parent.children.index(node)))
        node = node.parent
    return ".".join(reversed(parts))


def iter_targets(root: HookContext, event: str = "click") -> Iterator[Tuple[str, HookContext]]:
    """Yield ``(node_id, ctx)`` for every host element handling ``event``, in document order.

    Logical components that merely pass a handler down are not targets; only
    the elements the renderer tags with ``data-pr-id`` are.
    """
    stack: List[Tuple[str, HookContext]] = [("", root)]
    while stack:
        path, ctx = stack.pop()
        if is_host(ctx) and event in event_handlers(ctx):
            yield path, ctx
        prefix = f"{path}." if path else ""
        for idx in range(len(ctx.children) - 1, -1, -1):
            stack.append((f"{prefix}{idx}", ctx.children[idx]))


def find_target(root: HookContext, target: str) -> HookContext:
    node = root
    if target:
        for part in target.split("."):
            if not part.isdigit():
                raise KeyError(f"no node at {target!r}")
            try:
                node = node.children[int(part)]
            except IndexError:
                raise KeyError(f"no node at {target!r}") from None
    return node


def dispatch(root: HookContext, target: str, event: str = "click"):
    """Invoke the ``on_<event>`` handler of the host element at ``target``.

    Raises ``KeyError`` when there is no such element or it does not handle ``event``.
    """
    ctx = find_target(root, target)
    handler: Callable = event_handlers(ctx).get(event) if is_host(ctx) else None
    if handler is None:
        raise KeyError(f"node {target!r} does not handle {event!r}")
    return handler()
