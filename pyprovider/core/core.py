# core.py ----------------------------------------------------
from contextvars import ContextVar
from functools import wraps

_context_stack = ContextVar("component_context", default=None)

# channel key -> (value, providing HookContext), for the subtree being rendered
_scope_stack = ContextVar("provider_scope", default={})


class _HookProxy:

    def __getattr__(self, name):
        # ensure the correct component instance is used in the hook (set in HookContext.render)
        comp = _context_stack.get()
        if comp is None:
            raise RuntimeError(
                f"hook.{name}() can only be used during render or effect."
            )
        return getattr(comp, name)

hooks = _HookProxy()


class VNode:
    def __init__(self, component_fn, props=None, key=None):
        self.component_fn = component_fn
        self.props = props or {}
        self.key = key

    def __repr__(self):
        return f"<VNode {getattr(self.component_fn, '__name__', '?')} key={self.key!r}>"


def component(fn):
    @wraps(fn)
    def wrapper(*, key=None, **props):
        return VNode(wrapper, props=props, key=key)

    wrapper.render_fn = fn
    return wrapper


@component
def Text(value=""):
    return []

Text.__is_text_node__ = True


def normalize_output(output):
    """Flatten a component's return value into a list of ``VNode``.

    Strings become ``Text`` nodes, nested lists/tuples are flattened and
    ``None``/``False`` are dropped.
    """
    out = []
    stack = [output]
    while stack:
        item = stack.pop()
        if item is None or item is False or item is True:
            continue
        if isinstance(item, (list, tuple)):
            stack.extend(reversed(item))
        elif isinstance(item, VNode):
            out.append(item)
        elif isinstance(item, str):
            out.append(Text(value=item))
        else:
            out.append(Text(value=str(item)))
    return out


# ---------------- provider scopes ----------------
def lookup_scope(channel_key):
    """Return ``(value, provider_ctx)`` for the nearest provider, or ``None``."""
    return _scope_stack.get().get(channel_key)


def push_scope(provider_ctx, provides: dict):
    scopes = dict(_scope_stack.get())
    for channel_key, value in provides.items():
        scopes[channel_key] = (value, provider_ctx)
    return _scope_stack.set(scopes)


def replace_scope(scopes: dict):
    return _scope_stack.set(dict(scopes))


def pop_scope(token) -> None:
    _scope_stack.reset(token)
