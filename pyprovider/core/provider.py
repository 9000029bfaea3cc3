from functools import wraps
from pyprovider.core.core import component, hooks, lookup_scope


class _Unset:
    """Value seen by a Consumer rendered with no Provider above it."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "UNSET"


UNSET = _Unset()


def provider(context, *, prop="value"):
    def decorator(body_fn):
        @component
        @wraps(body_fn)
        def wrapper(**props):
            try:
                value = props.pop(prop)
            except KeyError:
                raise TypeError(f"Provider missing required prop '{prop}'")

            # visible to the children of this node for the current render pass
            hooks.provide(context, value)

            return body_fn(**props)

        return wrapper

    return decorator


class Context:
    """A Provider/Consumer pair sharing one slot.

    ``Provider(value=..., children=...)`` broadcasts ``value`` to every
    ``Consumer`` nested under it; ``Consumer(children=fn)`` renders
    ``fn(value)`` with the nearest provided value, or ``default`` when there
    is none.
    """

    def __init__(self, *, default=UNSET, name="Context", prop="value"):
        self.name = name
        self.default = default
        self.prop = prop

        @provider(self, prop=prop)
        def _Provider(children=None, **rest):
            # rest stays on this node's props, untouched
            return children

        @component
        def _Consumer(children=None, **rest):
            if not callable(children):
                raise TypeError(f"{name}.Consumer expects a function as children")
            return children(hooks.use_context(self))

        _Provider.__name__ = f"{name}.Provider"
        _Consumer.__name__ = f"{name}.Consumer"
        self.Provider = _Provider
        self.Consumer = _Consumer

    def get(self):
        """Value in scope for the node currently rendering (or ``default``)."""
        found = lookup_scope(self)
        return self.default if found is None else found[0]

    def __call__(self, **props):
        return self.Provider(**props)

    def __repr__(self):
        return f"<Context {self.name!r} default={self.default!r}>"


def create_context(*, default=UNSET, name="Context", prop="value"):
    return Context(default=default, name=name, prop=prop)
