from dataclasses import dataclass
from typing import Any, Callable, Union


@dataclass(frozen=True, eq=False)
class Static:
    """Children rendered as given, whatever the provided value is."""

    tree: Any

    def resolve(self, value):
        return self.tree


@dataclass(frozen=True, eq=False)
class Dynamic:
    """Children produced by calling ``render(value)`` on every render."""

    render: Callable[[Any], Any]

    def resolve(self, value):
        return self.render(value)


Children = Union[Static, Dynamic]


def as_children(children) -> Children:
    """Wrap raw children by runtime kind: callables are ``Dynamic``, the rest ``Static``."""
    if isinstance(children, (Static, Dynamic)):
        return children
    if callable(children):
        return Dynamic(children)
    return Static(children)
