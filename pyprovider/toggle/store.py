from typing import Callable, List, Optional


class ToggleValue:
    """The ``{on, toggle}`` pair broadcast by ``Toggle``.

    Compared by identity only: a new object means the state changed.
    """

    __slots__ = ("on", "toggle")

    def __init__(self, on: bool, toggle: Callable[[], None]) -> None:
        self.on = on
        self.toggle = toggle

    def __repr__(self):
        return f"ToggleValue(on={self.on!r})"


def log_on_toggle(on: bool) -> None:
    print("onToggle", on)


class ToggleStateStore:
    """Boolean state owned by a ``Toggle``.

    ``toggle()`` always flips the committed state, notifies listeners, then
    calls ``on_toggle`` with the new value; once the store is closed it does
    nothing. ``value`` is rebuilt only when
    ``on`` changes, and its ``toggle`` is the same callable for the lifetime
    of the store.
    """

    def __init__(
        self,
        on_toggle: Optional[Callable[[bool], None]] = None,
        *,
        initial: bool = False,
    ) -> None:
        self.on_toggle = on_toggle
        self._on = bool(initial)
        self._listeners: List[Callable[[bool], None]] = []
        self._closed = False
        self._value: Optional[ToggleValue] = None
        # bound methods are recreated on every attribute access
        self._toggle = self.toggle

    @property
    def on(self) -> bool:
        return self._on

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def value(self) -> ToggleValue:
        if self._value is None or self._value.on != self._on:
            self._value = ToggleValue(self._on, self._toggle)
        return self._value

    def toggle(self) -> None:
        if self._closed:
            return
        self._on = not self._on
        for listener in list(self._listeners):
            listener(self._on)
        if self.on_toggle is not None:
            self.on_toggle(self._on)

    def subscribe(self, listener: Callable[[bool], None]):
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe():
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def close(self) -> None:
        self._listeners.clear()
        self._closed = True

    def __enter__(self) -> "ToggleStateStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
