from typing import Callable, TypedDict, Literal


class Event(TypedDict, total=False):
    type: Literal["click"]  # expand if desired
    target: str
    source: Literal["web", "term"]
    ts: float


Subscriber = Callable[[Event], None]


class InputBus:
    """Input bus (thread-safe enough for use with ``asyncio``).

    Subscriber errors propagate to the emitter.
    """

    def __init__(self):
        self._subs: list[Subscriber] = []

    def subscribe(self, fn: Subscriber):
        if fn not in self._subs:
            self._subs.append(fn)

        def unsubscribe():
            try:
                self._subs.remove(fn)
            except ValueError:
                pass

        return unsubscribe

    def emit(self, ev: Event) -> None:
        for fn in list(self._subs):
            fn(ev)
