"""
Observable cells: the single-value reactive containers every piece of room
state lives in.

Notification is synchronous and in subscription order. Subscribing invokes
the callback once with the current value straight away.
"""

from typing import Any, Callable, Generic, Protocol, TypeVar

T = TypeVar("T")
U = TypeVar("U")
T_co = TypeVar("T_co", covariant=True)

Subscriber = Callable[[T], None]
Unsubscriber = Callable[[], None]


class Readable(Protocol[T_co]):
    def subscribe(self, callback: Callable[[T_co], None]) -> Unsubscriber: ...

    def get(self) -> T_co: ...


class Writable(Generic[T]):
    def __init__(self, value: T):
        self._value = value
        self._subscribers: list[Subscriber[T]] = []

    def get(self) -> T:
        """Current value, without going through a subscription."""
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        # Copy so that (un)subscribing from inside a callback only affects the next round
        for callback in list(self._subscribers):
            callback(value)

    def update(self, fn: Callable[[T], T]) -> None:
        self.set(fn(self._value))

    def subscribe(self, callback: Subscriber[T]) -> Unsubscriber:
        # Wrap so the same callable can be subscribed twice and removed independently
        def entry(value: T) -> None:
            callback(value)

        self._subscribers.append(entry)
        callback(self._value)

        def unsubscribe() -> None:
            try:
                self._subscribers.remove(entry)
            except ValueError:
                pass
        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"Writable({self._value!r})"


class Derived(Generic[T, U]):
    """Read-only cell computed from another cell, re-evaluated on every change."""

    def __init__(self, source: Readable[T], fn: Callable[[T], U]):
        self._source = source
        self._fn = fn

    def get(self) -> U:
        return self._fn(self._source.get())

    def subscribe(self, callback: Callable[[U], None]) -> Unsubscriber:
        return self._source.subscribe(lambda value: callback(self._fn(value)))

    def __repr__(self) -> str:
        return f"Derived({self.get()!r})"


def snapshot(cells: dict[str, Readable[Any]]) -> dict[str, Any]:
    """Read several cells at once, e.g. for rendering a status line."""
    return {name: cell.get() for name, cell in cells.items()}
