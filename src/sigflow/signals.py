"""Signals — mutable value cells that track their readers.

When a Signal is read inside an effect, that effect is registered as a
subscriber. When the Signal is set to a different object, every subscriber
re-runs (or is queued, inside a batch).

Change detection is by identity: setting the very same object is a no-op,
setting an equal but distinct object (a new list, say) notifies. Immutable
scalars compare by value, so `set(1000)` over an existing 1000 is a no-op
however the int was produced. NaN counts as unchanged; 0.0 and -0.0 are
different values.
"""

from __future__ import annotations

import enum
import math
from typing import Any, Callable, Generic, TypeVar

from sigflow._runtime import Handle, current_runtime

T = TypeVar("T")

_SCALARS = frozenset({int, float, complex, str, bytes, bool, type(None)})


def _same(old: object, new: object) -> bool:
    if old is new:
        return True
    if type(old) is not type(new) or type(old) not in _SCALARS:
        return False
    if old != old and new != new:  # NaN
        return True
    if type(old) is float:
        return old == new and math.copysign(1.0, old) == math.copysign(1.0, new)
    return old == new


class Kind(enum.Enum):
    """Capability marker carried by every signal handle."""

    SIGNAL = "signal"
    COMPUTED = "computed"


class Signal(Generic[T]):
    """A single reactive value with automatic dependency tracking."""

    __slots__ = ("_value", "_subscribers", "_runtime")

    kind = Kind.SIGNAL

    def __init__(self, value: T) -> None:
        self._value = value
        self._subscribers: set[Handle] = set()
        self._runtime = current_runtime()

    def read(self) -> T:
        """Read the value. If inside an effect, registers the dependency."""
        effect = self._runtime.current_effect
        if effect is not None:
            self._subscribers.add(effect)
            effect._dependencies.add(self)
        return self._value

    @property
    def value(self) -> T:
        return self.read()

    def peek(self) -> T:
        """Read the value without registering a dependency."""
        return self._value

    def set(self, value: T) -> None:
        """Write a new value and notify subscribers if it changed."""
        self._write(value)

    def update(self, fn: Callable[[T], T]) -> None:
        """Write fn(current value)."""
        self._write(fn(self._value))

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a plain callback, run on every change. Returns an unsubscriber."""
        self._subscribers.add(callback)

        def _unsubscribe() -> None:
            self._subscribers.discard(callback)

        return _unsubscribe

    def _write(self, value: T) -> None:
        if _same(self._value, value):
            return
        self._value = value
        self._runtime.notify(self._subscribers)

    def _remove_subscriber(self, handle: Handle) -> None:
        """Called by effects dropping a stale dependency."""
        self._subscribers.discard(handle)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


def signal(initial: T) -> Signal[T]:
    """Create a Signal.

    Usage:
        count = signal(0)
        count.read()          # 0
        count.set(5)
        count.update(lambda n: n + 1)
        count.peek()          # 6, untracked
    """
    return Signal(initial)


def is_signal(obj: Any) -> bool:
    """True for Signal and Computed handles."""
    return isinstance(obj, Signal)


def is_computed(obj: Any) -> bool:
    return is_signal(obj) and obj.kind is Kind.COMPUTED
