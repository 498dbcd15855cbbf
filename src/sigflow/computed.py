"""Computed values — signals kept in sync by their own effect.

A Computed wraps a function. It is evaluated eagerly at construction and
re-evaluated whenever one of the signals the function read changes; reads
just return the cached value. Because the work lives in a dedicated effect,
an effect that reads a Computed does not cause it to recompute.
"""

from __future__ import annotations

from typing import Callable, NoReturn, TypeVar

from sigflow.effects import effect
from sigflow.signals import Kind, Signal

T = TypeVar("T")


class Computed(Signal[T]):
    """A read-only signal derived from other signals."""

    __slots__ = ("_fn", "_dispose")

    kind = Kind.COMPUTED

    def __init__(self, fn: Callable[[], T]) -> None:
        super().__init__(None)
        self._fn = fn
        self._dispose = effect(lambda: self._write(fn()))

    def set(self, value: T) -> NoReturn:
        raise AttributeError("Computed values are read-only")

    def update(self, fn: Callable[[T], T]) -> NoReturn:
        raise AttributeError("Computed values are read-only")

    def dispose(self) -> None:
        """Stop recomputing. The last value stays readable."""
        self._dispose()

    def __repr__(self) -> str:
        name = getattr(self._fn, "__name__", repr(self._fn))
        return f"Computed({name}, {self._value!r})"


def computed(fn: Callable[[], T]) -> Computed[T]:
    """Decorator/factory to create a Computed from a function.

    Usage:
        count = signal(0)

        @computed
        def doubled():
            return count.read() * 2

        doubled.read()  # 0
        count.set(5)
        doubled.read()  # 10
    """
    return Computed(fn)
