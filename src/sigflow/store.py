"""Store — one independent Signal per field of a record.

A Store is a read-only mapping from field name to Signal, with attribute
access for convenience. Fields are not linked to each other: writing one
notifies only the readers of that field.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from sigflow.action import batch
from sigflow.signals import Signal


class Store(Mapping[str, Signal]):
    """Key-based Signal container."""

    __slots__ = ("_signals",)

    def __init__(self, initial: Mapping[str, Any]) -> None:
        self._signals: dict[str, Signal] = {key: Signal(value) for key, value in initial.items()}

    def __getitem__(self, key: str) -> Signal:
        return self._signals[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._signals)

    def __len__(self) -> int:
        return len(self._signals)

    def __getattr__(self, name: str) -> Signal:
        # Only reached for names that aren't real attributes; fields named
        # like Mapping methods ("keys", "items", ...) need item access.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._signals[name]
        except KeyError:
            raise AttributeError(name) from None

    def snapshot(self) -> dict[str, Any]:
        """Current values as a plain dict. Untracked."""
        return {key: sig.peek() for key, sig in self._signals.items()}

    def update(self, values: Mapping[str, Any]) -> None:
        """Write several fields in one batch. Unknown keys raise KeyError."""
        missing = [key for key in values if key not in self._signals]
        if missing:
            raise KeyError(", ".join(missing))

        def _write_all() -> None:
            for key, value in values.items():
                self._signals[key].set(value)

        batch(_write_all)

    def __repr__(self) -> str:
        return f"Store({self.snapshot()!r})"


def store(initial: Mapping[str, Any]) -> Store:
    """Create a Store with one Signal per key.

    Usage:
        state = store({"count": 0, "name": "Ada"})
        state.count.read()         # 0
        state["name"].set("Grace")
    """
    return Store(initial)
