"""memo() — run-once cache for expensive, non-reactive computations."""

from __future__ import annotations

import functools
from typing import Callable, TypeVar

T = TypeVar("T")

_UNSET = object()


def memo(fn: Callable[[], T]) -> Callable[[], T]:
    """Return an accessor that calls fn on first use and caches the result.

    Unlike computed(), the cache never invalidates: signal changes are
    ignored. If fn raises, nothing is cached and the next call retries.

    Usage:
        table = memo(lambda: build_lookup_table())
        table()  # built
        table()  # cached
    """
    cached: object = _UNSET

    @functools.wraps(fn)
    def accessor() -> T:
        nonlocal cached
        if cached is _UNSET:
            cached = fn()
        return cached  # type: ignore[return-value]

    return accessor
