"""Batches — grouped writes with a single coalesced flush.

Writes made inside batch(), an @action or `with transaction()` queue their
subscribers instead of running them. When the outermost scope exits, the
queue is drained: every queued effect runs at most once, no matter how many
of its dependencies changed. Effects that write during the flush queue more
work, which is drained in the same flush.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import Callable, Iterator, ParamSpec, TypeVar

from sigflow._runtime import current_runtime

P = ParamSpec("P")
R = TypeVar("R")


def batch(fn: Callable[[], R]) -> R:
    """Run fn with notifications deferred until it returns. Returns fn's result.

    Usage:
        a, b = signal(1), signal(2)
        effect(lambda: print(a.read() + b.read()))   # 3
        batch(lambda: (a.set(10), b.set(20)))        # 30, printed once
    """
    runtime = current_runtime()
    runtime.begin_batch()
    try:
        return fn()
    finally:
        runtime.end_batch()


def action(fn: Callable[P, R]) -> Callable[P, R]:
    """Decorator: batch all signal writes inside fn.

    Usage:
        @action
        def swap():
            x, y = a.peek(), b.peek()
            a.set(y)
            b.set(x)
    """

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        return batch(lambda: fn(*args, **kwargs))

    return wrapper


@contextmanager
def transaction() -> Iterator[None]:
    """Context manager for batching writes.

    Usage:
        with transaction():
            a.set(1)
            b.set(2)
            # effects run here, after both are set
    """
    runtime = current_runtime()
    runtime.begin_batch()
    try:
        yield
    finally:
        runtime.end_batch()
