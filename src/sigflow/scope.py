"""Root scopes — collect effect disposers for bulk release.

Every effect created while a root's function runs registers its disposer
with the innermost active root. Calling the root's dispose callback stops
all of them at once.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from sigflow._runtime import Disposer, current_runtime

logger = logging.getLogger(__name__)

T = TypeVar("T")


def root(fn: Callable[[Disposer], T]) -> T:
    """Run fn(dispose) inside a new scope and return its result.

    Usage:
        def setup(dispose):
            effect(lambda: print(count.read()))
            effect(lambda: print(name.read()))
            return dispose

        dispose = root(setup)
        dispose()   # stops both effects
    """
    runtime = current_runtime()
    disposers: list[Disposer] = []
    prev = runtime.current_scope

    def dispose() -> None:
        if disposers:
            logger.debug("Disposing root scope with %d disposer(s)", len(disposers))
        for disposer in disposers:
            disposer()
        disposers.clear()
        # Same pointer the exit path restores; setting it twice is harmless.
        runtime.current_scope = prev

    with runtime.scope(disposers):
        return fn(dispose)
