"""Runtime context — the dependency tracker and batch scheduler.

A Runtime owns every piece of mutable reactive state: which effect is
currently executing (reads register against it), which root scope collects
new disposers, and the batch queue.

The active runtime lives in a contextvar. Signals and effects bind the
runtime that was active when they were created, so independent graphs
(one per test, say) never see each other's state.

Batching: writes made while batch_depth > 0 queue their subscribers in
`pending`. When the outermost batch exits, the queue is flushed, running
each subscriber at most once per flush.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator

if TYPE_CHECKING:
    from sigflow.effects import Effect

logger = logging.getLogger(__name__)

Handle = Callable[[], None]
Disposer = Callable[[], None]


class Runtime:
    """Explicitly owned reactive state for one graph."""

    __slots__ = ("current_effect", "current_scope", "batch_depth", "pending", "flushed")

    def __init__(self) -> None:
        self.current_effect: Effect | None = None
        self.current_scope: list[Disposer] | None = None
        self.batch_depth: int = 0
        self.pending: set[Handle] = set()
        self.flushed: set[Handle] = set()

    # --- Tracking ---

    @contextmanager
    def tracking(self, effect: Effect | None) -> Iterator[None]:
        """Install `effect` as the current effect for the block. None untracks.

        Also activates this runtime, so signals, effects and untrack() calls
        made by the body land in the same graph.
        """
        prev = self.current_effect
        self.current_effect = effect
        token = _active.set(self)
        try:
            yield
        finally:
            _active.reset(token)
            self.current_effect = prev

    @contextmanager
    def scope(self, disposers: list[Disposer] | None) -> Iterator[None]:
        """Install `disposers` as the active root scope for the block."""
        prev = self.current_scope
        self.current_scope = disposers
        try:
            yield
        finally:
            self.current_scope = prev

    # --- Scheduling ---

    def notify(self, subscribers: set[Handle]) -> None:
        """Run subscribers now, or queue them if a batch is open."""
        if self.batch_depth > 0:
            self.pending.update(subscribers)
            return
        # Snapshot — handles may (un)subscribe while running. A handle
        # removed by an earlier one is skipped.
        for handle in list(subscribers):
            if handle in subscribers:
                handle()

    def begin_batch(self) -> None:
        """Enter a batching scope. Nested batches are supported."""
        self.batch_depth += 1

    def end_batch(self) -> None:
        """Exit a batching scope. The outermost exit flushes pending handles."""
        self.batch_depth -= 1
        if self.batch_depth == 0:
            self._flush()

    def _flush(self) -> None:
        # Held at 1 so writes made by flushing effects queue instead of cascading.
        self.batch_depth = 1
        self.flushed.clear()
        passes = 0
        try:
            while self.pending:
                passes += 1
                batch = list(self.pending)
                self.pending.clear()
                for handle in batch:
                    if handle in self.flushed:
                        continue
                    self.flushed.add(handle)
                    handle()
        except BaseException:
            if self.pending:
                logger.warning(
                    "Flush aborted by an effect error; dropping %d queued effect(s)",
                    len(self.pending),
                )
                self.pending.clear()
            raise
        finally:
            logger.debug("Flushed %d effect(s) in %d pass(es)", len(self.flushed), passes)
            self.flushed.clear()
            self.batch_depth = 0

    def __repr__(self) -> str:
        return (
            f"Runtime(depth={self.batch_depth}, pending={len(self.pending)}, "
            f"tracking={self.current_effect is not None})"
        )


_default = Runtime()

_active: contextvars.ContextVar[Runtime] = contextvars.ContextVar(
    "sigflow_runtime", default=_default
)


def current_runtime() -> Runtime:
    """The runtime new signals and effects bind to."""
    return _active.get()


@contextmanager
def use_runtime(runtime: Runtime | None = None) -> Iterator[Runtime]:
    """Activate `runtime` (a fresh one if omitted) for the block.

    Usage:
        with use_runtime() as rt:
            count = signal(0)      # bound to rt
            effect(lambda: print(count.read()))
    """
    runtime = runtime if runtime is not None else Runtime()
    token = _active.set(runtime)
    try:
        yield runtime
    finally:
        _active.reset(token)


def get_pending_count() -> int:
    """Number of effects waiting in the active runtime's batch queue. Useful for testing."""
    return len(_active.get().pending)
