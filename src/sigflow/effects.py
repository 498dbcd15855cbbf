"""Effects — side effects that re-run when the signals they read change.

An effect runs its function immediately, recording every signal read along
the way. When any of those signals changes, the effect re-runs and records
its dependencies afresh.

If the function returns a callable, that callable is the effect's cleanup:
it runs right before the next execution and once more on dispose.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeVar

from sigflow._runtime import current_runtime

if TYPE_CHECKING:
    from sigflow.signals import Signal

T = TypeVar("T")

Cleanup = Callable[[], None]
EffectFn = Callable[[], "Cleanup | None"]


class Effect:
    """A re-runnable side effect.

    Instances are the subscriber handles stored in signals: calling one
    re-runs it.
    """

    __slots__ = ("_fn", "_cleanup", "_disposed", "_dependencies", "_runtime")

    def __init__(self, fn: EffectFn) -> None:
        self._fn = fn
        self._cleanup: Cleanup | None = None
        self._disposed = False
        self._dependencies: set[Signal] = set()
        self._runtime = current_runtime()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __call__(self) -> None:
        self._run()

    def _run(self) -> None:
        """Re-run the function, re-tracking dependencies."""
        if self._disposed:
            return

        if self._cleanup is not None:
            cleanup, self._cleanup = self._cleanup, None
            cleanup()

        self._untrack_all()

        with self._runtime.tracking(self):
            result = self._fn()

        if self._disposed:
            # Disposed by its own body: drop reads made after dispose() and
            # run the cleanup now, nothing will call it later.
            self._untrack_all()
            if callable(result):
                result()
        elif callable(result):
            self._cleanup = result

    def dispose(self) -> None:
        """Stop this effect. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        self._untrack_all()
        if self._cleanup is not None:
            cleanup, self._cleanup = self._cleanup, None
            cleanup()

    def _untrack_all(self) -> None:
        for dep in self._dependencies:
            dep._remove_subscriber(self)
        self._dependencies.clear()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        name = getattr(self._fn, "__name__", repr(self._fn))
        return f"Effect({name}, {state})"


def effect(fn: EffectFn) -> Callable[[], None]:
    """Run fn now, then again whenever a signal it read changes.

    Returns a disposer. Inside root(), the disposer is also collected by the
    enclosing scope.

    Usage:
        count = signal(0)
        log = []

        dispose = effect(lambda: log.append(count.read()))
        # log == [0]

        count.set(1)
        # log == [0, 1]

        dispose()
        count.set(2)
        # log == [0, 1]
    """
    runner = Effect(fn)
    runner._run()
    disposer = runner.dispose
    scope = runner._runtime.current_scope
    if scope is not None:
        scope.append(disposer)
    return disposer


def untrack(fn: Callable[[], T]) -> T:
    """Run fn without registering any signal reads as dependencies."""
    with current_runtime().tracking(None):
        return fn()


def on(sig: Signal[T], fn: Callable[[T, T], "Cleanup | None"]) -> Callable[[], None]:
    """Call fn(value, previous) whenever sig changes.

    Only sig is tracked; signals read inside fn are not. On the first call
    previous is the current value.

    Usage:
        count = signal(0)
        on(count, lambda v, prev: print(f"{prev} -> {v}"))   # 0 -> 0
        count.set(5)                                         # 0 -> 5
    """
    previous = sig.peek()

    def _body() -> Cleanup | None:
        nonlocal previous
        value = sig.read()
        cleanup = untrack(lambda: fn(value, previous))
        previous = value
        return cleanup

    return effect(_body)
