"""Read-only diagnostics for the active runtime. Opt-in — not imported by sigflow."""

from __future__ import annotations

from sigflow._runtime import current_runtime
from sigflow.effects import Effect


def current_effect() -> Effect | None:
    """The effect whose body is executing right now, if any."""
    return current_runtime().current_effect


def batch_depth() -> int:
    return current_runtime().batch_depth


def pending_count() -> int:
    """Effects queued for the next flush."""
    return len(current_runtime().pending)


def snapshot() -> dict[str, object]:
    runtime = current_runtime()
    return {
        "tracking": runtime.current_effect is not None,
        "batch_depth": runtime.batch_depth,
        "pending": len(runtime.pending),
    }
