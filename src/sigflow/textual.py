"""Textual integration for sigflow. Opt-in — requires textual.

Effects that touch widgets must not run while the widget tree is being
rebuilt, must tolerate widgets that are not mounted (yet), and must run on
the app's thread. The helpers here enforce all of that so callsites don't.

Pause state is owned by this module, keyed by id(app), so several apps can
coexist in tests without attributes being set on them.

Effects created before the app is running (usually at compose time) have
nothing to subscribe to until their first real run. They wait per app and
run on resume(app), which pause() also calls on exit. Call resume(app) from
on_mount.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator, TypeVar

from textual.css.query import NoMatches

from sigflow._runtime import current_runtime
from sigflow.effects import effect as _effect
from sigflow.effects import on as _on
from sigflow.signals import Signal

if TYPE_CHECKING:
    from sigflow.effects import Effect

logger = logging.getLogger(__name__)

T = TypeVar("T")

_paused_apps: set[int] = set()
_waiting: dict[int, list[Effect]] = {}


@contextmanager
def pause(app) -> Iterator[None]:
    """Suspend bridged effects during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)
    if is_safe(app):
        resume(app)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def resume(app) -> None:
    """Run bridged effects that were created while the app was unsafe."""
    for runner in _waiting.pop(id(app), []):
        runner()


def _bridge(app, fn: Callable[..., T]) -> Callable[..., T | None]:
    """Wrap fn: swallow NoMatches, marshal calls made off the app's thread."""
    main = threading.get_ident()

    def _safe(*args):
        try:
            return fn(*args)
        except NoMatches as exc:
            logger.debug("Skipped effect for unmounted widget: %s", exc)
            return None

    def _call(*args):
        if threading.get_ident() != main:
            return app.call_from_thread(_safe, *args)
        return _safe(*args)

    return _call


def effect(app, fn: Callable[[], object]) -> Callable[[], None]:
    """effect() that safely bridges to Textual widgets.

    While the app is paused or not running the body is skipped, but the
    effect stays subscribed to whatever it read on its last real run. An
    effect that never had a real run waits for resume(app).
    """
    call = _bridge(app, fn)
    last_read: list[Signal] = []
    ran = False

    def _guarded():
        nonlocal ran
        runner = current_runtime().current_effect
        if not is_safe(app):
            if not ran:
                _waiting.setdefault(id(app), []).append(runner)
            for sig in last_read:
                sig.read()
            return None
        ran = True
        result = call()
        last_read[:] = runner._dependencies
        return result

    return _effect(_guarded)


def on(app, sig: Signal[T], fn: Callable[[T, T], object]) -> Callable[[], None]:
    """on() that safely bridges to Textual widgets."""
    call = _bridge(app, fn)

    def _guarded(value: T, previous: T):
        if not is_safe(app):
            return None
        return call(value, previous)

    return _on(sig, _guarded)
