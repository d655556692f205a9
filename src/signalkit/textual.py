"""Textual integration for signalkit. Opt-in — requires textual.

Guards effects that touch widgets: skipped while the app is not running or
its widget tree is paused for replacement, NoMatches from widget queries
swallowed, and runs triggered from another thread marshaled through
app.call_from_thread. Textual coupling stays in this module; the core
engine is UI-agnostic.
"""

import logging
import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

from signalkit._tracking import current_computation, untrack
from signalkit.effect import create_effect

logger = logging.getLogger("signalkit.textual")

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded effects during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _guard(app, fn):
    """Wrap fn so it only runs when app is safe, on the app's thread."""
    _main = threading.get_ident()

    def _safe(*args):
        try:
            fn(*args)
        except NoMatches:
            logger.debug("Widget not mounted, skipping %r", fn)

    def _guarded(*args):
        if not is_safe(app):
            logger.debug("App not safe, skipping %r", fn)
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, *args)
        else:
            _safe(*args)

    return _guarded


def effect(app, fn):
    """create_effect() that safely bridges to Textual widgets.

    While the app is unsafe, or when a run is marshaled to the app's thread,
    the effect re-reads the signals from its last guarded run so it keeps
    tracking them. An effect created while the app is unsafe has nothing to
    track until it is re-created.
    """
    _main = threading.get_ident()
    tracked: list = []

    def _safe():
        try:
            fn()
        except NoMatches:
            logger.debug("Widget not mounted, skipping %r", fn)

    def _keep_tracking():
        for signal in tracked:
            signal.get()

    def _run():
        if not is_safe(app):
            logger.debug("App not safe, skipping %r", fn)
            _keep_tracking()
            return
        if threading.get_ident() != _main:
            _keep_tracking()
            app.call_from_thread(_safe)
            return
        _safe()
        tracked[:] = current_computation.get()._dependencies

    return create_effect(_run)


def reaction(app, source, handler, *, fire_immediately=False):
    """Track source(); call handler(value) on change, guarded for Textual.

    source is read on every run, so the dependency survives pauses. handler
    runs untracked. Without fire_immediately the first run only establishes
    dependencies.
    """
    guarded = _guard(app, handler)
    skip = not fire_immediately

    def _run():
        nonlocal skip
        value = source()
        if skip:
            skip = False
            return
        untrack(lambda: guarded(value))

    return create_effect(_run)
