"""Signals — observable value cells that track their readers.

When a Signal is read inside a running effect or memo, the dependency is
registered on both sides. When the Signal is written, every observer is
scheduled for re-run and the update cycle is flushed (or left to the
enclosing batch/flush to drain).

Thread safety: call set_scheduler() once from the owning thread. After that,
any .set() from a background thread is auto-marshaled. Owning-thread .set()
remains synchronous.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from signalkit._tracking import current_computation, enqueue, run_updates

if TYPE_CHECKING:
    from signalkit.effect import Computation

T = TypeVar("T")

logger = logging.getLogger("signalkit.signal")

# ─── Auto-marshal ────────────────────────────────────────────────────────────
_scheduler = None
_scheduler_thread = None


def set_scheduler(scheduler) -> None:
    """Set the global thread scheduler for cross-thread Signal writes.

    Call once from the thread that owns the reactive graph:
        signalkit.set_scheduler(app.call_from_thread)

    After this, any Signal.set() from another thread is handed to the
    scheduler. Pass None to turn marshaling off.
    """
    global _scheduler, _scheduler_thread
    _scheduler = scheduler
    _scheduler_thread = threading.current_thread() if scheduler is not None else None


class Signal(Generic[T]):
    """A single observable value with automatic dependency tracking."""

    __slots__ = ("_value", "_observers")

    def __init__(self, value: T | None = None) -> None:
        self._value = value
        # Insertion-ordered set: observers are scheduled in subscription order.
        self._observers: dict[Computation, None] = {}

    def get(self) -> T:
        """Read the value. If inside a computation, registers the dependency."""
        computation = current_computation.get()
        if computation is not None and not computation._disposed:
            self._observers[computation] = None
            computation._dependencies.add(self)
        return self._value

    def set(self, value: T) -> None:
        """Write a new value. Auto-marshals from background threads."""
        if _scheduler is not None and threading.current_thread() != _scheduler_thread:
            logger.debug("Marshaling write to %s", _scheduler_thread.name)
            _scheduler(lambda v=value: self._set_direct(v))
        else:
            self._set_direct(value)

    def _set_direct(self, value: T) -> None:
        """Store the value and schedule observers. No equality check."""
        self._value = value
        if self._observers:
            run_updates(self._notify)

    def _notify(self) -> None:
        for observer in list(self._observers):
            enqueue(observer)

    def _remove_observer(self, observer: Computation) -> None:
        """Remove an observer. Called during computation teardown."""
        self._observers.pop(observer, None)

    def __repr__(self) -> str:
        return f"Signal({self._value!r})"


def create_signal(value: T | None = None) -> tuple[Callable[[], T], Callable[[T], None]]:
    """Create a Signal and return its (read, write) pair.

    Usage:
        count, set_count = create_signal(0)
        count()       # 0
        set_count(5)
        count()       # 5
    """
    signal: Signal[T] = Signal(value)
    return signal.get, signal.set
