"""Dependency tracking engine — the heart of signalkit.

Uses contextvars to track which computation is currently running, so any
Signal read during a run registers itself as a dependency of that run.

Scheduling: writes append observers to a flush queue. The queue exists only
for one update cycle, opened by the outermost run_updates() call and drained
in append order before that call returns. While a queue is open, nested
writes (from a batch, or from inside a running body) only enqueue.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator, TypeVar

if TYPE_CHECKING:
    from signalkit.effect import Computation

T = TypeVar("T")

logger = logging.getLogger("signalkit.scheduler")

# The currently-running computation (effect or memo).
# When set, any Signal.get() call registers itself as a dependency.
current_computation: contextvars.ContextVar[Computation | None] = contextvars.ContextVar(
    "current_computation", default=None
)

# Computations scheduled in the open update cycle. None between cycles.
_updates: list[Computation] | None = None

# Index of the next computation to run in _updates.
_cursor: int = 0


@contextmanager
def update_cycle() -> Iterator[None]:
    """Open an update cycle for the block, then drain it on exit.

    If a cycle is already open, the block just joins it: the outermost scope
    drains everything nested scopes enqueue. If the block raises, the queue is
    discarded without flushing.
    """
    global _updates, _cursor
    if _updates is not None:
        yield
        return

    _updates = []
    _cursor = 0
    try:
        yield
        _flush_updates()
    finally:
        queue, _updates = _updates, None
        stale = queue[_cursor:]
        if stale:
            logger.debug("Flush aborted: discarding %d pending computations", len(stale))
        for computation in stale:
            computation._pending = False
        _cursor = 0


def run_updates(fn: Callable[[], T]) -> T:
    """Run fn inside an update cycle, opening and draining one if needed."""
    with update_cycle():
        return fn()


def _flush_updates() -> None:
    """Run queued computations in append order, including ones queued mid-drain."""
    global _cursor
    while _cursor < len(_updates):
        computation = _updates[_cursor]
        _cursor += 1
        computation.run()
    if _cursor:
        logger.debug("Flushed %d computations", _cursor)


def enqueue(computation: Computation) -> None:
    """Schedule a computation in the open cycle, once per cycle."""
    if not computation._pending:
        computation._pending = True
        _updates.append(computation)


def untrack(fn: Callable[[], T]) -> T:
    """Run fn without recording any Signal reads as dependencies."""
    token = current_computation.set(None)
    try:
        return fn()
    finally:
        current_computation.reset(token)


def get_pending_count() -> int:
    """Number of computations waiting to run. Useful for testing."""
    if _updates is None:
        return 0
    return len(_updates) - _cursor
