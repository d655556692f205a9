"""Batches, actions and transactions — coalesced signal writes.

Every write inside a batch still schedules its observers, but nothing runs
until the outermost batch scope exits; then a single flush drains the
deduplicated queue. An effect reading two signals written in one batch runs
once, not twice.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import Callable, ParamSpec, TypeVar

from signalkit._tracking import run_updates, update_cycle

P = ParamSpec("P")
R = TypeVar("R")


def batch(fn: Callable[[], R]) -> R:
    """Run fn with all its writes sharing one flush. Returns fn's result."""
    return run_updates(fn)


def action(fn: Callable[P, R]) -> Callable[P, R]:
    """Decorator: batch all signal writes inside fn.

    Effects only fire after fn returns, not during.

    Usage:
        a, set_a = create_signal(0)
        b, set_b = create_signal(0)

        @action
        def swap():
            set_a(b())
            set_b(a())
            # effects see both changes at once, not one at a time
    """

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        return batch(lambda: fn(*args, **kwargs))

    return wrapper


@contextmanager
def transaction():
    """Context manager for batching writes.

    Usage:
        with transaction():
            set_a(1)
            set_b(2)
            # effects fire here, after both are set
    """
    with update_cycle():
        yield
