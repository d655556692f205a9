"""Memos — cached derived values that are both consumer and producer.

A memo is a Signal with no exposed setter, fed by an effect that writes the
result of fn() into it. Because the feeding effect goes through the same
scheduler as every other computation, a memo recomputes at most once per
flush, and its readers are only scheduled when it actually writes.

Memos are eager — they compute once on creation and again whenever a
dependency changes, not on read.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from signalkit.effect import create_effect
from signalkit.signal import Signal

T = TypeVar("T")


def create_memo(fn: Callable[[], T]) -> Callable[[], T]:
    """Return a reader for the cached result of fn.

    Reading it inside a computation tracks it like any signal; reading it
    repeatedly without a dependency change returns the cached value.
    """
    signal: Signal[T] = Signal()
    create_effect(lambda: signal.set(fn()))
    return signal.get


def memo(fn: Callable[[], T]) -> Callable[[], T]:
    """Decorator form of create_memo.

    Usage:
        count, set_count = create_signal(3)

        @memo
        def doubled():
            return count() * 2

        doubled()  # 6
        set_count(5)
        doubled()  # 10
    """
    return create_memo(fn)
