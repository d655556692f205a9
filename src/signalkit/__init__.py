"""signalkit: fine-grained synchronous reactive signals for Python."""

from importlib.metadata import version as _version

__version__ = _version("signalkit")

from signalkit._tracking import get_pending_count, untrack
from signalkit.signal import Signal, create_signal, set_scheduler
from signalkit.effect import Computation, cleanup, create_effect
from signalkit.memo import create_memo, memo
from signalkit.batch import action, batch, transaction
# textual NOT auto-imported — opt-in only

__all__ = [
    "Signal",
    "create_signal",
    "Computation",
    "create_effect",
    "cleanup",
    "create_memo",
    "memo",
    "batch",
    "action",
    "transaction",
    "untrack",
    "get_pending_count",
    "set_scheduler",
]
