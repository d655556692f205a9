"""Effects — side-effecting computations re-run when their signals change.

Every run starts from a clean slate: the computation drops all of its
dependency edges and disposes every child computation it created last time,
then re-invokes its body, which rebuilds both from the code path actually
taken. Dependencies are recomputed on each run, never accumulated.

Effects created while another computation is running are owned by it and are
disposed whenever the owner re-runs or is itself disposed.
"""

from __future__ import annotations

from typing import Any, Callable

from signalkit._tracking import current_computation, run_updates


class Computation:
    """A re-runnable tracked function: an effect, or the body behind a memo."""

    __slots__ = ("_fn", "_dependencies", "_owner", "_owned", "_pending", "_disposed")

    def __init__(self, fn: Callable[[], Any], owner: Computation | None = None) -> None:
        self._fn = fn
        self._dependencies: set = set()
        self._owner = owner
        self._owned: list[Computation] = []
        self._pending = False
        self._disposed = False
        if owner is not None:
            owner._owned.append(self)

    @property
    def owner(self) -> Computation | None:
        return self._owner

    @property
    def owned(self) -> tuple[Computation, ...]:
        """Children created during the most recent run, in creation order."""
        return tuple(self._owned)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def run(self) -> None:
        """Tear down, then re-invoke the body, tracking reads and children."""
        if self._disposed:
            return

        cleanup(self)

        token = current_computation.set(self)
        try:
            run_updates(self._fn)
        finally:
            current_computation.reset(token)

    def dispose(self) -> None:
        """Stop this computation. Disconnects from all dependencies and children."""
        self._disposed = True
        cleanup(self)

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        name = getattr(self._fn, "__name__", repr(self._fn))
        return f"Computation({name}, {state})"


def cleanup(computation: Computation) -> None:
    """Remove every dependency edge and dispose every owned child."""
    for dep in computation._dependencies:
        dep._remove_observer(computation)
    computation._dependencies.clear()

    for child in computation._owned:
        child.dispose()
    computation._owned.clear()

    computation._pending = False


def create_effect(fn: Callable[[], Any]) -> Computation:
    """Run fn immediately, then re-run it whenever any signal it read changes.

    Returns the Computation (call .dispose() to stop). Callers that only care
    about the side effect can ignore it.

    Usage:
        count, set_count = create_signal(0)
        log = []

        create_effect(lambda: log.append(count()))
        # log == [0] — ran immediately

        set_count(1)
        # log == [0, 1] — re-ran because count changed
    """
    computation = Computation(fn, owner=current_computation.get())
    computation.run()
    return computation
