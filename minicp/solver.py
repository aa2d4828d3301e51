"""The constraint solver core: propagation queue and fixpoint loop."""

from __future__ import annotations

import itertools
from collections import deque
from enum import Enum, IntEnum
from typing import Any, Callable, NoReturn, Optional

from minicp.store import Storage
from minicp.trail import Trailer


class Failure(Exception):
    """Raised when propagation proves the current state inconsistent."""


_failure_serial = itertools.count(1)


def fail_now() -> NoReturn:
    """Signal an inconsistency; each failure carries a running serial number."""
    serial = next(_failure_serial)
    raise Failure(f"failure #{serial}")


class Priority(IntEnum):
    """Propagation priority of a constraint; lower values run first."""

    HIGH = 0
    NORMAL = 1
    LOW = 2
    ASYNC = 3


class AsyncState(Enum):
    """Stage of an asynchronous constraint in the propagation loop."""

    TO_OFFLOAD = "to_offload"
    TO_RETRIEVE = "to_retrieve"
    DONE = "done"


class DEPQueue:
    """Propagation queue with one FIFO per priority.

    Constraints are expected to expose ``asynchronous`` and ``priority``.
    """

    def __init__(self) -> None:
        self._queues: dict[Priority, deque] = {p: deque() for p in Priority}

    def enqueue(self, constraint: Any) -> None:
        if constraint.asynchronous:
            self._queues[Priority.ASYNC].append(constraint)
        else:
            self._queues[Priority(constraint.priority)].append(constraint)

    def empty(self) -> bool:
        return not any(self._queues.values())

    def __len__(self) -> int:
        return sum(len(q) for q in self._queues.values())

    def dequeue(self) -> Any:
        """Remove and return the oldest constraint of the highest priority."""
        for priority in Priority:
            queue = self._queues[priority]
            if queue:
                return queue.popleft()
        raise IndexError("dequeue from empty propagation queue")


class CPSolver:
    """Holds the state manager, variables and the propagation queue.

    Constraints handed to it provide ``post()``, ``propagate()``, the flags
    ``active``, ``scheduled`` and ``asynchronous``, a ``priority`` and, when
    asynchronous, ``async_state``, ``offload()`` and ``retrieve()``.
    """

    def __init__(self) -> None:
        self._sm = Trailer()
        self._store = Storage(self._sm)
        self._vars: list[Any] = []
        self._queue = DEPQueue()
        self._on_fix: list[Callable[[], object]] = []
        self._var_id = 0
        self._propagations = 0

    def state_manager(self) -> Trailer:
        return self._sm

    def store(self) -> Storage:
        return self._store

    def propagations(self) -> int:
        """Number of propagator runs so far."""
        return self._propagations

    @property
    def variables(self) -> list[Any]:
        return list(self._vars)

    def register_var(self, var: Any) -> None:
        """Give ``var`` the next identifier and keep track of it."""
        var.id = self._var_id
        self._var_id += 1
        self._vars.append(var)

    def schedule(self, constraint: Any) -> None:
        """Put an active constraint on the queue unless it is already there."""
        if not constraint.active:
            return
        if constraint.asynchronous:
            constraint.async_state = AsyncState.TO_OFFLOAD
        if not constraint.scheduled:
            constraint.scheduled = True
            self._queue.enqueue(constraint)

    def on_fixpoint(self, callback: Callable[[], object]) -> None:
        self._on_fix.append(callback)

    def notify_fixpoint(self) -> None:
        for callback in self._on_fix:
            callback()

    def _run(self, constraint: Any) -> None:
        if not constraint.asynchronous:
            constraint.scheduled = False
            if constraint.active:
                constraint.propagate()
                self._propagations += 1
            return
        if not constraint.active:
            constraint.scheduled = False
            return
        state = constraint.async_state
        if state is AsyncState.TO_OFFLOAD:
            constraint.async_state = AsyncState.TO_RETRIEVE
            self._queue.enqueue(constraint)
            constraint.offload()
            self._propagations += 1
        elif state is AsyncState.TO_RETRIEVE:
            constraint.scheduled = False
            constraint.async_state = AsyncState.DONE
            constraint.retrieve()
        else:
            raise RuntimeError("Unexpected asynchronous state")

    def fixpoint(self) -> None:
        """Propagate until the queue is empty; on failure empty it and re-raise."""
        try:
            self.notify_fixpoint()
            while not self._queue.empty():
                self._run(self._queue.dequeue())
        except Failure:
            while not self._queue.empty():
                self._queue.dequeue().scheduled = False
            raise

    def post(self, constraint: Optional[Any], enforce_fixpoint: bool = True) -> None:
        """Post ``constraint`` and, by default, propagate to a fixpoint."""
        if constraint is None:
            return
        constraint.post()
        if enforce_fixpoint:
            self.fixpoint()

    def __repr__(self) -> str:
        return f"CPSolver({id(self):#x})"


def make_solver() -> CPSolver:
    return CPSolver()