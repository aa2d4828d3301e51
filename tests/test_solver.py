import pytest

from minicp.solver import (
    AsyncState,
    CPSolver,
    DEPQueue,
    Failure,
    Priority,
    fail_now,
    make_solver,
)
from minicp.store import Storage
from minicp.trail import Trailer


class FakeConstraint:
    def __init__(self, name, log, priority=Priority.NORMAL, asynchronous=False,
                 fail=False, on_propagate=None):
        self.name = name
        self.log = log
        self.priority = priority
        self.asynchronous = asynchronous
        self.active = True
        self.scheduled = False
        self.async_state = AsyncState.DONE
        self.fail = fail
        self.on_propagate = on_propagate

    def post(self):
        self.log.append(("post", self.name))

    def propagate(self):
        self.log.append(("propagate", self.name))
        if self.on_propagate:
            self.on_propagate()
        if self.fail:
            fail_now()

    def offload(self):
        self.log.append(("offload", self.name))

    def retrieve(self):
        self.log.append(("retrieve", self.name))


class FakeVar:
    id = None


def test_fail_now_raises():
    with pytest.raises(Failure):
        fail_now()


def test_queue_orders_by_priority():
    log = []
    q = DEPQueue()
    low = FakeConstraint("low", log, Priority.LOW)
    high = FakeConstraint("high", log, Priority.HIGH)
    normal = FakeConstraint("normal", log, Priority.NORMAL)
    asy = FakeConstraint("async", log, Priority.HIGH, asynchronous=True)
    for c in (asy, low, normal, high):
        q.enqueue(c)
    assert len(q) == 4
    assert [q.dequeue().name for _ in range(4)] == ["high", "normal", "low", "async"]
    assert q.empty()


def test_queue_fifo_within_priority():
    q = DEPQueue()
    a = FakeConstraint("a", [])
    b = FakeConstraint("b", [])
    q.enqueue(a)
    q.enqueue(b)
    assert q.dequeue() is a
    assert q.dequeue() is b


def test_dequeue_empty_raises():
    with pytest.raises(IndexError):
        DEPQueue().dequeue()


def test_solver_parts():
    cp = make_solver()
    assert isinstance(cp.state_manager(), Trailer)
    assert isinstance(cp.store(), Storage)
    assert cp.propagations() == 0


def test_register_var_assigns_ids():
    cp = CPSolver()
    x, y = FakeVar(), FakeVar()
    cp.register_var(x)
    cp.register_var(y)
    assert (x.id, y.id) == (0, 1)
    assert cp.variables == [x, y]


def test_schedule_only_once():
    log = []
    cp = CPSolver()
    c = FakeConstraint("c", log)
    cp.schedule(c)
    cp.schedule(c)
    assert c.scheduled
    cp.fixpoint()
    assert log == [("propagate", "c")]
    assert cp.propagations() == 1
    assert not c.scheduled


def test_inactive_not_scheduled():
    log = []
    cp = CPSolver()
    c = FakeConstraint("c", log)
    c.active = False
    cp.schedule(c)
    cp.fixpoint()
    assert log == []
    assert not c.scheduled


def test_post_runs_fixpoint():
    log = []
    cp = CPSolver()
    c = FakeConstraint("c", log)
    c.post = lambda: (log.append(("post", "c")), cp.schedule(c))
    cp.post(c)
    assert cp.propagations() == 1
    assert not c.scheduled
    assert log == [("post", "c"), ("propagate", "c")]


def test_post_without_fixpoint_and_none():
    log = []
    cp = CPSolver()
    c = FakeConstraint("c", log)
    cp.post(None)
    cp.post(c, enforce_fixpoint=False)
    assert log == [("post", "c")]
    assert cp.propagations() == 0


def test_propagation_chain():
    log = []
    cp = CPSolver()
    second = FakeConstraint("second", log)
    first = FakeConstraint("first", log, on_propagate=lambda: cp.schedule(second))
    cp.schedule(first)
    cp.fixpoint()
    assert log == [("propagate", "first"), ("propagate", "second")]
    assert cp.propagations() == 2


def test_failure_empties_queue():
    log = []
    cp = CPSolver()
    bad = FakeConstraint("bad", log, Priority.HIGH, fail=True)
    other = FakeConstraint("other", log, Priority.LOW)
    cp.schedule(bad)
    cp.schedule(other)
    with pytest.raises(Failure):
        cp.fixpoint()
    assert not other.scheduled
    assert not bad.scheduled
    assert ("propagate", "other") not in log
    cp.fixpoint()
    assert log == [("propagate", "bad")]


def test_async_constraint_offload_then_retrieve():
    log = []
    cp = CPSolver()
    c = FakeConstraint("a", log, asynchronous=True)
    cp.schedule(c)
    assert c.async_state is AsyncState.TO_OFFLOAD
    cp.fixpoint()
    assert log == [("offload", "a"), ("retrieve", "a")]
    assert c.async_state is AsyncState.DONE
    assert not c.scheduled
    assert cp.propagations() == 1


def test_async_unexpected_state():
    cp = CPSolver()
    c = FakeConstraint("a", [], asynchronous=True)
    cp.schedule(c)
    c.async_state = AsyncState.DONE
    with pytest.raises(RuntimeError):
        cp.fixpoint()


def test_on_fixpoint_callbacks():
    calls = []
    cp = CPSolver()
    cp.on_fixpoint(lambda: calls.append(1))
    cp.fixpoint()
    cp.fixpoint()
    assert calls == [1, 1]