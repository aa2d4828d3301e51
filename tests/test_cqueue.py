import pytest

from minicp.cqueue import CQueue


def _drain(queue):
    out = []
    while not queue.empty():
        out.append(queue.dequeue())
    return out


def test_fifo_order_with_growth():
    queue = CQueue(4)
    for i in range(100):
        queue.enqueue(i)
    assert len(queue) == 100
    assert _drain(queue) == list(range(100))
    assert len(queue) == 0


def test_dequeue_empty_returns_none():
    queue = CQueue()
    assert queue.dequeue() is None


def test_location_holds_value():
    queue = CQueue(8)
    loc = queue.enqueue("a")
    assert loc.value() == "a"


def test_retract_by_value_moves_front_into_place():
    queue = CQueue(8)
    for v in [1, 2, 3, 4, 5]:
        queue.enqueue(v)
    assert queue.retract(3) is True
    assert len(queue) == 4
    assert _drain(queue) == [2, 1, 4, 5]


def test_retract_missing_value():
    queue = CQueue(8)
    queue.enqueue(1)
    assert queue.retract(42) is False
    assert len(queue) == 1


def test_retract_location_front_and_clears_value():
    queue = CQueue(8)
    first = queue.enqueue("x")
    queue.enqueue("y")
    queue.retract_location(first)
    assert first.value() is None
    assert _drain(queue) == ["y"]


def test_retract_on_empty_raises():
    queue = CQueue(4)
    with pytest.raises(IndexError):
        queue.retract(1)


def test_clear_and_invalid_size():
    queue = CQueue(4)
    for v in range(3):
        queue.enqueue(v)
    queue.clear()
    assert queue.empty()
    assert len(queue) == 0
    with pytest.raises(ValueError):
        CQueue(6)