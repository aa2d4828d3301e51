import operator
import random

import pytest

from minicp.heap import Heap


def _filled(values, order=operator.gt, size=4):
    heap = Heap(size, order)
    for v in values:
        heap.insert(v)
    heap.build_heap()
    return heap


def test_extracts_in_descending_order():
    values = [5, 1, 9, 3, 7, 2, 8]
    heap = _filled(values)
    out = [heap.extract_max() for _ in range(len(values))]
    assert out == sorted(values, reverse=True)
    assert heap.empty()


def test_custom_order_gives_min_heap():
    rng = random.Random(3)
    values = [rng.randint(-50, 50) for _ in range(40)]
    heap = _filled(values, operator.lt)
    out = [heap.extract_max() for _ in range(len(values))]
    assert out == sorted(values)


def test_grows_past_initial_size():
    values = list(range(100))
    heap = _filled(values, size=2)
    assert len(heap) == 100
    assert heap.extract_max() == 99


def test_indexing_before_and_after_build():
    heap = Heap(8)
    for v in [4, 10, 6]:
        heap.insert(v)
    assert heap[0] == 4
    heap.build_heap()
    assert heap[0] == 10
    with pytest.raises(IndexError):
        heap[3]


def test_clear_and_empty_extract():
    heap = _filled([1, 2, 3])
    heap.clear()
    assert len(heap) == 0
    assert heap.empty()
    with pytest.raises(IndexError):
        heap.extract_max()


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Heap(-1)