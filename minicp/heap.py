"""A binary heap with a configurable priority order."""

from __future__ import annotations

import operator
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Heap(Generic[T]):
    """Binary heap; ``order(a, b)`` is true when ``a`` should come before ``b``.

    Values are appended with :meth:`insert` and arranged by :meth:`build_heap`;
    :meth:`extract_max` then removes them in priority order.
    """

    def __init__(
        self,
        size: int = 32,
        order: Callable[[T, T], bool] = operator.gt,
    ) -> None:
        if size < 0:
            raise ValueError("heap size must not be negative")
        self._capacity = size
        self._order = order
        self._tab: list = [None]  # slot 0 unused, heap is 1-based

    def _heapify(self, p: int) -> None:
        tab = self._tab
        at = len(tab)
        order = self._order
        while True:
            left, right = 2 * p, 2 * p + 1
            best = left if left < at and order(tab[left], tab[p]) else p
            if right < at and order(tab[right], tab[best]):
                best = right
            if best == p:
                return
            tab[p], tab[best] = tab[best], tab[p]
            p = best

    def clear(self) -> None:
        """Remove every value from the heap."""
        self._tab = [None]

    def __len__(self) -> int:
        return len(self._tab) - 1

    def empty(self) -> bool:
        return len(self._tab) == 1

    def __getitem__(self, index: int) -> T:
        if not 0 <= index < len(self):
            raise IndexError(f"heap index {index} out of range")
        return self._tab[index + 1]

    def insert(self, value: T) -> None:
        """Append ``value``; call :meth:`build_heap` before extracting."""
        if len(self._tab) >= self._capacity:
            self._capacity = max(1, self._capacity * 2)
        self._tab.append(value)

    def build_heap(self) -> None:
        for i in range(len(self._tab) // 2, 0, -1):
            self._heapify(i)

    def extract_max(self) -> T:
        """Remove and return the value of highest priority."""
        if self.empty():
            raise IndexError("extract from empty heap")
        top = self._tab[1]
        last = self._tab.pop()
        if len(self._tab) > 1:
            self._tab[1] = last
            self._heapify(1)
        return top