"""A circular queue whose entries can be retracted through their locations."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Location(Generic[T]):
    """Slot of a :class:`CQueue`, returned by :meth:`CQueue.enqueue`."""

    __slots__ = ("_value", "_pos")

    def __init__(self) -> None:
        self._value: Optional[T] = None
        self._pos = 0

    def value(self) -> Optional[T]:
        return self._value


class CQueue(Generic[T]):
    """FIFO ring buffer that grows on demand; ``size`` must be a power of two."""

    def __init__(self, size: int = 32) -> None:
        if size < 2 or size & (size - 1):
            raise ValueError("queue size must be a power of two, at least 2")
        self._slots: list[Location[T]] = [Location() for _ in range(size)]
        self._mask = size - 1
        self._enter = 0
        self._exit = 0
        self._count = 0

    def _resize(self) -> None:
        size = len(self._slots)
        ordered = [self._slots[(self._exit + i) & self._mask] for i in range(size)]
        for pos, loc in enumerate(ordered):
            loc._pos = pos
        ordered.extend(Location() for _ in range(size))
        self._slots = ordered
        self._exit = 0
        self._enter = size - 1
        self._mask = 2 * size - 1

    def clear(self) -> None:
        self._enter = self._exit = 0
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def empty(self) -> bool:
        return self._enter == self._exit

    def enqueue(self, value: T) -> Location[T]:
        """Add ``value`` at the back and return its location."""
        size = len(self._slots)
        if ((size + self._enter - self._exit) & self._mask) == size - 1:
            self._resize()
        loc = self._slots[self._enter]
        loc._value = value
        loc._pos = self._enter
        self._enter = (self._enter + 1) & self._mask
        self._count += 1
        return loc

    def dequeue(self) -> Optional[T]:
        """Remove and return the front value, or ``None`` when empty."""
        if self._enter == self._exit:
            return None
        value = self._slots[self._exit]._value
        self._exit = (self._exit + 1) & self._mask
        self._count -= 1
        return value

    def retract(self, value: T) -> bool:
        """Remove the first entry equal to ``value``; report whether one was found."""
        if self._count == 0:
            raise IndexError("retract from empty queue")
        cur = self._exit
        while cur != self._enter:
            if self._slots[cur]._value == value:
                self.retract_location(self._slots[cur])
                return True
            cur = (cur + 1) & self._mask
        return False

    def retract_location(self, location: Optional[Location[T]]) -> None:
        """Remove the entry at ``location``; the front entry takes its place."""
        if location is None:
            return
        if self._count == 0:
            raise IndexError("retract from empty queue")
        at = location._pos
        if at == self._exit:
            self._exit = (self._exit + 1) & self._mask
        elif at == self._enter:
            self._enter = self._enter - 1 if self._enter > 0 else self._mask
        else:
            slots = self._slots
            slots[at], slots[self._exit] = slots[self._exit], slots[at]
            slots[at]._pos = at
            self._exit = (self._exit + 1) & self._mask
        location._value = None
        self._count -= 1