"""A growable vector whose contents and length are undone on backtrack."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from minicp.trail import Trailer

T = TypeVar("T")


class TrailVec(Generic[T]):
    """Vector whose writes, growth and length changes are trailed."""

    def __init__(self, trailer: Trailer, capacity: int) -> None:
        self._trailer = trailer
        self._size = 0
        self._capacity = capacity
        self._data: list = [None] * capacity
        self._magic = trailer.magic()

    @property
    def trailer(self) -> Trailer:
        return self._trailer

    @property
    def capacity(self) -> int:
        return self._capacity

    def _record(self, attr: str) -> None:
        old = getattr(self, attr)

        def restore() -> None:
            setattr(self, attr, old)

        self._trailer.trail(restore)

    def _write(self, index: int, value: T) -> None:
        data = self._data
        old = data[index]

        def restore() -> None:
            data[index] = old

        self._trailer.trail(restore)
        data[index] = value

    def _touch(self) -> None:
        self._magic = self._trailer.magic()

    def _check(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"index {index} out of range for size {self._size}")

    def clear(self) -> None:
        self._record("_size")
        self._size = 0
        self._touch()

    def __len__(self) -> int:
        return self._size

    def append(self, value: T) -> None:
        if self._size >= self._capacity:
            new_capacity = max(1, self._capacity * 2)
            new_data = self._data + [None] * (new_capacity - self._capacity)
            self._record("_data")
            self._record("_capacity")
            self._data = new_data
            self._capacity = new_capacity
        self._write(self._size, value)
        self._record("_size")
        self._size += 1
        self._touch()

    def pop(self) -> T:
        if not self._size:
            raise IndexError("pop from empty TrailVec")
        value = self._data[self._size - 1]
        self._record("_size")
        self._size -= 1
        self._touch()
        return value

    def remove(self, index: int) -> int:
        """Remove the element at ``index`` by moving the last one into its place."""
        self._check(index)
        last = self._size - 1
        if index < last:
            self._write(index, self._data[last])
        self._record("_size")
        self._size -= 1
        self._touch()
        return self._size

    def __getitem__(self, index: int) -> T:
        self._check(index)
        return self._data[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._check(index)
        self._write(index, value)

    def changed(self) -> bool:
        """True when the vector was modified at the trailer's current level."""
        return self._magic == self._trailer.magic()

    def __iter__(self) -> Iterator[T]:
        return iter(self._data[: self._size])

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._data[: self._size])