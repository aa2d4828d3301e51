"""Segmented bump allocators: a backtrackable one and a resettable pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from minicp.trail import Trail, Trailer

SEGSIZE = 1 << 22


def _align(size: int) -> int:
    """Round ``size`` up to a multiple of 16 bytes."""
    if size <= 0:
        raise ValueError("allocation size must be positive")
    if size & 0xF:
        size = (size | 0xF) + 1
    return size


class Storage:
    """Bump allocator whose position is restored when the trailer backtracks."""

    def __init__(self, trailer: Trailer, segment_size: int = SEGSIZE) -> None:
        if segment_size <= 0:
            raise ValueError("segment size must be positive")
        self._trailer = trailer
        self._segment_size = segment_size
        self._segments: list[bytearray] = [bytearray(segment_size)]
        self._top: Trail[int] = Trail(trailer, 0)
        self._seg: Trail[int] = Trail(trailer, 0)

    def allocate(self, size: int) -> memoryview:
        """Reserve a 16-byte aligned block of at least ``size`` bytes."""
        size = _align(size)
        seg = self._seg.value
        segment = self._segments[seg]
        if self._top.value + size >= len(segment):
            del self._segments[seg + 1:]
            self._segments.append(bytearray(max(self._segment_size, size)))
            seg += 1
            self._seg.value = seg
            self._top.value = 0
            segment = self._segments[seg]
        top = self._top.value
        self._top.value = top + size
        return memoryview(segment)[top:top + size]

    def capacity(self) -> int:
        """Default size of one segment."""
        return self._segment_size

    def usage(self) -> int:
        """Bytes in use, counting every full segment before the current one."""
        return (len(self._segments) - 1) * self._segment_size + self._top.value


@dataclass(frozen=True)
class PoolMark:
    """Position in a :class:`Pool` that it can be reset to."""

    top: int
    seg: int


class Pool:
    """Bump allocator reset explicitly with :meth:`clear`."""

    def __init__(self, segment_size: int = SEGSIZE) -> None:
        if segment_size <= 0:
            raise ValueError("segment size must be positive")
        self._segment_size = segment_size
        self._segments: list[bytearray] = [bytearray(segment_size)]
        self._top = 0
        self._seg = 0

    def allocate(self, size: int) -> memoryview:
        """Reserve a 16-byte aligned block of at least ``size`` bytes."""
        size = _align(size)
        segment = self._segments[self._seg]
        while self._top + size >= len(segment):
            self._seg += 1
            if self._seg >= len(self._segments):
                # one spare byte so that a block of the full segment size fits
                self._segments.append(bytearray(max(self._segment_size, size + 1)))
            self._top = 0
            segment = self._segments[self._seg]
        top = self._top
        self._top = top + size
        return memoryview(segment)[top:top + size]

    def clear(self, mark: Optional[PoolMark] = None) -> None:
        """Reset to ``mark``, or to the very beginning when no mark is given."""
        if mark is None:
            self._top, self._seg = 0, 0
        else:
            self._top, self._seg = mark.top, mark.seg

    def mark(self) -> PoolMark:
        return PoolMark(self._top, self._seg)

    def capacity(self) -> int:
        return self._segment_size

    def usage(self) -> int:
        return (len(self._segments) - 1) * self._segment_size + self._top