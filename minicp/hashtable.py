"""A chained hash table with constant-time clearing."""

from __future__ import annotations

from bisect import bisect_left
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K")
V = TypeVar("V")

_PRIMES = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71,
    73, 79, 83, 89, 97, 101, 103, 107, 109, 113, 127, 131, 137, 139, 149, 151,
    157, 163, 167, 173, 179, 181, 191, 193, 197, 199, 211, 223, 227, 229, 233,
    239, 241, 251, 257, 263, 269, 271, 277, 281, 283, 293, 307, 311, 313, 317,
    331, 337, 347, 349, 353, 359, 367, 373, 379, 383, 389, 397, 401, 409, 419,
    421, 431, 433, 439, 443, 449, 457, 461, 463, 467, 479, 487, 491, 499, 503,
    509, 521, 523, 541, 547, 557, 563, 569, 571, 577, 587, 593, 599, 601, 607,
    613, 617, 619, 631, 641, 643, 647, 653, 659, 661, 673, 677, 683, 691, 701,
    709, 719, 727, 733, 739, 743, 751, 757, 761, 769, 773, 787, 797, 809, 811,
    821, 823, 827, 829, 839, 853, 857, 859, 863, 877, 881, 883, 887, 907, 911,
    919, 929, 937, 941, 947, 953, 967, 971, 977, 983, 991, 997, 1009, 1013,
    1019, 1021, 1031, 1033, 1039, 1049, 1051, 1061, 1063, 1069, 1087, 1091,
    1093, 1097, 1103, 1109, 1117, 1123, 1129, 1151, 1153, 1163, 1171, 1181,
    1187, 1193, 1201, 1213, 1217, 1223, 1229, 1231, 1237, 1249, 1259, 1277,
    1279, 1283, 1289, 1291, 1297, 1301, 1303, 1307, 1319, 1321, 1327, 1361,
    1367, 1373, 1381, 1399, 1409, 1423, 1427, 1429, 1433, 1439, 1447, 1451,
    1453, 1459, 1471, 1481, 1483, 1487, 1489, 1493, 1499, 1511, 1523, 1531,
    1543, 1549, 1553, 1559, 1567, 1571, 1579, 1583, 1597, 1601, 1607, 1609,
    1613, 1619,
)


def _table_size(size: int) -> int:
    """Smallest listed prime not below ``size``, or ``size`` past the list."""
    idx = bisect_left(_PRIMES, size)
    return size if idx >= len(_PRIMES) else _PRIMES[idx]


class Hashtable(Generic[K, V]):
    """Fixed-size chained hash table whose :meth:`clear` costs O(1)."""

    def __init__(
        self,
        size: int,
        hash: Callable[[K], int] = hash,  # noqa: A002
        equal: Callable[[K, K], bool] = lambda a, b: a == b,
    ) -> None:
        self._capacity = _table_size(size)
        if self._capacity <= 0:
            raise ValueError("hashtable size must be positive")
        self._hash = hash
        self._equal = equal
        self._buckets: list[list[list]] = [[] for _ in range(self._capacity)]
        self._stamps = [0] * self._capacity
        self._magic = 0
        self._count = 0

    def capacity(self) -> int:
        """Number of buckets."""
        return self._capacity

    def _live_bucket(self, key: K) -> tuple[int, list[list]]:
        at = self._hash(key) % self._capacity
        if self._stamps[at] != self._magic:
            return at, []
        return at, self._buckets[at]

    def insert(self, key: K, value: V) -> None:
        """Bind ``key`` to ``value``, replacing an existing binding."""
        at, bucket = self._live_bucket(key)
        for entry in bucket:
            if self._equal(entry[0], key):
                entry[1] = value
                return
        if self._stamps[at] != self._magic:
            self._buckets[at] = bucket
            self._stamps[at] = self._magic
        bucket.insert(0, [key, value])
        self._count += 1

    def get(self, key: K, default: V | None = None) -> V | None:
        _, bucket = self._live_bucket(key)
        for stored, value in bucket:
            if self._equal(stored, key):
                return value
        return default

    def __contains__(self, key: Hashable) -> bool:
        _, bucket = self._live_bucket(key)  # type: ignore[arg-type]
        return any(self._equal(stored, key) for stored, _ in bucket)

    def __len__(self) -> int:
        return self._count

    def clear(self) -> None:
        """Forget every binding without touching the buckets."""
        self._magic += 1
        self._count = 0