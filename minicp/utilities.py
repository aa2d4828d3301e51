"""Small dense containers: value sets, value maps and property bit sets."""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, Mapping, TypeVar

T = TypeVar("T")


class ValueSet:
    """Fast membership test over a set of integers."""

    def __init__(self, values: Iterable[int]) -> None:
        members = frozenset(values)
        if not members:
            raise ValueError("a value set needs at least one value")
        self._set(members)

    def _set(self, members: frozenset) -> None:
        self._members = members
        self._min = min(members) if members else 0
        self._max = max(members) if members else -1

    @classmethod
    def from_vars(cls, variables: Iterable) -> "ValueSet":
        """Set of the identifiers of ``variables``; may be empty."""
        obj = cls.__new__(cls)
        obj._set(frozenset(v.id for v in variables))
        return obj

    @property
    def min(self) -> int:
        return self._min

    @property
    def max(self) -> int:
        return self._max

    def member(self, value: int) -> bool:
        return self._min <= value <= self._max and value in self._members

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.member(value)

    def __repr__(self) -> str:
        return f"ValueSet({sorted(self._members)})"


class ValueMap(Generic[T]):
    """Dense map from the integers ``[low, high]`` to values."""

    def __init__(self, low: int, high: int, default: T, mapping: Mapping[int, T]) -> None:
        self._low = low
        self._high = high
        self._data: list = [default] * max(0, high - low + 1)
        for key, value in mapping.items():
            self._data[self._offset(key)] = value

    @classmethod
    def from_function(cls, low: int, high: int, func: Callable[[int], T]) -> "ValueMap[T]":
        obj = cls.__new__(cls)
        obj._low = low
        obj._high = high
        obj._data = [func(i) for i in range(low, high + 1)]
        return obj

    def _offset(self, index: int) -> int:
        if not self._low <= index <= self._high:
            raise IndexError(f"key {index} outside [{self._low}, {self._high}]")
        return index - self._low

    def __getitem__(self, index: int) -> T:
        return self._data[self._offset(index)]


def prop_nb_words(nb: int) -> int:
    """Number of 64-bit words needed for ``nb`` properties."""
    return (nb >> 6) + (1 if nb & 63 else 0)


class MDDPropSet:
    """Bit set of property indices stored in 64-bit words."""

    def __init__(self, nb: int = 0) -> None:
        if nb < 0:
            raise ValueError("number of properties must not be negative")
        self._nb = nb
        self._words = prop_nb_words(nb)
        self._mask = (1 << (64 * self._words)) - 1
        self._bits = 0

    def nb_words(self) -> int:
        return self._words

    def nb_props(self) -> int:
        return self._nb

    def clear(self) -> None:
        self._bits = 0

    def __len__(self) -> int:
        return bin(self._bits).count("1")

    def _check(self, prop: int) -> None:
        if not 0 <= prop < 64 * self._words:
            raise IndexError(f"property {prop} outside the set")

    def set_prop(self, prop: int) -> None:
        self._check(prop)
        self._bits |= 1 << prop

    def has_prop(self, prop: int) -> bool:
        self._check(prop)
        return bool(self._bits >> prop & 1)

    def union_with(self, other: "MDDPropSet") -> None:
        self._bits |= other._bits & self._mask

    def inter_with(self, other: "MDDPropSet") -> None:
        self._bits &= other._bits

    def __iter__(self) -> Iterator[int]:
        bits = self._bits
        while bits:
            low = bits & -bits
            yield low.bit_length() - 1
            bits ^= low

    def __str__(self) -> str:
        return f"[{len(self)}]{{" + "".join(f"{p} " for p in self) + "}"