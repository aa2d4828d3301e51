"""Interface of integer decision variables."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class UnsupportedOperation(RuntimeError):
    """Raised by variables that do not offer an optional operation."""


class IntVar(ABC):
    """An integer variable with a finite domain."""

    _id: Optional[int] = None

    @property
    def id(self) -> int:
        """Identifier given when the variable is registered with a solver."""
        if self._id is None:
            raise AttributeError("variable has not been registered")
        return self._id

    @id.setter
    def id(self, value: int) -> None:
        self._id = value

    @abstractmethod
    def min(self) -> int:
        """Smallest value of the domain."""

    @abstractmethod
    def max(self) -> int:
        """Largest value of the domain."""

    @abstractmethod
    def size(self) -> int:
        """Number of values in the domain."""

    @abstractmethod
    def is_bound(self) -> bool:
        """True when exactly one value remains."""

    @abstractmethod
    def contains(self, value: int) -> bool:
        """True when ``value`` is in the domain."""

    def contains_base(self, value: int) -> bool:
        """Membership in the underlying domain; the same as :meth:`contains` here."""
        return self.contains(value)

    def ith_value(self, index: int) -> int:
        """The ``index``-th value (1-based, in increasing order) of the domain."""
        if index < 1:
            raise IndexError(f"value index {index} out of range")
        seen = 0
        for value in range(self.min(), self.max() + 1):
            if self.contains(value):
                seen += 1
                if seen == index:
                    return value
        raise IndexError(f"value index {index} out of range")

    def dump(self, low: int, high: int) -> list[int]:
        """Domain bitmap over ``[low, high]`` as 32-bit words, most significant bit first."""
        if high < low:
            return []
        width = high - low + 1
        words = [0] * ((width + 31) // 32)
        for offset, value in enumerate(range(low, high + 1)):
            if self.contains(value):
                words[offset // 32] |= 1 << (31 - offset % 32)
        return words

    @abstractmethod
    def assign(self, value: int) -> None:
        """Reduce the domain to ``value``."""

    @abstractmethod
    def remove(self, value: int) -> None:
        """Remove ``value`` from the domain."""

    @abstractmethod
    def remove_below(self, new_min: int) -> None:
        """Remove every value below ``new_min``."""

    @abstractmethod
    def remove_above(self, new_max: int) -> None:
        """Remove every value above ``new_max``."""

    @abstractmethod
    def update_bounds(self, new_min: int, new_max: int) -> None:
        """Restrict the domain to ``[new_min, new_max]``."""