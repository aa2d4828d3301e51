"""Row-major multi-dimensional matrices with chained indexing."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


class MatrixSlice:
    """A view of a matrix with some leading indices fixed."""

    __slots__ = ("_mtx", "_flat", "_depth")

    def __init__(self, mtx: "Matrix", flat: int, depth: int) -> None:
        self._mtx = mtx
        self._flat = flat
        self._depth = depth

    def _dim(self) -> int:
        return self._mtx._dims[len(self._mtx._dims) - self._depth]

    def _offset(self, index: int) -> int:
        dim = self._dim()
        if not 0 <= index < dim:
            raise IndexError(f"index {index} out of range for dimension of size {dim}")
        return self._flat * dim + index

    def __getitem__(self, index: int) -> Any:
        offset = self._offset(index)
        if self._depth == 1:
            return self._mtx._data[offset]
        return MatrixSlice(self._mtx, offset, self._depth - 1)

    def __setitem__(self, index: int, value: Any) -> None:
        if self._depth != 1:
            raise TypeError("only the last dimension can be assigned")
        self._mtx._data[self._offset(index)] = value

    def __len__(self) -> int:
        return self._dim()


class Matrix(Generic[T]):
    """Matrix of any number of dimensions stored in one flat list."""

    def __init__(self, *args: int, fill: Any = None) -> None:
        if not args:
            raise ValueError("a matrix needs at least one dimension")
        if any(d < 0 for d in args):
            raise ValueError("matrix dimensions must not be negative")
        self._dims = tuple(args)
        total = 1
        for d in self._dims:
            total *= d
        self._data: list = [fill] * total

    def flat(self) -> list:
        """Copy of the elements in row-major order."""
        return list(self._data)

    def size(self, dim: int) -> int:
        return self._dims[dim]

    def __getitem__(self, index: int) -> Any:
        return MatrixSlice(self, 0, len(self._dims))[index]

    def __setitem__(self, index: int, value: Any) -> None:
        MatrixSlice(self, 0, len(self._dims))[index] = value


def build_slice(low: int, up: int, body: Callable[[int], T]) -> list[T]:
    """``[body(k) for k in [low, up)]``."""
    return [body(k) for k in range(low, up)]