"""Maximum variable/value matching and strongly connected components of its residual graph."""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

from minicp.intvar import IntVar


class PGraph:
    """Residual graph of a matching: variables, values and a sink.

    Vertices ``0 .. nb_var-1`` are variables, the next ``max_val - min_val + 1``
    are values and the last one is the sink.
    """

    def __init__(
        self,
        nb_var: int,
        min_val: int,
        max_val: int,
        match: Sequence[Optional[int]],
        var_for: Sequence[int],
        x: Sequence[IntVar],
    ) -> None:
        self._nb_var = nb_var
        self._nb_val = max_val - min_val + 1
        self._nb_vertices = nb_var + self._nb_val + 1
        self._sink = nb_var + self._nb_val
        self._min_val = min_val
        self._max_val = max_val
        self._match = match
        self._var_for = var_for
        self._x = x

    def set_live_values(self, low: int, high: int) -> None:
        self._min_val = low
        self._max_val = high

    def _successors(self, u: int) -> Iterator[int]:
        if u < self._nb_var:
            var = self._x[u]
            mu = self._match[u]
            for k in range(var.min(), var.max() + 1):
                if k != mu and var.contains_base(k):
                    yield k - self._min_val + self._nb_var
        elif u < self._sink:
            owner = self._var_for[u - self._nb_var]
            yield self._sink if owner == -1 else owner
        else:
            for k in range(self._max_val - self._min_val + 1):
                if self._var_for[k] != -1:
                    yield self._nb_var + k

    def components(self) -> Iterator[list[int]]:
        """Yield each strongly connected component as a list of vertices."""
        n = self._nb_vertices
        disc = [-1] * n
        low = [-1] * n
        held = [False] * n
        stack: list[int] = []
        time = 0
        for root in range(n):
            if disc[root] != -1:
                continue
            time += 1
            disc[root] = low[root] = time
            held[root] = True
            stack.append(root)
            frames = [(root, self._successors(root))]
            while frames:
                u, succ = frames[-1]
                for v in succ:
                    if disc[v] == -1:
                        time += 1
                        disc[v] = low[v] = time
                        held[v] = True
                        stack.append(v)
                        frames.append((v, self._successors(v)))
                        break
                    if held[v]:
                        low[u] = min(low[u], disc[v])
                else:
                    frames.pop()
                    if low[u] == disc[u]:
                        component = []
                        while True:
                            w = stack.pop()
                            held[w] = False
                            component.append(w)
                            if w == u:
                                break
                        component.reverse()
                        yield component
                    if frames:
                        parent = frames[-1][0]
                        low[parent] = min(low[parent], low[u])


class MaximumMatching:
    """Incremental maximum matching between variables and their values."""

    def __init__(self, x: Sequence[IntVar]) -> None:
        self._x = x
        self._ready = False

    def setup(self) -> None:
        """Size the value range from the current domains and find a first matching."""
        self._min = min((v.min() for v in self._x), default=0)
        self._max = max((v.max() for v in self._x), default=-1)
        val_size = self._max - self._min + 1
        self._val_match = [-1] * val_size
        self._match: list[Optional[int]] = [None] * len(self._x)
        self._var_seen = [-1] * len(self._x)
        self._val_seen = [-1] * val_size
        self._magic = 0
        self._ready = True
        self._find_initial_matching()

    def _find_initial_matching(self) -> None:
        self._size = 0
        for k, var in enumerate(self._x):
            for i in range(var.min(), var.max() + 1):
                if self._val_match[i - self._min] < 0 and var.contains(i):
                    self._match[k] = i
                    self._val_match[i - self._min] = k
                    self._size += 1
                    break

    def _find_maximal_matching(self) -> int:
        if self._size < len(self._x):
            for k in range(len(self._x)):
                if self._match[k] is None:
                    self._magic += 1
                    if self._path_from_var(k):
                        self._size += 1
        return self._size

    def _path_from_var(self, i: int) -> bool:
        if self._var_seen[i] == self._magic:
            return False
        self._var_seen[i] = self._magic
        var = self._x[i]
        for v in range(var.min(), var.max() + 1):
            if self._match[i] != v and var.contains(v) and self._path_from_val(v):
                self._match[i] = v
                self._val_match[v - self._min] = i
                return True
        return False

    def _path_from_val(self, v: int) -> bool:
        at = v - self._min
        if self._val_seen[at] == self._magic:
            return False
        self._val_seen[at] = self._magic
        owner = self._val_match[at]
        return owner == -1 or self._path_from_var(owner)

    def compute(self) -> tuple[int, list[Optional[int]]]:
        """Repair the matching after domain changes.

        Returns the matching size and, for each variable, its matched value
        or ``None`` when it is unmatched.
        """
        if not self._ready:
            raise RuntimeError("setup() must be called before compute()")
        for k, var in enumerate(self._x):
            value = self._match[k]
            if value is not None and not var.contains(value):
                self._val_match[value - self._min] = -1
                self._match[k] = None
                self._size -= 1
        size = self._find_maximal_matching()
        return size, list(self._match)