"""Depth-first search over branching alternatives, with variable selection heuristics."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence

from minicp.solver import CPSolver, Failure
from minicp.trail import StateManager

Alternative = Callable[[], object]
Limit = Callable[["SearchStatistics"], bool]

_rng = random.Random()


def get_rng() -> random.Random:
    """The random generator shared by the randomised heuristics."""
    return _rng


class _Stop(Exception):
    """Raised internally when a search limit is reached."""


def _reached(limit: Optional[Limit], stats: "SearchStatistics") -> bool:
    """True when a limit is given and it says the search must stop."""
    return limit is not None and bool(limit(stats))


class Branches:
    """The alternatives to try, in order, at a search node."""

    def __init__(self, alternatives: Iterable[Alternative] = ()) -> None:
        self._alts: list[Alternative] = list(alternatives)

    def __iter__(self) -> Iterator[Alternative]:
        return iter(self._alts)

    def __len__(self) -> int:
        return len(self._alts)

    def add(self, alternative: Alternative) -> None:
        self._alts.append(alternative)

    def __or__(self, other: "Branches | Alternative") -> "Branches":
        if isinstance(other, Branches):
            return Branches([*self._alts, *other._alts])
        if callable(other):
            return Branches([*self._alts, other])
        return NotImplemented


def alternatives(*args: Alternative) -> Branches:
    """Branches made of the given alternatives, tried left to right."""
    return Branches(args)


@dataclass
class SearchStatistics:
    """Counters and timings of one search."""

    nodes: int = 0
    failures: int = 0
    solutions: int = 0
    tightening_fail: int = 0
    start_time: float = 0.0
    search_start_time: float = 0.0
    search_end_time: float = 0.0
    completed: bool = False

    def incr_failures(self) -> None:
        self.failures += 1

    def incr_nodes(self) -> None:
        self.nodes += 1

    def incr_solutions(self) -> None:
        self.solutions += 1

    def incr_tightening_fail(self) -> None:
        self.tightening_fail += 1

    def set_start_time(self) -> None:
        self.start_time = time.perf_counter()

    def set_search_start_time(self) -> None:
        self.search_start_time = time.perf_counter()

    def set_search_end_time(self) -> None:
        self.search_end_time = time.perf_counter()

    def set_completed(self) -> None:
        self.completed = True

    def init_time(self) -> float:
        return self.search_start_time - self.start_time

    def solve_time(self) -> float:
        return self.search_end_time - self.search_start_time

    def running_time(self) -> float:
        return time.perf_counter() - self.start_time

    def __str__(self) -> str:
        return (
            f"Solving time = {self.solve_time():.3f} s\n"
            f"Solutions = {self.solutions}\n"
            f"Nodes = {1 + self.nodes}\n"
            f"Failures = {self.failures - self.tightening_fail}\n"
        )


class DFSearch:
    """Depth-first search driven by a branching function.

    The branching returns the :class:`Branches` of the current node; an empty
    one marks a solution. Alternatives signal inconsistency by raising
    :class:`~minicp.solver.Failure`.
    """

    def __init__(
        self,
        state_manager: "StateManager | CPSolver",
        branching: Callable[[], Branches],
    ) -> None:
        if isinstance(state_manager, CPSolver):
            state_manager = state_manager.state_manager()
        self._sm = state_manager
        self._branching = branching
        self._solution_listeners: list[Callable[[], object]] = []
        self._node_listeners: list[Callable[[], object]] = []
        self._failure_listeners: list[Callable[[], object]] = []
        self._peak_depth = 0
        self._sm.enable()

    def on_solution(self, callback: Callable[[], object]) -> None:
        self._solution_listeners.append(callback)

    def on_branch(self, callback: Callable[[], object]) -> None:
        self._node_listeners.append(callback)

    def on_failure(self, callback: Callable[[], object]) -> None:
        self._failure_listeners.append(callback)

    def notify_solution(self) -> None:
        for callback in self._solution_listeners:
            callback()

    def notify_node(self) -> None:
        for callback in self._node_listeners:
            callback()

    def notify_failure(self) -> None:
        for callback in self._failure_listeners:
            callback()

    def peak_depth(self) -> int:
        """Deepest level of branching nodes reached so far."""
        return self._peak_depth

    def _enter_node(self, depth: int) -> None:
        self._peak_depth = max(self._peak_depth, depth)
        self.notify_node()

    def _dfs(self, stats: SearchStatistics, limit: Optional[Limit], depth: int) -> None:
        branches = self._branching()
        if len(branches) == 0:
            try:
                self.notify_solution()
            except Failure:
                self.notify_failure()
            return
        depth += 1
        self._enter_node(depth)
        for alternative in branches:
            if _reached(limit, stats):
                break
            self._sm.save_state()
            try:
                alternative()
                self._dfs(stats, limit, depth)
            except Failure:
                self.notify_failure()
            self._sm.restore_state()
        if _reached(limit, stats):
            raise _Stop()

    def _dfs_one_shot(self, depth: int) -> None:
        branches = self._branching()
        if len(branches) == 0:
            self.notify_failure()
            return
        depth += 1
        self._enter_node(depth)
        first = next(iter(branches))
        try:
            first()
            self._dfs_one_shot(depth)
        except Failure:
            self.notify_failure()

    def solve(
        self,
        stats: Optional[SearchStatistics] = None,
        limit: Optional[Limit] = None,
    ) -> SearchStatistics:
        """Explore the whole tree, or until ``limit(stats)`` becomes true."""
        stats = SearchStatistics() if stats is None else stats

        def body() -> None:
            try:
                self._dfs(stats, limit, 0)
                stats.set_completed()
            except _Stop:
                pass

        self._sm.with_new_state(body)
        return stats

    def sample(self, stop: Callable[[], bool]) -> None:
        """Repeatedly dive along first alternatives until ``stop()`` is true."""

        def body() -> None:
            while not stop():
                self._sm.save_state()
                self._dfs_one_shot(0)
                self._sm.restore_state()

        self._sm.with_new_state(body)

    def solve_subject_to(
        self,
        limit: Optional[Limit],
        subject_to: Callable[[], object],
    ) -> SearchStatistics:
        """Run ``subject_to`` then search, undoing both afterwards."""
        stats = SearchStatistics()

        def body() -> None:
            try:
                subject_to()
                self._dfs(stats, limit, 0)
                stats.set_completed()
            except _Stop:
                pass

        self._sm.with_new_state(body)
        return stats

    def optimize(
        self,
        objective: Any,
        stats: Optional[SearchStatistics] = None,
        limit: Optional[Limit] = None,
    ) -> SearchStatistics:
        """Search, tightening ``objective`` at every solution."""
        self.on_solution(objective.tighten)
        return self.solve(stats, limit)

    def optimize_subject_to(
        self,
        objective: Any,
        limit: Optional[Limit],
        subject_to: Callable[[], object],
    ) -> SearchStatistics:
        """Run ``subject_to`` then optimize, undoing both afterwards."""
        result = [SearchStatistics()]

        def body() -> None:
            try:
                subject_to()
                result[0] = self.optimize(objective, limit=limit)
            except _Stop:
                pass

        self._sm.with_new_state(body)
        return result[0]


def land(branchings: Sequence[Callable[[], Branches]]) -> Callable[[], Branches]:
    """Branching that uses the first of ``branchings`` with something to offer."""
    chain = list(branchings)

    def branching() -> Branches:
        for candidate in chain:
            branches = candidate()
            if len(branches) != 0:
                return branches
        return Branches()

    return branching


def select_min(
    container: Iterable[Any],
    test: Callable[[Any], bool],
    key: Callable[[Any], Any],
) -> Any:
    """First element passing ``test`` with the smallest ``key``, or ``None``."""
    best = None
    best_key = None
    found = False
    for item in container:
        if test(item):
            k = key(item)
            if not found or k < best_key:
                best, best_key, found = item, k, True
    return best


def select_max(
    container: Iterable[Any],
    test: Callable[[Any], bool],
    key: Callable[[Any], Any],
) -> Any:
    """First element passing ``test`` with the largest ``key``, or ``None``."""
    best = None
    best_key = None
    found = False
    for item in container:
        if test(item):
            k = key(item)
            if not found or k > best_key:
                best, best_key, found = item, k, True
    return best


def _unbound(var: Any) -> bool:
    return var.size() > 1


def select_random(container: Iterable[Any]) -> Any:
    """A random unbound variable, or ``None`` when all are bound."""
    candidates = [var for var in container if _unbound(var)]
    if not candidates:
        return None
    return get_rng().choice(candidates)


def input_index(variables: Sequence[Any], index: int) -> Any:
    """``variables[index]``, or ``None`` for a negative index."""
    return variables[index] if index >= 0 else None


def first_fail(variables: Iterable[Any]) -> Any:
    """Unbound variable with the smallest domain."""
    return select_min(variables, _unbound, lambda x: x.size())


def input_order(variables: Iterable[Any]) -> Any:
    """First unbound variable in the given order."""
    return next((var for var in variables if _unbound(var)), None)


def smallest(variables: Iterable[Any]) -> Any:
    """Unbound variable with the smallest minimum."""
    return select_min(variables, _unbound, lambda x: x.min())


def largest(variables: Iterable[Any]) -> Any:
    """Unbound variable with the largest maximum."""
    return select_max(variables, _unbound, lambda x: x.max())


def random_var(variables: Iterable[Any]) -> Any:
    """Random unbound variable."""
    return select_random(variables)