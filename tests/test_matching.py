import pytest

from minicp.intvar import IntVar
from minicp.matching import MaximumMatching, PGraph


class SetVar(IntVar):
    def __init__(self, values):
        self.values = set(values)

    def min(self):
        return min(self.values)

    def max(self):
        return max(self.values)

    def size(self):
        return len(self.values)

    def is_bound(self):
        return len(self.values) == 1

    def contains(self, value):
        return value in self.values

    def assign(self, value):
        self.values = {value} & self.values

    def remove(self, value):
        self.values.discard(value)

    def remove_below(self, new_min):
        self.values = {v for v in self.values if v >= new_min}

    def remove_above(self, new_max):
        self.values = {v for v in self.values if v <= new_max}

    def update_bounds(self, new_min, new_max):
        self.remove_below(new_min)
        self.remove_above(new_max)


def check_matching(xs, size, matches):
    matched = [m for m in matches if m is not None]
    assert len(matched) == size
    assert len(set(matched)) == len(matched)
    for var, m in zip(xs, matches):
        if m is not None:
            assert var.contains(m)


def test_augmenting_path_finds_perfect_matching():
    xs = [SetVar({1, 2}), SetVar({1}), SetVar({2, 3})]
    mm = MaximumMatching(xs)
    mm.setup()
    size, matches = mm.compute()
    assert size == len(xs)
    check_matching(xs, size, matches)
    assert matches[1] == 1


def test_infeasible_matching_is_partial():
    xs = [SetVar({1}), SetVar({1})]
    mm = MaximumMatching(xs)
    mm.setup()
    size, matches = mm.compute()
    assert size == 1
    check_matching(xs, size, matches)
    assert matches.count(None) == 1


def test_repair_after_domain_change():
    xs = [SetVar({1, 2}), SetVar({1, 2})]
    mm = MaximumMatching(xs)
    mm.setup()
    size, matches = mm.compute()
    assert size == len(xs)
    xs[0].remove(matches[0])
    size, matches = mm.compute()
    assert size == len(xs)
    check_matching(xs, size, matches)


def test_compute_requires_setup():
    with pytest.raises(RuntimeError):
        MaximumMatching([SetVar({1})]).compute()


def scc_graph(xs):
    mm = MaximumMatching(xs)
    mm.setup()
    _, matches = mm.compute()
    low = min(x.min() for x in xs)
    high = max(x.max() for x in xs)
    var_for = [-1] * (high - low + 1)
    for k, m in enumerate(matches):
        if m is not None:
            var_for[m - low] = k
    return PGraph(len(xs), low, high, matches, var_for, xs), len(xs) + high - low + 2


def test_components_of_bound_variable():
    graph, _ = scc_graph([SetVar({5})])
    assert list(graph.components()) == [[0], [1], [2]]


def test_components_of_swappable_pair():
    graph, n = scc_graph([SetVar({1, 2}), SetVar({1, 2})])
    comps = {frozenset(c) for c in graph.components()}
    assert comps == {frozenset(range(n - 1)), frozenset({n - 1})}


def test_components_partition_vertices():
    xs = [SetVar({1, 2, 4}), SetVar({1}), SetVar({2, 3}), SetVar({3, 4})]
    graph, n = scc_graph(xs)
    comps = list(graph.components())
    flat = [v for c in comps for v in c]
    assert sorted(flat) == list(range(n))
    assert all(c for c in comps)