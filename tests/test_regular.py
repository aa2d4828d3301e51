from dataclasses import FrozenInstanceError, astuple

import pytest

from minicp.intrange import Range
from minicp.regular import Automaton, Transition, automaton
from minicp.solver import make_solver


def _sample():
    cp = make_solver()
    trans = [Transition(0, 1, 1), Transition(1, 2, 2), Transition(2, 1, 0)]
    return cp, automaton(cp, 1, 2, 0, 2, 0, {2}, trans)


def test_factory_builds_automaton():
    cp, a = _sample()
    assert isinstance(a, Automaton)
    assert a.solver is cp
    assert a.start == 0
    assert a.finals == frozenset({2})


def test_ranges():
    _, a = _sample()
    assert a.states() == Range(0, 2)
    assert a.symbols() == Range(1, 2)
    assert list(a.states()) == [0, 1, 2]


def test_transition_table():
    _, a = _sample()
    assert a.transition() == [[0, 1, 1], [1, 2, 2], [2, 1, 0]]


def test_transition_table_empty():
    a = Automaton(None, 0, 0, 0, 0, 0, [0], [])
    assert a.transition() == []


def test_transition_table_is_a_copy():
    _, a = _sample()
    table = a.transition()
    table[0][0] = 99
    assert a.transition()[0] == [0, 1, 1]


def test_transition_is_frozen():
    t = Transition(0, 1, 2)
    with pytest.raises(FrozenInstanceError):
        t.symbol = 5  # type: ignore[misc]
    assert astuple(t) == (0, 1, 2)
    assert t == Transition(0, 1, 2)


def test_non_final_states():
    _, a = _sample()
    assert [s for s in a.states() if s not in a.finals] == [0, 1]