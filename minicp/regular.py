"""Finite automata used to describe regular-language constraints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from minicp.intrange import Range


@dataclass(frozen=True)
class Transition:
    """Edge ``from_state --symbol--> to_state`` of an automaton."""

    from_state: int
    symbol: int
    to_state: int


class Automaton:
    """Deterministic finite automaton over integer symbols and states."""

    def __init__(
        self,
        solver: Any,
        first_symbol: int,
        last_symbol: int,
        first_state: int,
        last_state: int,
        start: int,
        finals: Iterable[int],
        transitions: Iterable[Transition],
    ) -> None:
        self.solver = solver
        self._symbols = Range(first_symbol, last_symbol)
        self._states = Range(first_state, last_state)
        self.start = start
        self.finals = frozenset(finals)
        self.transitions = tuple(transitions)

    def states(self) -> Range:
        return self._states

    def symbols(self) -> Range:
        return self._symbols

    def transition(self) -> list[list[int]]:
        """The transitions as ``[from, symbol, to]`` table rows."""
        return [[t.from_state, t.symbol, t.to_state] for t in self.transitions]


def automaton(
    solver: Any,
    first_symbol: int,
    last_symbol: int,
    first_state: int,
    last_state: int,
    start: int,
    finals: Iterable[int],
    transitions: Iterable[Transition],
) -> Automaton:
    return Automaton(
        solver, first_symbol, last_symbol, first_state, last_state,
        start, finals, transitions,
    )