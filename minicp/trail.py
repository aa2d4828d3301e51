"""Reversible state: a trail of undo actions and values restored on backtracking."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Restore = Callable[[], None]


class StateManager(ABC):
    """Interface for objects that can save and restore search states."""

    def enable(self) -> None:
        """Turn on state recording; the default does nothing."""

    @abstractmethod
    def save_state(self) -> None:
        """Open a new state level."""

    @abstractmethod
    def clear(self) -> None:
        """Restore every saved level."""

    @abstractmethod
    def restore_state(self) -> None:
        """Undo everything done since the last saved level."""

    @abstractmethod
    def with_new_state(self, body: Callable[[], object]) -> None:
        """Run ``body`` inside a fresh level and undo its effects afterwards."""


class Trailer(StateManager):
    """State manager keeping a stack of undo actions grouped into levels."""

    def __init__(self) -> None:
        self._trail: list[Restore] = []
        self._tops: list[tuple[int, int]] = []
        self._magic = -1
        self._last_node = 0
        self._enabled = False

    def enable(self) -> None:
        self._enabled = True

    @property
    def enabled(self) -> bool:
        return self._enabled

    def trail(self, restore: Restore | None) -> None:
        """Record an undo action; ignored while the trailer is not enabled."""
        if self._enabled and restore is not None:
            self._trail.append(restore)

    def magic(self) -> int:
        return self._magic

    def inc_magic(self) -> None:
        self._magic += 1

    def push(self) -> int:
        """Open a new level and return its node identifier."""
        self._magic += 1
        self._last_node += 1
        node = self._last_node
        self._tops.append((len(self._trail), node))
        return node

    def pop(self) -> None:
        """Undo every action recorded since the most recent level was opened."""
        if not self._tops:
            raise IndexError("no saved state to restore")
        size, _ = self._tops.pop()
        while len(self._trail) > size:
            self._trail.pop()()

    def pop_to_node(self, node: int) -> None:
        """Pop levels up to and including the one identified by ``node``."""
        if all(top_node != node for _, top_node in self._tops):
            raise ValueError(f"no saved state with node {node}")
        while True:
            _, top_node = self._tops[-1]
            self.pop()
            if top_node == node:
                break

    def clear(self) -> None:
        while self._tops:
            self.pop()

    def save_state(self) -> None:
        self.push()

    def restore_state(self) -> None:
        self.pop()

    def with_new_state(self, body: Callable[[], object]) -> None:
        level = self.push()
        try:
            body()
        finally:
            self.pop_to_node(level)


class Trail(Generic[T]):
    """A value whose changes are undone when the trailer backtracks."""

    __slots__ = ("_ctx", "_magic", "_value")

    def __init__(self, ctx: Trailer, value: T = 0) -> None:  # type: ignore[assignment]
        self._ctx = ctx
        self._magic = ctx.magic()
        self._value = value

    def fresh(self) -> bool:
        """True when the value has not been saved at the current level."""
        return self._magic != self._ctx.magic()

    @property
    def ctx(self) -> Trailer:
        return self._ctx

    def _save(self) -> None:
        current = self._ctx.magic()
        if self._magic != current:
            self._magic = current
            old = self._value

            def restore() -> None:
                self._value = old

            self._ctx.trail(restore)

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self._save()
        self._value = new_value

    def increment(self, delta=1) -> "Trail[T]":
        self._save()
        self._value += delta  # type: ignore[operator]
        return self

    def decrement(self, delta=1) -> "Trail[T]":
        self._save()
        self._value -= delta  # type: ignore[operator]
        return self

    def __repr__(self) -> str:
        return f"Trail({self._value!r})"