"""A singly headed, doubly linked list whose structure is undone on backtrack."""

from __future__ import annotations

from typing import Generic, Iterator, Optional, TypeVar

from minicp.trail import Trail, Trailer

T = TypeVar("T")


class TrailNode(Generic[T]):
    """A list node with reversible links."""

    __slots__ = ("_owner", "_prev", "_next", "value")

    def __init__(
        self,
        owner: "TrailList[T]",
        trailer: Trailer,
        prev: Optional["TrailNode[T]"],
        next_: Optional["TrailNode[T]"],
        value: T,
    ) -> None:
        self._owner = owner
        self._prev: Trail[Optional[TrailNode[T]]] = Trail(trailer, prev)
        self._next: Trail[Optional[TrailNode[T]]] = Trail(trailer, next_)
        self.value = value
        if prev is not None:
            prev._next.value = self
        if next_ is not None:
            next_._prev.value = self

    @property
    def prev(self) -> Optional["TrailNode[T]"]:
        return self._prev.value

    @property
    def next(self) -> Optional["TrailNode[T]"]:
        return self._next.value

    def detach(self) -> None:
        """Unlink this node from its list (reversibly)."""
        p = self._prev.value
        n = self._next.value
        if p is not None:
            p._next.value = n
        else:
            self._owner._head.value = n
        if n is not None:
            n._prev.value = p


class TrailList(Generic[T]):
    """List whose insertions and removals are undone by the trailer."""

    def __init__(self, trailer: Trailer) -> None:
        self._trailer = trailer
        self._head: Trail[Optional[TrailNode[T]]] = Trail(trailer, None)

    def emplace_back(self, value: T) -> TrailNode[T]:
        """Insert ``value`` at the front of the list and return its node."""
        node = TrailNode(self, self._trailer, None, self._head.value, value)
        self._head.value = node
        return node

    def __iter__(self) -> Iterator[T]:
        node = self._head.value
        while node is not None:
            yield node.value
            node = node.next