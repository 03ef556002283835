"""Node shapes shared by the list variants.

Both node kinds expose ``elem`` and ``next``; a link is either ``None``
(end of list) or exactly one node.
"""

from __future__ import annotations

from typing import Generic, Optional, Protocol, TypeVar

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class ChainNode(Protocol[T_co]):
    """Any node a borrowing iterator can walk: an element and a link."""

    @property
    def elem(self) -> T_co: ...

    @property
    def next(self) -> ChainNode[T_co] | None: ...


class Node(Generic[T]):
    """Node exclusively owned by its predecessor, or by the list head."""

    __slots__ = ("elem", "next")

    def __init__(self, elem: T, next: Link[T] = None) -> None:
        self.elem = elem
        self.next = next

    def __repr__(self) -> str:
        return f"Node({self.elem!r})"


class SharedNode(Generic[T]):
    """Immutable node owned jointly by every list or node that links to it.

    ``count`` is the number of list heads and predecessor nodes currently
    referencing this node. A fresh node starts at 1 (its creator's
    reference).
    """

    __slots__ = ("_elem", "_next", "count")

    def __init__(self, elem: T, next: SharedLink[T] = None) -> None:
        self._elem = elem
        self._next = next
        self.count = 1

    @property
    def elem(self) -> T:
        return self._elem

    @property
    def next(self) -> SharedLink[T]:
        return self._next

    def sever(self) -> SharedLink[T]:
        """Detach and return the successor of a node whose count reached zero.

        The successor's count is left untouched: the caller now holds the
        reference this node used to hold.
        """
        link, self._next = self._next, None
        return link

    def __repr__(self) -> str:
        return f"SharedNode({self._elem!r}, count={self.count})"


Link = Optional[Node[T]]
SharedLink = Optional[SharedNode[T]]


def share(link: SharedLink[T]) -> SharedLink[T]:
    """Take one more reference to ``link`` and return it."""
    if link is not None:
        link.count += 1
    return link
