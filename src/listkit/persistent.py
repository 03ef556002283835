"""Persistent shared list: an immutable list with structural sharing.

Deriving a list never copies or changes an existing one. :meth:`append`
puts a new node in front of the current head and :meth:`tail` hands out
the chain after the head; both share the existing nodes with the original
list. Every node counts the lists and nodes that reference it, and is
released only when that count drops to zero.

Nodes are immutable, so only shared iteration is offered.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from listkit.borrow import AccessMode, BorrowFlag
from listkit.node import SharedLink, SharedNode, share
from listkit.traversal import Iter

T = TypeVar("T")

logger = logging.getLogger(__name__)


class PersistentList(Generic[T]):
    """Immutable singly-linked list whose values may share tails."""

    __slots__ = ("_borrow", "_head")

    def __init__(self) -> None:
        self._head: SharedLink[T] = None
        self._borrow = BorrowFlag()

    @classmethod
    def new(cls) -> PersistentList[T]:
        return cls()

    @classmethod
    def _adopt(cls, link: SharedLink[T]) -> PersistentList[T]:
        # ``link`` must already carry the reference this list will own.
        derived = cls()
        derived._head = link
        return derived

    def append(self, elem: T) -> PersistentList[T]:
        """Return a new list with ``elem`` in front of this one."""
        return self._adopt(SharedNode(elem, share(self._head)))

    def head(self) -> T | None:
        if self._head is None:
            return None
        return self._head.elem

    def tail(self) -> PersistentList[T] | None:
        """Return everything after the first element, or None if empty."""
        if self._head is None:
            return None
        return self._adopt(share(self._head.next))

    def is_empty(self) -> bool:
        return self._head is None

    def share_count(self) -> int:
        """Number of references to this list's head node (0 when empty)."""
        if self._head is None:
            return 0
        return self._head.count

    def iter(self) -> Iter[T]:
        return Iter(self._head, self, self._borrow)

    def drop(self) -> None:
        """Give up this list's reference to its nodes now.

        Nodes still shared with other lists survive. The list is empty
        afterwards.
        """
        self._borrow.check(AccessMode.EXCLUSIVE, "drop")
        released = self._release()
        logger.debug(f"Dropped persistent list, released {released} nodes")

    def _release(self) -> int:
        link, self._head = self._head, None
        released = 0
        while link is not None:
            link.count -= 1
            if link.count > 0:
                break
            link = link.sever()
            released += 1
        return released

    def __del__(self) -> None:
        self._release()

    def __iter__(self) -> Iter[T]:
        return self.iter()

    def __bool__(self) -> bool:
        return self._head is not None

    def __repr__(self) -> str:
        return f"PersistentList({list(self)!r})"
