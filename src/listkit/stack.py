"""Owned stack list: a mutable singly-linked LIFO stack.

The list exclusively owns its head node and every node owns its successor,
so each node has exactly one owning path. Iteration comes in three borrow
modes:

- :meth:`OwnedList.into_iter` moves the nodes out and pops them one by one;
- :meth:`OwnedList.iter` borrows the list read-only, any number of times;
- :meth:`OwnedList.iter_mut` borrows it exclusively and hands out a
  :class:`~listkit.borrow.RefMut` per element.

Conflicting accesses raise :class:`~listkit.errors.BorrowError`. Note that
``None`` doubles as "empty" for :meth:`OwnedList.pop` and
:meth:`OwnedList.peek`; use :meth:`OwnedList.is_empty` when ``None`` is a
legitimate element.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from listkit.borrow import AccessMode, BorrowFlag, RefMut
from listkit.errors import ConsumedError
from listkit.node import Link, Node
from listkit.traversal import Iter, IterMut

T = TypeVar("T")

logger = logging.getLogger(__name__)


class OwnedList(Generic[T]):
    """Exclusively-owned singly-linked stack."""

    __slots__ = ("_borrow", "_consumed", "_head")

    def __init__(self) -> None:
        self._head: Link[T] = None
        self._borrow = BorrowFlag()
        self._consumed = False

    @classmethod
    def new(cls) -> OwnedList[T]:
        return cls()

    def _access(self, mode: AccessMode, op: str) -> None:
        if self._consumed:
            msg = f"cannot {op}: list was moved into a consuming iterator"
            raise ConsumedError(msg)
        self._borrow.access(mode, op)

    def push(self, elem: T) -> None:
        self._access(AccessMode.EXCLUSIVE, "push")
        self._head = Node(elem, self._head)

    def pop(self) -> T | None:
        """Remove the head node and return its element, or None if empty."""
        self._access(AccessMode.EXCLUSIVE, "pop")
        node = self._head
        if node is None:
            return None
        self._head = node.next
        node.next = None
        return node.elem

    def peek(self) -> T | None:
        self._access(AccessMode.SHARED, "peek")
        if self._head is None:
            return None
        return self._head.elem

    def peek_mut(self) -> RefMut[T] | None:
        """Return an exclusive reference to the head element, or None.

        The reference stays usable until the next operation on this list.
        """
        self._access(AccessMode.EXCLUSIVE, "peek_mut")
        if self._head is None:
            return None
        return RefMut(self._head, self._borrow)

    def is_empty(self) -> bool:
        self._access(AccessMode.SHARED, "is_empty")
        return self._head is None

    def into_iter(self) -> IntoIter[T]:
        """Move every node into a consuming iterator.

        This list is unusable afterwards: every operation on it raises
        ConsumedError.
        """
        self._access(AccessMode.OWNED, "into_iter")
        moved: OwnedList[T] = OwnedList()
        moved._head, self._head = self._head, None
        self._consumed = True
        return IntoIter(moved)

    def iter(self) -> Iter[T]:
        self._access(AccessMode.SHARED, "iter")
        return Iter(self._head, self, self._borrow)

    def iter_mut(self) -> IterMut[T]:
        self._access(AccessMode.EXCLUSIVE, "iter_mut")
        return IterMut(self._head, self, self._borrow)

    def drop(self) -> None:
        """Release every node now, leaving an empty list."""
        self._access(AccessMode.EXCLUSIVE, "drop")
        released = self._teardown()
        logger.debug(f"Dropped owned list of {released} nodes")

    def _teardown(self) -> int:
        # Each node is severed before it goes away, so freeing it never
        # cascades into the rest of the chain.
        link, self._head = self._head, None
        released = 0
        while link is not None:
            node = link
            link = node.next
            node.next = None
            released += 1
        return released

    def __del__(self) -> None:
        self._teardown()

    def __iter__(self) -> Iter[T]:
        return self.iter()

    def __len__(self) -> int:
        self._access(AccessMode.SHARED, "len")
        length = 0
        node = self._head
        while node is not None:
            length += 1
            node = node.next
        return length

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __repr__(self) -> str:
        if self._consumed:
            return "OwnedList(<consumed>)"
        if self._borrow.exclusive:
            return "OwnedList(<exclusively borrowed>)"
        elems = []
        node = self._head
        while node is not None:
            elems.append(node.elem)
            node = node.next
        return f"OwnedList({elems!r})"


class IntoIter(Generic[T]):
    """Consuming iterator: owns the moved nodes and pops one per step."""

    __slots__ = ("_list",)

    def __init__(self, owned: OwnedList[T]) -> None:
        self._list = owned

    def __iter__(self) -> IntoIter[T]:
        return self

    def __next__(self) -> T:
        if self._list.is_empty():
            raise StopIteration
        return self._list.pop()
