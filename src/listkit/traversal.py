"""Borrowing iterators over a chain of nodes.

One stepping algorithm serves every borrow mode: hold the next node,
advance one link per step, produce something for the node just left.
:class:`Iter` produces the elements themselves; :class:`IterMut` produces a
:class:`~listkit.borrow.RefMut` per node, each one pointing at a different
node.

An iterator keeps its owner alive and holds a borrow on the owner's
:class:`~listkit.borrow.BorrowFlag` until it is exhausted, closed, used as
a context manager and exited, or garbage collected. Handles produced by
:class:`IterMut` outlive the borrow: they stay usable until the owner is
accessed again or the iterator is explicitly closed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from listkit.borrow import AccessMode, RefMut

if TYPE_CHECKING:
    from listkit.borrow import BorrowFlag
    from listkit.node import ChainNode, Node

T = TypeVar("T")


class Iter(Generic[T]):
    """Shared-borrowing iterator: yields elements, head to tail."""

    __slots__ = ("_flag", "_next", "_owner")

    mode = AccessMode.SHARED

    def __init__(
        self,
        head: ChainNode[T] | None,
        owner: object = None,
        flag: BorrowFlag | None = None,
    ) -> None:
        self._flag = None
        self._next = head
        self._owner = owner
        if flag is not None:
            flag.acquire(self.mode, f"iterate ({self.mode.value})")
        self._flag = flag

    @property
    def active(self) -> bool:
        """True while the iterator still holds its borrow."""
        return self._flag is not None

    def __iter__(self) -> Iter[T]:
        return self

    def __next__(self) -> T:
        node = self._advance()
        return self._produce(node)

    def _advance(self) -> ChainNode[T]:
        node = self._next
        if node is None:
            self._finish()
            raise StopIteration
        self._next = node.next
        return node

    def _produce(self, node: ChainNode[T]) -> T:
        return node.elem

    def _finish(self) -> None:
        self._next = None
        flag, self._flag = self._flag, None
        if flag is not None:
            flag.release(self.mode)
        self._owner = None

    def close(self) -> None:
        """Stop iterating and release the borrow."""
        self._finish()

    def __enter__(self) -> Iter[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        self._finish()


class IterMut(Iter[T]):
    """Exclusive-borrowing iterator: yields a RefMut per element.

    Handles stay valid after the iterator is exhausted or collected, until
    the next checked access to the owner. :meth:`close` (and leaving a
    ``with`` block) revokes every handle the iterator produced.
    """

    __slots__ = ("_issued", "_loan")

    mode = AccessMode.EXCLUSIVE

    def __init__(self, head: Node[T] | None, owner: object, flag: BorrowFlag) -> None:
        self._loan: BorrowFlag | None = None
        self._issued = 0
        super().__init__(head, owner, flag)
        self._loan = flag
        self._issued = flag.generation

    def __next__(self) -> RefMut[T]:
        return super().__next__()

    def _produce(self, node: Node[T]) -> RefMut[T]:
        return RefMut(node, self._loan)

    def close(self) -> None:
        """Stop iterating and revoke every handle produced so far."""
        loan, self._loan = self._loan, None
        # Handles from this iterator are only live while no access followed.
        if loan is not None and loan.generation == self._issued:
            loan.invalidate()
        super().close()
