"""Runtime borrow tracking for lists that hand out references.

A :class:`BorrowFlag` records the borrows currently held on one structure:
any number of shared borrows, or a single exclusive one. Operations declare
the :class:`AccessMode` they need and are refused with
:class:`~listkit.errors.BorrowError` when it conflicts with an active
borrow.

The flag also keeps a generation counter, bumped on every checked access.
A :class:`RefMut` remembers the generation it was issued at and stops
working as soon as anything else touches the structure.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

from listkit.errors import BorrowError

if TYPE_CHECKING:
    from listkit.node import Node

T = TypeVar("T")


class AccessMode(Enum):
    """How an operation or iterator accesses a structure."""

    OWNED = "owned"
    SHARED = "shared"
    EXCLUSIVE = "exclusive"


class BorrowFlag:
    """Borrows currently held on a structure."""

    __slots__ = ("exclusive", "generation", "shared")

    def __init__(self) -> None:
        self.shared = 0
        self.exclusive = False
        self.generation = 0

    @property
    def is_borrowed(self) -> bool:
        return self.exclusive or self.shared > 0

    def check(self, mode: AccessMode, op: str) -> None:
        """Raise BorrowError if ``op`` cannot run with ``mode`` right now."""
        if self.exclusive:
            msg = f"cannot {op}: already exclusively borrowed"
            raise BorrowError(msg)
        if mode is not AccessMode.SHARED and self.shared:
            msg = f"cannot {op}: {self.shared} shared borrow(s) still active"
            raise BorrowError(msg)

    def access(self, mode: AccessMode, op: str) -> int:
        """Check a one-off access and start a new generation."""
        self.check(mode, op)
        self.generation += 1
        return self.generation

    def acquire(self, mode: AccessMode, op: str = "borrow") -> None:
        """Hold a borrow until the matching :meth:`release`."""
        self.check(mode, op)
        if mode is AccessMode.SHARED:
            self.shared += 1
        else:
            self.exclusive = True

    def release(self, mode: AccessMode) -> None:
        if mode is AccessMode.SHARED:
            self.shared -= 1
        else:
            self.exclusive = False

    def invalidate(self) -> None:
        """Revoke every RefMut issued so far."""
        self.generation += 1

    def __repr__(self) -> str:
        return (
            f"BorrowFlag(shared={self.shared}, exclusive={self.exclusive}, "
            f"generation={self.generation})"
        )


class RefMut(Generic[T]):
    """Exclusive, mutable reference to the element held by one node.

    Read and write the element through :attr:`value`. The reference is
    valid until the flag moves to a new generation (any checked access to
    the structure, or :meth:`BorrowFlag.invalidate`) or until it is
    revoked. After that, reading and writing raise BorrowError.
    """

    __slots__ = ("_flag", "_generation", "_node")

    def __init__(self, node: Node[T], flag: BorrowFlag) -> None:
        self._node = node
        self._flag = flag
        self._generation = flag.generation

    @property
    def value(self) -> T:
        return self._target().elem

    @value.setter
    def value(self, elem: T) -> None:
        self._target().elem = elem

    @property
    def valid(self) -> bool:
        return self._node is not None and self._flag.generation == self._generation

    def revoke(self) -> None:
        self._node = None

    def _target(self) -> Node[T]:
        if not self.valid:
            msg = "exclusive reference is no longer valid"
            raise BorrowError(msg)
        return self._node

    def __repr__(self) -> str:
        if not self.valid:
            return "RefMut(<revoked>)"
        return f"RefMut({self._node.elem!r})"
