"""listkit: singly-linked lists with owned, borrowed and shared access."""

from __future__ import annotations

from listkit.borrow import AccessMode, BorrowFlag, RefMut
from listkit.errors import BorrowError, ConsumedError, ListError
from listkit.persistent import PersistentList
from listkit.stack import IntoIter, OwnedList
from listkit.traversal import Iter, IterMut

__all__ = [
    "AccessMode",
    "BorrowError",
    "BorrowFlag",
    "ConsumedError",
    "IntoIter",
    "Iter",
    "IterMut",
    "ListError",
    "OwnedList",
    "PersistentList",
    "RefMut",
]
