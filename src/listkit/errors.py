"""Exceptions raised when a list's access rules are violated.

An empty list is never an error: operations that have nothing to return
(``pop``, ``peek``, ``head``, ``tail``...) return ``None`` instead.
"""

from __future__ import annotations


class ListError(Exception):
    """Base class for misuse of a list's runtime access guards."""


class BorrowError(ListError):
    """Conflicting shared/exclusive access, or use of a revoked reference."""


class ConsumedError(ListError):
    """Operation on a list whose nodes were moved into a consuming iterator."""
