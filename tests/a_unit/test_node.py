"""Unit tests for listkit.node."""

from __future__ import annotations

import pytest

from listkit.node import Node, SharedNode, share


class TestNode:
    """Tests for the exclusively-owned node."""

    def test_fields(self) -> None:
        """Fields hold the element and the link."""
        tail = Node(1)
        head = Node(2, tail)
        assert head.elem == 2
        assert head.next is tail
        assert tail.next is None

    def test_mutable(self) -> None:
        """An owned node's element can be reassigned."""
        node = Node(1)
        node.elem = 5
        assert node.elem == 5


class TestSharedNode:
    """Tests for the reference-counted node."""

    def test_starts_with_one_reference(self) -> None:
        """A fresh shared node has one holder."""
        assert SharedNode("a").count == 1

    def test_immutable(self) -> None:
        """A shared node's element and link are read-only."""
        node = SharedNode(1)
        with pytest.raises(AttributeError):
            node.elem = 2
        with pytest.raises(AttributeError):
            node.next = SharedNode(3)

    def test_share(self) -> None:
        """share() bumps the count and passes None through."""
        node = SharedNode(1)
        assert share(node) is node
        assert node.count == 2
        assert share(None) is None

    def test_sever_hands_over_successor(self) -> None:
        """sever() detaches the successor and keeps its count."""
        tail = SharedNode(1)
        head = SharedNode(2, tail)

        assert head.sever() is tail
        assert head.next is None
        assert tail.count == 1
