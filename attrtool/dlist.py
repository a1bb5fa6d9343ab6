"""Circular doubly-linked list with a sentinel head and consistency checks."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class ListCorruptError(Exception):
    """Raised when a list's forward and backward links disagree."""

    def __init__(self, abortstr: str, head: ListNode, node: ListNode, count: int) -> None:
        super().__init__(
            f"{abortstr}: prev corrupt in node {node!r} ({count}) of {head!r}"
        )
        self.head = head
        self.node = node
        self.count = count


class ListNode:
    """An entry of a doubly-linked list; it links to itself when detached."""

    def __init__(self, value: Any = None) -> None:
        self.value = value
        self.next: ListNode = self
        self.prev: ListNode = self

    def __repr__(self) -> str:
        return f"<ListNode {self.value!r} at 0x{id(self):x}>"

    def unlink(self) -> None:
        """Remove this node from whatever list holds it."""
        self.next.prev = self.prev
        self.prev.next = self.next
        self.next = self
        self.prev = self


def check_node(node: ListNode, abortstr: str | None = None) -> ListNode | None:
    """Check the links of the list ``node`` is in.

    Returns ``node`` when consistent. On corruption returns None, or raises
    :class:`ListCorruptError` when ``abortstr`` is given.
    """

    def corrupt(bad: ListNode, count: int) -> None:
        if abortstr is not None:
            raise ListCorruptError(abortstr, node, bad, count)
        return None

    prev, cur, count = node, node.next, 0
    while cur is not node:
        count += 1
        if cur.prev is not prev:
            return corrupt(cur, count)
        prev, cur = cur, cur.next
    if node.prev is not prev:
        return corrupt(node, 0)
    return node


class ListHead:
    """The head of a doubly-linked list of :class:`ListNode` entries.

    With ``debug`` set, every change is followed by a consistency check and
    deletions verify that the node really belongs to this list.
    """

    def __init__(self, debug: bool = False) -> None:
        self.sentinel = ListNode()
        self.debug = debug

    def _debug_check(self, where: str) -> None:
        if self.debug:
            self.check(where)

    def add(self, node: ListNode) -> None:
        """Insert ``node`` at the start of the list."""
        head = self.sentinel
        node.next = head.next
        node.prev = head
        head.next.prev = node
        head.next = node
        self._debug_check("add")

    def add_tail(self, node: ListNode) -> None:
        """Append ``node`` at the end of the list."""
        head = self.sentinel
        node.next = head
        node.prev = head.prev
        head.prev.next = node
        head.prev = node
        self._debug_check("add_tail")

    def add_before(self, node: ListNode, other: ListNode) -> None:
        """Insert ``node`` immediately before ``other``."""
        node.next = other
        node.prev = other.prev
        other.prev = node
        node.prev.next = node
        self._debug_check("add_before")

    def empty(self) -> bool:
        """Return True if the list holds no entries."""
        self._debug_check("empty")
        return self.sentinel.next is self.sentinel

    def delete(self, node: ListNode) -> None:
        """Remove ``node``, which must be an entry of this list."""
        if self.debug and not any(entry is node for entry in self):
            raise ValueError(f"{node!r} is not in this list")
        if self.empty():
            raise ValueError("delete from an empty list")
        if self.debug:
            check_node(node, "delete")
        node.unlink()

    def top(self) -> ListNode | None:
        """Return the first entry, or None if the list is empty."""
        return None if self.empty() else self.sentinel.next

    def tail(self) -> ListNode | None:
        """Return the last entry, or None if the list is empty."""
        return None if self.empty() else self.sentinel.prev

    def pop(self) -> ListNode | None:
        """Remove and return the first entry, or None if the list is empty."""
        if self.empty():
            return None
        node = self.sentinel.next
        node.unlink()
        return node

    def check(self, abortstr: str | None = None) -> ListHead | None:
        """Return this head if its links are consistent; see :func:`check_node`."""
        return self if check_node(self.sentinel, abortstr) is not None else None

    def __iter__(self) -> Iterator[ListNode]:
        """Iterate front to back; the current entry may be deleted meanwhile."""
        cur = self.sentinel.next
        while cur is not self.sentinel:
            nxt = cur.next
            yield cur
            cur = nxt

    def __reversed__(self) -> Iterator[ListNode]:
        cur = self.sentinel.prev
        while cur is not self.sentinel:
            prv = cur.prev
            yield cur
            cur = prv

    def __len__(self) -> int:
        return sum(1 for _ in self)