"""A thread-safe FIFO queue of keyed items with a key index.

Items are kept in insertion order. Each key appears at most once: enqueuing
an item whose key is already present replaces the stored value in place
without moving the item. Values are copied on the way in and on the way out,
so callers never share storage with the queue.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass
from typing import Any, Iterator

KEY_MAX = 0xFFFF_FFFF


class QueueEmptyError(LookupError):
    """Raised when taking an item from an empty queue."""


@dataclass(frozen=True)
class Item:
    """A key (an unsigned 32-bit integer) and the value stored under it."""

    key: int
    value: Any = None

    def __post_init__(self) -> None:
        if isinstance(self.key, bool) or not isinstance(self.key, int):
            raise TypeError(f"key must be an int, not {type(self.key).__name__}")
        if not 0 <= self.key <= KEY_MAX:
            raise ValueError(f"key {self.key} outside 0..{KEY_MAX}")


@dataclass(eq=False)
class Node:
    """A link in the queue's chain of items."""

    item: Item
    next: Node | None = None

    def clone(self) -> Node:
        """Return a new node holding the same item and pointing at the same successor."""
        return Node(self.item, self.next)


class KeyedQueue:
    """FIFO queue whose items are indexed by key."""

    def __init__(self) -> None:
        self._head: Node | None = None
        self._tail: Node | None = None
        self._index: dict[int, Node] = {}
        self._lock = threading.Lock()

    def enqueue(self, item: Item) -> None:
        """Append ``item``, or overwrite the value of the item already under its key."""
        stored = Item(item.key, copy.copy(item.value))
        with self._lock:
            existing = self._index.get(stored.key)
            if existing is not None:
                existing.item = stored
                return
            node = Node(stored)
            if self._tail is None:
                self._head = node
            else:
                self._tail.next = node
            self._tail = node
            self._index[stored.key] = node

    def dequeue(self) -> Item:
        """Remove and return the oldest item; raise QueueEmptyError when empty."""
        with self._lock:
            node = self._head
            if node is None:
                raise QueueEmptyError("queue is empty")
            self._head = node.next
            if self._head is None:
                self._tail = None
            if self._index.get(node.item.key) is node:
                del self._index[node.item.key]
            item = node.item
        return Item(item.key, copy.copy(item.value))

    def range(self, start: int, end: int) -> KeyedQueue:
        """Return a new queue holding copies of the items with ``start <= key <= end``."""
        result = KeyedQueue()
        with self._lock:
            node = self._head
            while node is not None:
                if start <= node.item.key <= end:
                    result.enqueue(node.item)
                node = node.next
        return result

    def __len__(self) -> int:
        with self._lock:
            return len(self._index)

    def __iter__(self) -> Iterator[Item]:
        with self._lock:
            items = []
            node = self._head
            while node is not None:
                items.append(node.item)
                node = node.next
        return iter(items)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._index