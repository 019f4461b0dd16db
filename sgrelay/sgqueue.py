"""Bounded FIFO queue of fixed-size byte items, optionally rejecting duplicates."""

from __future__ import annotations

from collections import deque


class QueueError(Exception):
    """Base error for queue operations."""


class QueueFull(QueueError):
    """Raised when the queue holds its maximum number of items."""


class QueueEmpty(QueueError):
    """Raised when receiving from an empty queue."""


class ItemAlreadyExists(QueueError):
    """Raised when an excluding queue already holds an equal item."""


class SgQueue:
    """FIFO of ``heap_size // item_size`` items, each exactly ``item_size`` bytes."""

    def __init__(self, item_size: int, heap_size: int, excluding: bool = False) -> None:
        if item_size <= 0:
            raise ValueError("item_size must be positive")
        if heap_size < 0:
            raise ValueError("heap_size must not be negative")
        self.item_size = item_size
        self.capacity = heap_size // item_size
        self.excluding = bool(excluding)
        self._items: deque[bytes] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def put(self, item: bytes) -> None:
        """Add ``item`` to the front of the queue."""
        if len(self._items) >= self.capacity:
            raise QueueFull(f"queue is full ({self.capacity} items)")
        data = bytes(item)
        if len(data) != self.item_size:
            raise ValueError(f"item must be {self.item_size} bytes, got {len(data)}")
        if self.excluding and data in self._items:
            raise ItemAlreadyExists("item is already queued")
        self._items.append(data)

    def receive(self) -> bytes:
        """Remove and return the oldest item."""
        if not self._items:
            raise QueueEmpty("queue is empty")
        return self._items.popleft()