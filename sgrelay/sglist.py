"""Sorted, capacity-bounded list of items addressed by unsigned 32-bit keys."""

from __future__ import annotations

from bisect import bisect_left
from typing import Any, Iterator

KEY_MAX = 0xFFFFFFFF


class SgListError(Exception):
    """Raised when the list cannot perform the requested operation."""


class SgListFull(SgListError):
    """Raised when the list has reached its capacity."""


class SgList:
    """Items kept in ascending key order, located by binary search."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._keys: list[int] = []
        self._items: list[Any] = []

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        return iter(list(zip(self._keys, self._items)))

    def _check_room(self) -> None:
        if len(self._keys) >= self.capacity:
            raise SgListFull(f"list is full ({self.capacity} items)")

    def _find(self, key: int) -> int:
        index = bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            return index
        return -1

    def _lower_bound(self, key: int) -> int:
        """Index of the first key >= ``key``; keys below the first one are not found."""
        if not self._keys:
            raise KeyError(key)
        index = bisect_left(self._keys, key)
        if index >= len(self._keys) or (index == 0 and self._keys[0] != key):
            raise KeyError(key)
        return index

    def add(self, item: Any) -> int:
        """Append ``item`` under a key one above the largest key; return the new key."""
        self._check_room()
        new_key = 0
        if self._keys:
            new_key = (self._keys[-1] + 1) & KEY_MAX
            if new_key == 0:
                raise SgListError("key space exhausted")
        self._keys.append(new_key)
        self._items.append(item)
        return new_key

    def put(self, key: int, item: Any) -> int:
        """Insert or replace the item stored under ``key``; return its index."""
        if not 0 <= key <= KEY_MAX:
            raise ValueError(f"key out of range: {key}")
        self._check_room()
        index = bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            self._items[index] = item
            return index
        self._keys.insert(index, key)
        self._items.insert(index, item)
        return index

    def get(self, key: int) -> Any:
        """Return the item stored under ``key``; absent or ``None`` items raise KeyError."""
        index = self._find(key)
        if index < 0 or self._items[index] is None:
            raise KeyError(key)
        return self._items[index]

    def get_repeat(self, key: int, previous_index: int) -> tuple[int, Any]:
        """Look up ``key`` trying ``previous_index`` first; return ``(index, item)``."""
        if not self._keys:
            raise KeyError(key)
        if (
            0 <= previous_index < len(self._keys)
            and self._keys[previous_index] == key
            and self._items[previous_index] is not None
        ):
            return previous_index, self._items[previous_index]
        index = self._find(key)
        if index < 0 or self._items[index] is None:
            raise KeyError(key)
        return index, self._items[index]

    def first(self) -> tuple[int, Any]:
        """Return ``(key, item)`` of the lowest key."""
        if not self._keys:
            raise KeyError("list is empty")
        return self._keys[0], self._items[0]

    def next_after(self, key: int) -> tuple[int, Any]:
        """Return ``(key, item)`` of the first entry whose key is above ``key``."""
        index = self._lower_bound((key + 1) & KEY_MAX)
        return self._keys[index], self._items[index]

    def nearest(self, key: int) -> tuple[int, Any]:
        """Return ``(key, item)`` of ``key`` or of the next higher key; key 0 gives the first."""
        if not self._keys:
            raise KeyError(key)
        if key == 0:
            return self.first()
        index = self._lower_bound(key)
        return self._keys[index], self._items[index]

    def delete(self, key: int) -> Any:
        """Remove the entry under ``key`` and return its item."""
        index = self._find(key)
        if index < 0:
            raise KeyError(key)
        del self._keys[index]
        return self._items.pop(index)