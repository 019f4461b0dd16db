"""Dialog container format: a versioned header, typed items and a CRC-16 trailer."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol

VERSION_H = 1
VERSION_L = 1

SG_DIALOG_HEAP_SIZE = 1024
DIALOG_MAX_ANSWERS_COUNT = 8
VIRTUAL_FILE_SIZE = 0x100000
ITEM_DATA_BUF_SIZE = 0x10000

CRC_INIT = 0xFFFF
CRC_POLY = 0xCC27

HEADER_SIZE = 10
_TYPE_LIMIT = 0x5
_ID_MAX = 0xFFFFFFFF
_ITEM_HEAD = struct.Struct("<BII")
_ID_SIZE = struct.Struct("<II")
_CRC = struct.Struct("<H")


def crc16(data: bytes, crc: int = CRC_INIT) -> int:
    """Update ``crc`` with ``data`` using the reflected 0xCC27 polynomial."""
    for byte in data:
        crc ^= byte
        for _ in range(8):
            low = crc & 1
            crc >>= 1
            if low:
                crc ^= CRC_POLY
    return crc & 0xFFFF


class ItemType(IntEnum):
    """Kinds of items a dialog holds; EMPTY marks the end of the item list."""

    ANY = 0x0
    QUESTION = 0x1
    ANSWER = 0x2
    SOLUTION = 0x3
    DIALOG = 0x4
    EMPTY = 0xFF


@dataclass(frozen=True)
class DialogItem:
    """One stored item."""

    item_id: int
    item_type: ItemType
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class DialogFormatError(Exception):
    """Raised when stored dialog data is truncated, corrupt or of a newer version."""


@dataclass
class QuestItem:
    """Summary of a dialog file found on disk."""

    file_name: str = ""
    is_valid: bool = False
    size: int = 0
    first_quest: str = ""


@dataclass
class DialogDTO:
    """A question with its answers and the step each answer leads to."""

    quest_text: str = ""
    answers: list[str] = field(default_factory=list)
    next_act_ids: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.answers) != len(self.next_act_ids):
            raise ValueError("every answer needs exactly one next step")
        if len(self.answers) > DIALOG_MAX_ANSWERS_COUNT:
            raise ValueError(f"at most {DIALOG_MAX_ANSWERS_COUNT} answers are allowed")


class Store(Protocol):
    def read(self, offset: int, size: int) -> bytes: ...

    def write(self, offset: int, data: bytes) -> int: ...


class BytesStore:
    """Dialog storage kept in memory."""

    def __init__(self, data: bytes | None = None) -> None:
        self.data = bytearray(data or b"")

    def read(self, offset: int, size: int) -> bytes:
        if offset < 0 or size < 0:
            return b""
        return bytes(self.data[offset:offset + size])

    def write(self, offset: int, data: bytes) -> int:
        if offset < 0:
            return 0
        if offset > len(self.data):
            self.data.extend(bytes(offset - len(self.data)))
        self.data[offset:offset + len(data)] = data
        return len(data)


class FileStore:
    """Dialog storage backed by a file on disk."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)

    def read(self, offset: int, size: int) -> bytes:
        if offset < 0 or size < 0:
            return b""
        try:
            with open(self.path, "rb") as handle:
                handle.seek(offset)
                return handle.read(size)
        except FileNotFoundError:
            return b""

    def write(self, offset: int, data: bytes) -> int:
        if offset < 0:
            return 0
        mode = "r+b" if os.path.exists(self.path) else "w+b"
        with open(self.path, mode) as handle:
            handle.seek(offset)
            return handle.write(data)


@dataclass
class _Entry:
    item: DialogItem
    start: int
    end: int


def _record(item_type: ItemType | int, item_id: int, data: bytes) -> bytes:
    item_type = int(item_type)
    if not 0 <= item_type < _TYPE_LIMIT:
        raise ValueError(f"invalid item type: {item_type}")
    if len(data) > _ID_MAX:
        raise ValueError("item data too large")
    return _ITEM_HEAD.pack(item_type, item_id, len(data)) + data


class Dialog:
    """Reads and edits a dialog held in a store."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def _read_exact(self, offset: int, size: int) -> bytes:
        data = bytes(self.store.read(offset, size))
        if len(data) != size:
            raise DialogFormatError(f"short read of {size} bytes at offset {offset}")
        return data

    def _write_exact(self, offset: int, data: bytes) -> None:
        if self.store.write(offset, data) != len(data):
            raise OSError(f"short write of {len(data)} bytes at offset {offset}")

    def _scan(self) -> tuple[list[_Entry], int]:
        """Validate the whole dialog; return its items and the offset of the end tag."""
        header = self._read_exact(0, HEADER_SIZE)
        if header[4] > VERSION_H or header[5] > VERSION_L:
            raise DialogFormatError(f"unsupported version {header[4]}.{header[5]}")
        crc = crc16(header)
        offset = HEADER_SIZE
        entries: list[_Entry] = []
        while True:
            tag = self._read_exact(offset, 1)
            crc = crc16(tag, crc)
            if tag[0] == ItemType.EMPTY:
                break
            if tag[0] >= _TYPE_LIMIT:
                raise DialogFormatError(f"invalid item type {tag[0]} at offset {offset}")
            fields = self._read_exact(offset + 1, _ID_SIZE.size)
            crc = crc16(fields, crc)
            item_id, size = _ID_SIZE.unpack(fields)
            data = self._read_exact(offset + 1 + _ID_SIZE.size, size)
            crc = crc16(data, crc)
            end = offset + _ITEM_HEAD.size + size
            entries.append(_Entry(DialogItem(item_id, ItemType(tag[0]), data), offset, end))
            offset = end
        (stored,) = _CRC.unpack(self._read_exact(offset + 1, _CRC.size))
        if stored != crc:
            raise DialogFormatError("CRC mismatch")
        return entries, offset

    def create(self) -> None:
        """Write an empty dialog."""
        header = bytes(4) + bytes([VERSION_H, VERSION_L]) + bytes(4) + bytes([ItemType.EMPTY])
        self._write_exact(0, header + _CRC.pack(crc16(header)))

    def items(self) -> list[DialogItem]:
        """Return every item in stored order."""
        entries, _ = self._scan()
        return [entry.item for entry in entries]

    def read_item(self, item_id: int, max_size: int = ITEM_DATA_BUF_SIZE) -> DialogItem:
        """Return the item with ``item_id``; the last one wins if the id repeats."""
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        entries, _ = self._scan()
        found = [entry.item for entry in entries if entry.item.item_id == item_id]
        if not found:
            raise KeyError(item_id)
        item = found[-1]
        if item.size > max_size:
            raise ValueError(f"item {item_id} holds {item.size} bytes, more than {max_size}")
        return item

    def add_item(self, item_type: ItemType | int, data: bytes = b"") -> int:
        """Append an item under the next free id and return that id."""
        entries, end = self._scan()
        max_id = _ID_MAX
        for entry in entries:
            if entry.item.item_id > max_id or max_id == _ID_MAX:
                max_id = entry.item.item_id
        new_id = (max_id + 1) & _ID_MAX
        record = _record(item_type, new_id, bytes(data)) + bytes([ItemType.EMPTY])
        crc = crc16(record, crc16(self._read_exact(0, end)))
        self._write_exact(end, record + _CRC.pack(crc))
        return new_id

    def _replace(self, item_id: int, replacement: bytes) -> bool:
        entries, end = self._scan()
        target = next((e for e in entries if e.item.item_id == item_id), None)
        if target is None:
            return False
        prefix = self._read_exact(0, target.start)
        tail = self._read_exact(target.end, end + 1 - target.end)
        body = replacement + tail
        crc = crc16(body, crc16(prefix))
        self._write_exact(target.start, body + _CRC.pack(crc))
        return True

    def remove_item(self, item_id: int) -> bool:
        """Remove the first item with ``item_id``; return whether one was found."""
        return self._replace(item_id, b"")

    def modify_item(self, item_id: int, item_type: ItemType | int, data: bytes = b"") -> bool:
        """Replace the first item with ``item_id``, keeping its id; return whether one was found."""
        return self._replace(item_id, _record(item_type, item_id, bytes(data)))