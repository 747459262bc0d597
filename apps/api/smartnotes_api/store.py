from __future__ import annotations

import errno
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from .domain.entities import Note
from .domain.exceptions import CorruptDataError, MalformedNoteError, StorageFullError
from .util import atomic_write_text, dump_json

logger = logging.getLogger("smartnotes.store")

_FULL_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}


def decode_notes(raw: str) -> list[Note]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptDataError("store_not_json") from e
    if not isinstance(data, list):
        raise CorruptDataError("store_not_list")
    notes: list[Note] = []
    seen: set[str] = set()
    for record in data:
        try:
            note = Note.from_record(record)
        except MalformedNoteError as e:
            raise CorruptDataError(f"store_record_invalid: {e}") from e
        if note.id in seen:
            raise CorruptDataError(f"store_duplicate_id: {note.id}")
        seen.add(note.id)
        notes.append(note)
    return notes


def encode_notes(notes: Sequence[Note]) -> str:
    return dump_json([n.to_record() for n in notes])


class JsonFileNoteStore:
    """The whole collection as one JSON array in a single file."""

    def __init__(self, path: Path, max_bytes: int | None = None) -> None:
        self.path = path
        self.max_bytes = max_bytes

    def load(self) -> list[Note]:
        if not self.path.exists():
            return []
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return []
        notes = decode_notes(raw)
        logger.debug("store_load", extra={"path": str(self.path), "count": len(notes)})
        return notes

    def save(self, notes: Sequence[Note]) -> None:
        payload = encode_notes(notes)
        size = len(payload.encode("utf-8"))
        if self.max_bytes is not None and size > self.max_bytes:
            raise StorageFullError(f"store_quota_exceeded: {size} > {self.max_bytes}")
        try:
            atomic_write_text(self.path, payload)
        except OSError as e:
            if e.errno in _FULL_ERRNOS:
                raise StorageFullError("store_disk_full") from e
            raise
        logger.debug("store_save", extra={"path": str(self.path), "count": len(notes), "bytes": size})


class MemoryNoteStore:
    def __init__(self, notes: Sequence[Note] = ()) -> None:
        self._notes = list(notes)
        self.saves = 0

    def load(self) -> list[Note]:
        return list(self._notes)

    def save(self, notes: Sequence[Note]) -> None:
        self._notes = list(notes)
        self.saves += 1
