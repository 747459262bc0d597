from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from smartnotes_api.domain.exceptions import MalformedNoteError
from smartnotes_api.util import parse_rfc3339, rfc3339

TITLE_MAX_CHARS = 100
CONTENT_MAX_CHARS = 10_000
PREVIEW_CHARS = 200


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    @property
    def is_edited(self) -> bool:
        return self.updated_at != self.created_at

    def to_record(self) -> dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": rfc3339(self.created_at),
            "updatedAt": rfc3339(self.updated_at),
        }

    @classmethod
    def from_record(cls, record: Any) -> Note:
        if not isinstance(record, dict):
            raise MalformedNoteError("record_not_mapping")
        note_id = record.get("id")
        if not isinstance(note_id, str) or not note_id:
            raise MalformedNoteError("id_missing")
        for key in ("title", "content"):
            if not isinstance(record.get(key), str):
                raise MalformedNoteError(f"{key}_not_text", note_id)
        stamps: dict[str, datetime] = {}
        for key in ("createdAt", "updatedAt"):
            raw = record.get(key)
            if not isinstance(raw, str):
                raise MalformedNoteError(f"{key}_missing", note_id)
            try:
                stamps[key] = parse_rfc3339(raw)
            except ValueError as e:
                raise MalformedNoteError(f"{key}_invalid", note_id) from e
        return cls(
            id=note_id,
            title=record["title"],
            content=record["content"],
            created_at=stamps["createdAt"],
            updated_at=stamps["updatedAt"],
        )


class SortMode(str, Enum):
    NEWEST_FIRST = "newestFirst"
    OLDEST_FIRST = "oldestFirst"
    TITLE_ASC = "titleAsc"
    TITLE_DESC = "titleDesc"

    @classmethod
    def parse(cls, value: str | SortMode | None) -> SortMode:
        if value is None or value == "":
            return cls.NEWEST_FIRST
        if isinstance(value, SortMode):
            return value
        name = _SORT_ALIASES.get(value, value)
        try:
            return cls(name)
        except ValueError as e:
            raise ValueError(f"unknown_sort_mode: {value}") from e


# names used by the browser build's <select>
_SORT_ALIASES = {
    "dateDesc": SortMode.NEWEST_FIRST.value,
    "dateAsc": SortMode.OLDEST_FIRST.value,
}


@dataclass(frozen=True)
class QueryState:
    search_query: str = ""
    sort_mode: SortMode = SortMode.NEWEST_FIRST

    @classmethod
    def create(cls, raw_query: str | None = None, sort: str | SortMode | None = None) -> QueryState:
        # lower() keeps the typed characters; the filter casefolds on its own
        return cls(search_query=(raw_query or "").strip().lower(), sort_mode=SortMode.parse(sort))


@dataclass(frozen=True)
class NoteView:
    note: Note
    title_html: str
    preview_html: str
    truncated: bool = False


@dataclass(frozen=True)
class QueryResult:
    views: list[NoteView] = field(default_factory=list)
    total: int = 0
    query: str = ""
    sort_mode: SortMode = SortMode.NEWEST_FIRST

    @property
    def matched(self) -> int:
        return len(self.views)

    @property
    def notes(self) -> list[Note]:
        return [v.note for v in self.views]

    @property
    def empty_message(self) -> str | None:
        if self.views:
            return None
        if self.total == 0:
            return "No notes yet. Create your first note to get started!"
        return "No notes found matching your search."
