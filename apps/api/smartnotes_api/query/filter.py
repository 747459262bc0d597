from __future__ import annotations

from collections.abc import Iterable

from smartnotes_api.domain.entities import Note
from smartnotes_api.domain.exceptions import MalformedNoteError


def fold(text: str) -> str:
    return text.casefold()


def check_note(note: object) -> Note:
    title = getattr(note, "title", None)
    content = getattr(note, "content", None)
    note_id = getattr(note, "id", None)
    if not isinstance(title, str):
        raise MalformedNoteError("title_not_text", note_id if isinstance(note_id, str) else None)
    if not isinstance(content, str):
        raise MalformedNoteError("content_not_text", note_id if isinstance(note_id, str) else None)
    return note  # type: ignore[return-value]


def matches(note: Note, query: str) -> bool:
    if not isinstance(query, str):
        raise MalformedNoteError("query_not_text")
    check_note(note)
    needle = fold(query.strip())
    if not needle:
        return True
    return needle in fold(note.title) or needle in fold(note.content)


def filter_notes(notes: Iterable[Note], query: str) -> list[Note]:
    if not isinstance(query, str):
        raise MalformedNoteError("query_not_text")
    items = [check_note(n) for n in notes]
    needle = fold(query.strip())
    if not needle:
        return items
    return [n for n in items if needle in fold(n.title) or needle in fold(n.content)]
