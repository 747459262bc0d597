from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from smartnotes_api.domain.entities import Note, NoteView
from smartnotes_api.util import rfc3339


class NoteOut(BaseModel):
    id: str
    title: str
    content: str
    created_at: str
    updated_at: str
    is_edited: bool

    @classmethod
    def from_note(cls, note: Note) -> NoteOut:
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            created_at=rfc3339(note.created_at),
            updated_at=rfc3339(note.updated_at),
            is_edited=note.is_edited,
        )


class NoteViewOut(NoteOut):
    title_html: str
    preview_html: str
    truncated: bool = False

    @classmethod
    def from_view(cls, view: NoteView) -> NoteViewOut:
        base = NoteOut.from_note(view.note).model_dump()
        return cls(**base, title_html=view.title_html, preview_html=view.preview_html, truncated=view.truncated)


class NoteListOut(BaseModel):
    items: list[NoteViewOut] = Field(default_factory=list)
    query: str = ""
    sort: str
    total: int
    matched: int
    empty_message: Optional[str] = None
    next_cursor: Optional[int] = None


class NoteCreateIn(BaseModel):
    title: str
    content: str


class NoteUpdateIn(BaseModel):
    title: str
    content: str
