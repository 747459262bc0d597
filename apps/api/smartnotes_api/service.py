from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from .domain.entities import CONTENT_MAX_CHARS, TITLE_MAX_CHARS, Note, QueryResult, QueryState, SortMode
from .domain.exceptions import NoteNotFoundError, NoteValidationError
from .domain.ports import NoteStore
from .query.engine import QueryEngine
from .util import generate_id, utc_now

logger = logging.getLogger("smartnotes.service")


def clean_fields(title: str, content: str) -> tuple[str, str]:
    if not isinstance(title, str) or not isinstance(content, str):
        raise NoteValidationError("fields_not_text")
    title = title.strip()
    content = content.strip()
    if not title:
        raise NoteValidationError("title_empty")
    if not content:
        raise NoteValidationError("content_empty")
    if len(title) > TITLE_MAX_CHARS:
        raise NoteValidationError("title_too_long")
    if len(content) > CONTENT_MAX_CHARS:
        raise NoteValidationError("content_too_long")
    return title, content


class NoteBook:
    """
    Owns the note collection and the current query state.

    Every mutation is persisted immediately; ``render`` hands the current
    collection and state to the query engine. One instance is shared by all
    request threads, so each read-save-assign step runs under ``_lock``.
    """

    def __init__(
        self,
        store: NoteStore,
        engine: QueryEngine | None = None,
        *,
        notes: list[Note] | None = None,
        state: QueryState | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        self.store = store
        self.engine = engine or QueryEngine()
        self.state = state or QueryState()
        self.clock = clock
        self.id_factory = id_factory
        self._notes: list[Note] = list(notes or [])
        self._lock = threading.RLock()

    @classmethod
    def open(cls, store: NoteStore, engine: QueryEngine | None = None, **kwargs) -> NoteBook:
        notes = store.load()
        logger.info("notebook_open", extra={"count": len(notes)})
        return cls(store, engine, notes=notes, **kwargs)

    @property
    def notes(self) -> tuple[Note, ...]:
        with self._lock:
            return tuple(self._notes)

    def _index_of(self, note_id: str) -> int:
        for idx, note in enumerate(self._notes):
            if note.id == note_id:
                return idx
        raise NoteNotFoundError(note_id)

    def _commit(self, notes: list[Note]) -> None:
        # persist first so a failed save leaves memory unchanged
        self.store.save(notes)
        self._notes = notes

    def get(self, note_id: str) -> Note:
        with self._lock:
            return self._notes[self._index_of(note_id)]

    def create(self, title: str, content: str) -> Note:
        title, content = clean_fields(title, content)
        with self._lock:
            note_id = self.id_factory()
            while any(n.id == note_id for n in self._notes):
                note_id = self.id_factory()
            now = self.clock()
            note = Note(id=note_id, title=title, content=content, created_at=now, updated_at=now)
            self._commit([note, *self._notes])
        logger.debug("note_create", extra={"id": note.id})
        return note

    def update(self, note_id: str, title: str, content: str) -> Note:
        with self._lock:
            idx = self._index_of(note_id)
            title, content = clean_fields(title, content)
            current = self._notes[idx]
            updated_at = max(self.clock(), current.created_at)
            note = replace(current, title=title, content=content, updated_at=updated_at)
            notes = list(self._notes)
            notes[idx] = note
            self._commit(notes)
        logger.debug("note_update", extra={"id": note.id})
        return note

    def delete(self, note_id: str) -> None:
        with self._lock:
            self._index_of(note_id)
            self._commit([n for n in self._notes if n.id != note_id])
        logger.debug("note_delete", extra={"id": note_id})

    def set_search(self, raw_query: str | None) -> None:
        self.state = QueryState.create(raw_query, self.state.sort_mode)

    def clear_search(self) -> None:
        self.set_search("")

    def set_sort(self, mode: str | SortMode) -> None:
        self.state = QueryState(search_query=self.state.search_query, sort_mode=SortMode.parse(mode))

    def render(self, state: QueryState | None = None) -> QueryResult:
        with self._lock:
            notes = list(self._notes)
            state = state or self.state
        return self.engine.execute(notes, state)
