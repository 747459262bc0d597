from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from datetime import datetime
from functools import lru_cache

from pyuca import Collator

from smartnotes_api.domain.entities import Note, SortMode
from smartnotes_api.domain.exceptions import MalformedNoteError
from smartnotes_api.query.filter import check_note


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # loads the DUCET table once per process
    return Collator()


def title_sort_key(title: str) -> tuple[int, ...]:
    folded = unicodedata.normalize("NFC", title).casefold()
    return _collator().sort_key(folded)


def _created_at(note: Note) -> datetime:
    created = note.created_at
    if not isinstance(created, datetime):
        raise MalformedNoteError("created_at_not_timestamp", note.id)
    return created


def sort_notes(notes: Iterable[Note], mode: SortMode | str = SortMode.NEWEST_FIRST) -> list[Note]:
    mode = SortMode.parse(mode)
    items = [check_note(n) for n in notes]

    if mode is SortMode.NEWEST_FIRST:
        return sorted(items, key=_created_at, reverse=True)
    if mode is SortMode.OLDEST_FIRST:
        return sorted(items, key=_created_at)
    return sorted(items, key=lambda n: title_sort_key(n.title), reverse=mode is SortMode.TITLE_DESC)
