from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from smartnotes_api.domain.entities import Note


@runtime_checkable
class NoteStore(Protocol):
    def load(self) -> list[Note]:
        ...

    def save(self, notes: Sequence[Note]) -> None:
        ...
