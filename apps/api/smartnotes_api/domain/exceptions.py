from __future__ import annotations


class SmartNotesError(Exception):
    pass


class MalformedNoteError(SmartNotesError, ValueError):
    """A note record is missing a required field or carries a field of the wrong type."""

    def __init__(self, reason: str, note_id: str | None = None) -> None:
        self.reason = reason
        self.note_id = note_id
        detail = f"{reason} (note {note_id})" if note_id else reason
        super().__init__(detail)


class NoteValidationError(SmartNotesError, ValueError):
    pass


class NoteNotFoundError(SmartNotesError, LookupError):
    def __init__(self, note_id: str) -> None:
        self.note_id = note_id
        super().__init__(f'note "{note_id}" does not exist')


class StorageError(SmartNotesError):
    pass


class CorruptDataError(StorageError):
    pass


class StorageFullError(StorageError):
    pass
