import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from smartnotes_api.config import Settings
from smartnotes_api.dependencies import get_notebook, get_settings
from smartnotes_api.domain.entities import QueryResult, QueryState
from smartnotes_api.domain.exceptions import (
    CorruptDataError,
    NoteNotFoundError,
    NoteValidationError,
    StorageFullError,
)
from smartnotes_api.domain.schemas import NoteCreateIn, NoteListOut, NoteOut, NoteUpdateIn, NoteViewOut
from smartnotes_api.presentation import render_notes_page
from smartnotes_api.service import NoteBook
from smartnotes_api.util import utc_now

router = APIRouter()
logger = logging.getLogger("smartnotes.api")


def _notebook() -> NoteBook:
    try:
        return get_notebook()
    except CorruptDataError as e:
        logger.error("store_corrupt", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="store_corrupt") from e


def _run(notebook: NoteBook, settings: Settings, q: Optional[str], sort: Optional[str]) -> QueryResult:
    try:
        state = QueryState.create(q, sort or settings.default_sort)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="unknown_sort_mode") from e
    return notebook.render(state)


def _rid(request: Request) -> str:
    return getattr(request.state, "request_id", "")


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/notes", response_model=NoteListOut)
def list_notes(
    q: Optional[str] = None,
    sort: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    cursor: int = Query(0, ge=0),
    notebook: NoteBook = Depends(_notebook),
    settings: Settings = Depends(get_settings),
):
    result = _run(notebook, settings, q, sort)
    page = result.views[cursor : cursor + limit]
    next_cursor = cursor + limit if cursor + limit < result.matched else None
    return NoteListOut(
        items=[NoteViewOut.from_view(v) for v in page],
        query=result.query,
        sort=result.sort_mode.value,
        total=result.total,
        matched=result.matched,
        empty_message=result.empty_message,
        next_cursor=next_cursor,
    )


@router.get("/notes/cards", response_class=HTMLResponse)
def note_cards(
    q: Optional[str] = None,
    sort: Optional[str] = None,
    notebook: NoteBook = Depends(_notebook),
    settings: Settings = Depends(get_settings),
):
    result = _run(notebook, settings, q, sort)
    return HTMLResponse(render_notes_page(result, utc_now()))


@router.post("/notes", response_model=NoteOut)
def create_note(payload: NoteCreateIn, request: Request, notebook: NoteBook = Depends(_notebook)):
    try:
        note = notebook.create(payload.title, payload.content)
    except NoteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except StorageFullError as e:
        raise HTTPException(status_code=507, detail="storage_full") from e
    logger.info("note_create", extra={"rid": _rid(request), "id": note.id})
    return NoteOut.from_note(note)


@router.get("/notes/{note_id}", response_model=NoteOut)
def get_note(note_id: str, notebook: NoteBook = Depends(_notebook)):
    try:
        return NoteOut.from_note(notebook.get(note_id))
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail="note_not_found") from e


@router.put("/notes/{note_id}", response_model=NoteOut)
def update_note(note_id: str, payload: NoteUpdateIn, request: Request, notebook: NoteBook = Depends(_notebook)):
    try:
        note = notebook.update(note_id, payload.title, payload.content)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail="note_not_found") from e
    except NoteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except StorageFullError as e:
        raise HTTPException(status_code=507, detail="storage_full") from e
    logger.info("note_update", extra={"rid": _rid(request), "id": note.id})
    return NoteOut.from_note(note)


@router.delete("/notes/{note_id}")
def delete_note(note_id: str, request: Request, notebook: NoteBook = Depends(_notebook)):
    try:
        notebook.delete(note_id)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail="note_not_found") from e
    except StorageFullError as e:
        raise HTTPException(status_code=507, detail="storage_full") from e
    logger.info("note_delete", extra={"rid": _rid(request), "id": note_id})
    return {"ok": True, "id": note_id}
