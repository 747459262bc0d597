from functools import lru_cache

from smartnotes_api.config import load_settings
from smartnotes_api.domain.entities import QueryState
from smartnotes_api.query.engine import QueryEngine
from smartnotes_api.query.highlight import HighlightMarker
from smartnotes_api.service import NoteBook
from smartnotes_api.store import JsonFileNoteStore

@lru_cache()
def get_settings():
    return load_settings()

@lru_cache()
def get_store():
    settings = get_settings()
    return JsonFileNoteStore(settings.store_path, max_bytes=settings.max_store_bytes)

@lru_cache()
def get_engine():
    settings = get_settings()
    return QueryEngine(
        preview_chars=settings.preview_chars,
        marker=HighlightMarker.with_class(settings.highlight_class),
    )

@lru_cache()
def get_notebook():
    settings = get_settings()
    return NoteBook.open(get_store(), get_engine(), state=QueryState(sort_mode=settings.default_sort))

def reset_caches() -> None:
    for getter in (get_notebook, get_engine, get_store, get_settings):
        getter.cache_clear()
