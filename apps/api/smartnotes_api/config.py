from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from smartnotes_api.domain.entities import PREVIEW_CHARS, SortMode


@dataclass(frozen=True)
class Settings:
    store_path: Path
    preview_chars: int
    default_sort: SortMode
    highlight_class: str
    max_store_bytes: int | None
    api_auth_mode: str
    api_auth_token: str | None
    api_debug_log: bool
    log_level: str


def load_settings() -> Settings:
    store_path = Path(os.environ.get("NOTES_STORE_PATH", "./data/notes.json")).resolve()
    preview_chars = int(os.environ.get("NOTES_PREVIEW_CHARS", str(PREVIEW_CHARS)))
    default_sort = SortMode.parse(os.environ.get("NOTES_DEFAULT_SORT", SortMode.NEWEST_FIRST.value))
    highlight_class = os.environ.get("NOTES_HIGHLIGHT_CLASS", "highlight")
    raw_max = os.environ.get("NOTES_MAX_STORE_BYTES")
    max_store_bytes = int(raw_max) if raw_max else None
    api_auth_mode = os.environ.get("API_AUTH_MODE", "none").lower()
    api_auth_token = os.environ.get("API_AUTH_TOKEN")
    api_debug_log = os.environ.get("API_DEBUG_LOG", "false").lower() == "true"
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    return Settings(
        store_path=store_path,
        preview_chars=preview_chars,
        default_sort=default_sort,
        highlight_class=highlight_class,
        max_store_bytes=max_store_bytes,
        api_auth_mode=api_auth_mode,
        api_auth_token=api_auth_token,
        api_debug_log=api_debug_log,
        log_level=log_level,
    )
