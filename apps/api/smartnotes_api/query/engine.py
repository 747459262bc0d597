from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from smartnotes_api.domain.entities import PREVIEW_CHARS, Note, NoteView, QueryResult, QueryState, SortMode
from smartnotes_api.query.filter import filter_notes
from smartnotes_api.query.highlight import DEFAULT_MARKER, HighlightMarker, highlight
from smartnotes_api.query.sort import sort_notes

logger = logging.getLogger("smartnotes.query")

ELLIPSIS = "..."


def run_query(notes: Sequence[Note], search_query: str, sort_mode: SortMode | str) -> list[Note]:
    return sort_notes(filter_notes(notes, search_query), sort_mode)


def build_view(
    note: Note,
    search_query: str,
    *,
    preview_chars: int = PREVIEW_CHARS,
    marker: HighlightMarker = DEFAULT_MARKER,
) -> NoteView:
    query = search_query.strip() if isinstance(search_query, str) else search_query
    truncated = len(note.content) > preview_chars
    preview = note.content[:preview_chars] if truncated else note.content
    # highlight the already-cut preview so no marker straddles the cut
    preview_html = highlight(preview, query, marker=marker)
    if truncated:
        preview_html += ELLIPSIS
    return NoteView(
        note=note,
        title_html=highlight(note.title, query, marker=marker),
        preview_html=preview_html,
        truncated=truncated,
    )


def build_views(
    notes: Sequence[Note],
    search_query: str,
    *,
    preview_chars: int = PREVIEW_CHARS,
    marker: HighlightMarker = DEFAULT_MARKER,
) -> list[NoteView]:
    return [build_view(n, search_query, preview_chars=preview_chars, marker=marker) for n in notes]


class QueryEngine:
    """
    Stateless filter -> sort -> highlight pipeline.

    Holds only presentation settings; every call recomputes from the notes
    it is handed.
    """

    def __init__(self, *, preview_chars: int = PREVIEW_CHARS, marker: HighlightMarker = DEFAULT_MARKER) -> None:
        if preview_chars < 1:
            raise ValueError("preview_chars must be positive")
        self.preview_chars = preview_chars
        self.marker = marker

    def execute(self, notes: Sequence[Note], state: QueryState) -> QueryResult:
        start = time.perf_counter()
        ordered = run_query(notes, state.search_query, state.sort_mode)
        views = build_views(ordered, state.search_query, preview_chars=self.preview_chars, marker=self.marker)
        result = QueryResult(views=views, total=len(notes), query=state.search_query, sort_mode=state.sort_mode)
        logger.debug(
            "query_run",
            extra={
                "query": state.search_query,
                "sort": state.sort_mode.value,
                "total": result.total,
                "matched": result.matched,
                "ms": (time.perf_counter() - start) * 1000.0,
            },
        )
        return result
