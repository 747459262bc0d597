"""
Match highlighting for note titles and previews.

Text is HTML-escaped before any marker is inserted, and the query is escaped
with the same table, so the search runs entirely in escaped space. The result
is always safe to drop into a document regardless of what the note or the
query contain.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from smartnotes_api.domain.exceptions import MalformedNoteError

HTML_ENTITIES: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}

_HTML_TABLE = str.maketrans(HTML_ENTITIES)

_REGEX_META_RE = re.compile(r"([.*+?^${}()|\[\]\\])")


@dataclass(frozen=True)
class HighlightMarker:
    open_tag: str = '<span class="highlight">'
    close_tag: str = "</span>"

    @classmethod
    def with_class(cls, css_class: str) -> HighlightMarker:
        return cls(open_tag=f'<span class="{escape_html(css_class)}">')


DEFAULT_MARKER = HighlightMarker()


def escape_html(text: str) -> str:
    if not isinstance(text, str):
        raise MalformedNoteError("text_not_text")
    return text.translate(_HTML_TABLE)


def escape_regex(text: str) -> str:
    return _REGEX_META_RE.sub(r"\\\1", text)


def _unit_boundaries(raw: str) -> set[int]:
    """Offsets in the escaped form of ``raw`` that do not fall inside an entity."""
    bounds = {0}
    pos = 0
    for ch in raw:
        pos += len(HTML_ENTITIES.get(ch, ch))
        bounds.add(pos)
    return bounds


def find_matches(text: str, query: str) -> list[tuple[int, int]]:
    """
    Spans of ``query`` inside ``escape_html(text)``.

    Case-insensitive, greedy left-to-right, non-overlapping. A candidate that
    would start or end inside an entity is discarded and the scan resumes one
    character past its start.
    """
    if not isinstance(query, str):
        raise MalformedNoteError("query_not_text")
    escaped = escape_html(text)
    if not query:
        return []
    pattern = re.compile(escape_regex(escape_html(query)), re.IGNORECASE)
    bounds = _unit_boundaries(text)

    spans: list[tuple[int, int]] = []
    pos = 0
    while pos <= len(escaped):
        m = pattern.search(escaped, pos)
        if m is None:
            break
        start, end = m.span()
        if start in bounds and end in bounds:
            spans.append((start, end))
            pos = end
        else:
            pos = start + 1
    return spans


def highlight(text: str, query: str, *, marker: HighlightMarker = DEFAULT_MARKER) -> str:
    escaped = escape_html(text)
    spans = find_matches(text, query)
    if not spans:
        return escaped

    parts: list[str] = []
    last = 0
    for start, end in spans:
        parts.append(escaped[last:start])
        parts.append(marker.open_tag)
        parts.append(escaped[start:end])
        parts.append(marker.close_tag)
        last = end
    parts.append(escaped[last:])
    return "".join(parts)
