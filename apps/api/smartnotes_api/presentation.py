from __future__ import annotations

from datetime import datetime

from .domain.entities import Note, NoteView, QueryResult
from .query.highlight import escape_html

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_relative_date(when: datetime, now: datetime) -> str:
    local = when.astimezone(now.tzinfo) if now.tzinfo else when
    days = abs((now.date() - local.date()).days)
    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    return f"{_MONTHS[local.month - 1]} {local.day}, {local.year}"


def date_info(note: Note, now: datetime) -> str:
    created = format_relative_date(note.created_at, now)
    if note.is_edited:
        return f"Created: {created} • Updated: {format_relative_date(note.updated_at, now)}"
    return f"Created: {created}"


def render_note_card(view: NoteView, now: datetime) -> str:
    note_id = escape_html(view.note.id)
    return (
        f'<div class="note-card" data-note-id="{note_id}">\n'
        f'  <div class="note-card-header">\n'
        f'    <div class="note-card-title">{view.title_html}</div>\n'
        f'    <div class="note-card-actions">\n'
        f'      <button class="icon-btn edit-btn" title="Edit note">Edit</button>\n'
        f'      <button class="icon-btn delete-btn delete" title="Delete note">Delete</button>\n'
        f"    </div>\n"
        f"  </div>\n"
        f'  <div class="note-card-content">{view.preview_html}</div>\n'
        f'  <div class="note-card-footer">{escape_html(date_info(view.note, now))}</div>\n'
        f"</div>"
    )


def render_notes_page(result: QueryResult, now: datetime) -> str:
    if result.empty_message:
        return f'<div class="empty-state"><p>{escape_html(result.empty_message)}</p></div>'
    cards = "\n".join(render_note_card(v, now) for v in result.views)
    return f'<div class="notes-container">\n{cards}\n</div>'
