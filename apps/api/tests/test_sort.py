from datetime import datetime, timedelta, timezone

import pytest

from smartnotes_api.domain.entities import Note, SortMode
from smartnotes_api.domain.exceptions import MalformedNoteError
from smartnotes_api.query.sort import sort_notes

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _note(note_id: str, title: str, created: timedelta = timedelta(0)) -> Note:
    at = T0 + created
    return Note(id=note_id, title=title, content="c", created_at=at, updated_at=at)


def _titles(notes: list[Note]) -> list[str]:
    return [n.title for n in notes]


def test_title_ascending_is_case_insensitive() -> None:
    notes = [_note("1", "Banana"), _note("2", "apple"), _note("3", "Cherry")]
    assert _titles(sort_notes(notes, SortMode.TITLE_ASC)) == ["apple", "Banana", "Cherry"]
    assert _titles(sort_notes(notes, "titleDesc")) == ["Cherry", "Banana", "apple"]


def test_title_collation_places_accents_with_base_letter() -> None:
    notes = [_note("1", "zeta"), _note("2", "élan"), _note("3", "eagle"), _note("4", "Fig")]
    assert _titles(sort_notes(notes, SortMode.TITLE_ASC)) == ["eagle", "élan", "Fig", "zeta"]


def test_date_modes_compare_exact_instants() -> None:
    notes = [
        _note("a", "A", timedelta(milliseconds=1)),
        _note("b", "B", timedelta(0)),
        _note("c", "C", timedelta(days=-3)),
    ]
    assert [n.id for n in sort_notes(notes, SortMode.NEWEST_FIRST)] == ["a", "b", "c"]
    assert [n.id for n in sort_notes(notes, SortMode.OLDEST_FIRST)] == ["c", "b", "a"]


def test_default_mode_is_newest_first() -> None:
    notes = [_note("old", "x", timedelta(0)), _note("new", "y", timedelta(hours=1))]
    assert [n.id for n in sort_notes(notes)] == ["new", "old"]


@pytest.mark.parametrize("mode", list(SortMode))
def test_ties_keep_input_order(mode: SortMode) -> None:
    notes = [_note("1", "same"), _note("2", "Same"), _note("3", "SAME")]
    assert [n.id for n in sort_notes(notes, mode)] == ["1", "2", "3"]


def test_title_desc_is_reverse_of_asc_for_distinct_titles() -> None:
    notes = [_note(str(i), t) for i, t in enumerate(["delta", "Alpha", "charlie", "Bravo", "echo"])]
    asc = sort_notes(notes, SortMode.TITLE_ASC)
    desc = sort_notes(notes, SortMode.TITLE_DESC)
    assert list(reversed(asc)) == desc


def test_returns_new_list_and_leaves_input_alone() -> None:
    notes = [_note("1", "b"), _note("2", "a")]
    snapshot = list(notes)
    out = sort_notes(notes, SortMode.TITLE_ASC)
    assert out is not notes
    assert notes == snapshot


def test_legacy_mode_names_are_accepted() -> None:
    notes = [_note("old", "x", timedelta(0)), _note("new", "y", timedelta(hours=1))]
    assert [n.id for n in sort_notes(notes, "dateAsc")] == ["old", "new"]
    assert [n.id for n in sort_notes(notes, "dateDesc")] == ["new", "old"]


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(ValueError):
        sort_notes([], "byColour")


def test_malformed_timestamp_fails_fast() -> None:
    bad = Note(id="bad", title="t", content="c", created_at="yesterday", updated_at=T0)  # type: ignore[arg-type]
    with pytest.raises(MalformedNoteError):
        sort_notes([bad, _note("ok", "t")], SortMode.NEWEST_FIRST)
