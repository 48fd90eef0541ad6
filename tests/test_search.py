"""Incremental search tests: direction, wraparound and highlight restore."""

from __future__ import annotations

from rawedit.constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_UP,
    BACKSPACE,
    ENTER,
    ESC,
    HL_MATCH,
)
from rawedit.search import SearchState


def test_first_key_finds_first_match(make_session) -> None:
    session = make_session(["nothing", "x foo", "foo z"])
    search = SearchState()

    search(session, "foo", ord("o"))

    assert (session.cy, session.cx) == (1, 2)
    assert session.rows[1].hl[2:5] == [HL_MATCH] * 3
    assert session.rowoff == session.numrows
    assert search.last_match == 1


def test_search_wraps_around_document_end(make_session) -> None:
    session = make_session(["foo", "bar", "foo again"])
    search = SearchState()
    search.last_match = 2

    search(session, "foo", ARROW_DOWN)

    assert session.cy == 0
    assert search.last_match == 0


def test_moving_to_next_match_restores_previous_row(make_session) -> None:
    session = make_session(["int foo;", "bar", "foo = 1;"], filename="a.c")
    original = [row.hl[:] for row in session.rows]
    search = SearchState()

    search(session, "foo", ord("o"))
    assert session.cy == 0
    search(session, "foo", ARROW_DOWN)

    assert session.cy == 2
    assert session.rows[0].hl == original[0]
    assert session.rows[0].dirty
    assert session.rows[2].hl[:3] == [HL_MATCH] * 3

    search(session, "foo", ESC)
    assert [row.hl for row in session.rows] == original


def test_backward_search(make_session) -> None:
    session = make_session(["foo 1", "bar", "foo 2", "foo 3"])
    search = SearchState()

    search(session, "foo", ord("f"))
    assert session.cy == 0
    search(session, "foo", ARROW_UP)
    assert session.cy == 3
    search(session, "foo", ARROW_LEFT)
    assert session.cy == 2


def test_match_after_tab_maps_to_character_column(make_session) -> None:
    session = make_session(["\tfoo"])
    SearchState()(session, "foo", ord("o"))
    assert session.cx == 1
    assert session.rows[0].hl[8:11] == [HL_MATCH] * 3


def test_no_match_leaves_cursor_alone(make_session) -> None:
    session = make_session(["abc", "def"])
    session.cy, session.cx = 1, 2
    search = SearchState()

    search(session, "zzz", ord("z"))

    assert (session.cy, session.cx) == (1, 2)
    assert search.last_match == -1
    assert search.saved_hl is None


def test_empty_query_matches_nothing(make_session) -> None:
    session = make_session(["abc"])
    search = SearchState()

    search(session, "", BACKSPACE)

    assert search.last_match == -1
    assert HL_MATCH not in session.rows[0].hl


def test_enter_and_escape_reset_state(make_session) -> None:
    session = make_session(["a foo", "foo b"])
    search = SearchState()
    search(session, "foo", ord("o"))
    search(session, "foo", ARROW_DOWN)
    assert search.direction == 1

    search(session, "foo", ENTER)

    assert search.last_match == -1
    assert search.direction == 1
    assert HL_MATCH not in session.rows[1].hl


def test_restore_skips_row_whose_length_changed(make_session) -> None:
    session = make_session(["a foo"])
    search = SearchState()
    search(session, "foo", ord("o"))
    session.rows[0].hl = [0, 0]
    session.rows[0].render = "ab"

    search.restore_highlight(session)

    assert session.rows[0].hl == [0, 0]
    assert search.saved_hl is None
