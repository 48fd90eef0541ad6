"""Syntax highlighter tests, including multi-line comment propagation."""

from __future__ import annotations

from rawedit import rows
from rawedit.constants import (
    HL_COMMENT,
    HL_KEYWORD1,
    HL_KEYWORD2,
    HL_MLCOMMENT,
    HL_NORMAL,
    HL_NUMBER,
    HL_STRING,
)
from rawedit.syntax import HLDB, find_syntax, highlight, is_separator

C = HLDB[0]
PY = HLDB[1]


def test_block_comment_spans_rows(make_session) -> None:
    """Rows inside an open comment are comment; code after the close is not."""
    session = make_session(["/* start", "still in comment", "end */ code"], filename="a.c")
    first, middle, last = session.rows

    assert first.hl == [HL_MLCOMMENT] * len(first.render)
    assert first.hl_open_comment
    assert middle.hl == [HL_MLCOMMENT] * len(middle.render)
    assert middle.hl_open_comment
    assert last.hl[:6] == [HL_MLCOMMENT] * 6
    assert last.hl[6:] == [HL_NORMAL] * 5
    assert not last.hl_open_comment


def test_opening_comment_recolors_tail_and_closing_restores_it(make_session) -> None:
    session = make_session(["int a;", "int b;", "int c;"], filename="a.c")
    before = [row.hl[:] for row in session.rows]

    rows.insert_char(session, 0, 0, "*")
    rows.insert_char(session, 0, 0, "/")

    assert session.rows[0].chars == "/*int a;"
    for row in session.rows:
        assert row.hl == [HL_MLCOMMENT] * row.rsize
        assert row.hl_open_comment

    rows.delete_char(session, 0, 0)
    rows.delete_char(session, 0, 0)

    assert [row.hl for row in session.rows] == before
    assert not any(row.hl_open_comment for row in session.rows)


def test_propagation_runs_through_long_documents(make_session) -> None:
    session = make_session(["x = 1;"] * 3000, filename="big.c")
    rows.insert_row(session, 0, "/*")

    last = session.rows[-1]
    assert last.hl == [HL_MLCOMMENT] * last.rsize
    assert last.hl_open_comment


def test_deleting_row_rehighlights_successor(make_session) -> None:
    session = make_session(["/* open", "int a;"], filename="a.c")
    assert session.rows[1].hl == [HL_MLCOMMENT] * 6

    rows.delete_row(session, 0)

    assert session.rows[0].hl[:3] == [HL_KEYWORD2] * 3


def test_inserting_plain_row_after_open_comment_is_comment(make_session) -> None:
    session = make_session(["/* open", "close */ int a;"], filename="a.c")
    rows.insert_row(session, 1, "inside")

    assert session.rows[1].hl == [HL_MLCOMMENT] * 6
    assert session.rows[2].hl[:8] == [HL_MLCOMMENT] * 8


def test_keywords_and_numbers() -> None:
    hl, open_comment = highlight("if (x) return 1;", C)

    assert hl[0:2] == [HL_KEYWORD1] * 2
    assert hl[7:13] == [HL_KEYWORD1] * 6
    assert hl[14] == HL_NUMBER
    assert hl[15] == HL_NORMAL
    assert not open_comment


def test_secondary_keywords_have_their_own_class() -> None:
    hl, _ = highlight("unsigned int x;", C)
    assert hl[:8] == [HL_KEYWORD2] * 8
    assert hl[9:12] == [HL_KEYWORD2] * 3
    assert hl[13] == HL_NORMAL


def test_keyword_needs_trailing_separator() -> None:
    hl, _ = highlight("iffy intx", C)
    assert hl == [HL_NORMAL] * 9


def test_numbers_need_leading_separator() -> None:
    hl, _ = highlight("x1 = 3.14;", C)
    assert hl[1] == HL_NORMAL
    assert hl[5:9] == [HL_NUMBER] * 4


def test_strings_with_escapes() -> None:
    render = 'x = "a\\"b";'
    hl, _ = highlight(render, C)
    assert hl[4:10] == [HL_STRING] * 6
    assert hl[10] == HL_NORMAL


def test_comment_markers_inside_strings_are_ignored() -> None:
    hl, open_comment = highlight('s = "// /*";', C)
    assert HL_COMMENT not in hl
    assert HL_MLCOMMENT not in hl
    assert not open_comment


def test_line_comment_takes_rest_of_row() -> None:
    hl, _ = highlight("a = 2; // note", C)
    assert hl[7:] == [HL_COMMENT] * 7
    assert hl[4] == HL_NUMBER


def test_open_comment_state_is_carried_in() -> None:
    hl, open_comment = highlight("a */ b", C, in_comment=True)
    assert hl[:4] == [HL_MLCOMMENT] * 4
    assert hl[4:] == [HL_NORMAL] * 2
    assert not open_comment


def test_python_profile() -> None:
    hl, open_comment = highlight('def f(): """doc', PY)
    assert hl[:3] == [HL_KEYWORD1] * 3
    assert hl[9:] == [HL_MLCOMMENT] * 6
    assert open_comment

    hl, _ = highlight("x = None  # done", PY)
    assert hl[4:8] == [HL_KEYWORD2] * 4
    assert hl[10:] == [HL_COMMENT] * 6


def test_without_profile_everything_is_normal() -> None:
    hl, open_comment = highlight("/* int 42 */", None)
    assert hl == [HL_NORMAL] * 12
    assert not open_comment


def test_find_syntax_by_extension() -> None:
    assert find_syntax("src/main.c") is C
    assert find_syntax("widget.hpp") is C
    assert find_syntax("tool.py") is PY
    assert find_syntax("notes.c.txt") is None
    assert find_syntax("README") is None
    assert find_syntax(None) is None


def test_is_separator() -> None:
    for c in " \t,.()+-/*=~%<>[];":
        assert is_separator(c)
    assert is_separator("")
    assert is_separator("\0")
    assert not is_separator("a")
    assert not is_separator("_")
