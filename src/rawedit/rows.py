"""Row store and tab/column mapping.

Every mutating function re-derives ``render`` and ``hl`` for the rows it
touches before returning, and keeps ``Row.idx`` equal to the row's position.
Out-of-range positions are ignored: they are caller mistakes, not user errors.
"""

from __future__ import annotations

from .constants import RAWEDIT_TAB_STOP
from .models import Row, Session
from .syntax import update_syntax


def tab_width(rx: int, tab_stop: int = RAWEDIT_TAB_STOP) -> int:
    return tab_stop - (rx % tab_stop)


def char_to_render(row: Row, cx: int, tab_stop: int = RAWEDIT_TAB_STOP) -> int:
    rx = 0
    for ch in row.chars[: max(0, cx)]:
        if ch == "\t":
            rx += tab_width(rx, tab_stop)
        else:
            rx += 1
    return rx


def render_to_char(row: Row, rx: int, tab_stop: int = RAWEDIT_TAB_STOP) -> int:
    """Map a rendered column back to the nearest character boundary.

    A column inside a tab snaps to whichever edge of the tab is closer; the
    midpoint goes to the right edge.
    """
    cur_rx = 0
    for cx, ch in enumerate(row.chars):
        old_rx = cur_rx
        cur_rx += tab_width(cur_rx, tab_stop) if ch == "\t" else 1
        if cur_rx > rx:
            if rx - old_rx >= cur_rx - rx:
                return cx + 1
            return cx
    return row.size


def expand_tabs(chars: str, tab_stop: int = RAWEDIT_TAB_STOP) -> str:
    out: list[str] = []
    idx = 0
    for ch in chars:
        if ch == "\t":
            out.append(" ")
            idx += 1
            while idx % tab_stop != 0:
                out.append(" ")
                idx += 1
        else:
            out.append(ch)
            idx += 1
    return "".join(out)


def update_row(session: Session, idx: int) -> None:
    row = session.rows[idx]
    row.render = expand_tabs(row.chars, session.tab_stop)
    row.dirty = True
    update_syntax(session, idx)


def _renumber(session: Session, start: int) -> None:
    for j in range(start, session.numrows):
        row = session.rows[j]
        if row.idx != j:
            row.idx = j
            if session.is_visible(j):
                row.dirty = True


def insert_row(session: Session, at: int, text: str) -> None:
    if at < 0 or at > session.numrows:
        return
    session.rows.insert(at, Row(idx=at, chars=text))
    _renumber(session, at + 1)
    update_row(session, at)
    # The row below now has a different predecessor.
    if at + 1 < session.numrows:
        update_syntax(session, at + 1)
    session.dirty += 1


def delete_row(session: Session, at: int) -> None:
    if at < 0 or at >= session.numrows:
        return
    del session.rows[at]
    _renumber(session, at)
    if at < session.numrows:
        update_syntax(session, at)
    session.dirty += 1


def insert_char(session: Session, idx: int, at: int, c: str) -> None:
    row = session.row_at(idx)
    if row is None:
        return
    if at < 0 or at > row.size:
        at = row.size
    row.chars = row.chars[:at] + c + row.chars[at:]
    update_row(session, idx)
    session.dirty += 1


def delete_char(session: Session, idx: int, at: int) -> None:
    row = session.row_at(idx)
    if row is None or at < 0 or at >= row.size:
        return
    row.chars = row.chars[:at] + row.chars[at + 1 :]
    update_row(session, idx)
    session.dirty += 1


def delete_chars(session: Session, idx: int, start: int, end: int) -> None:
    """Remove the half-open character range ``[start, end)`` from a row."""
    row = session.row_at(idx)
    if row is None:
        return
    start = max(0, start)
    end = min(row.size, end)
    if start >= end:
        return
    row.chars = row.chars[:start] + row.chars[end:]
    update_row(session, idx)
    session.dirty += 1


def append_text(session: Session, idx: int, text: str) -> None:
    row = session.row_at(idx)
    if row is None:
        return
    row.chars += text
    update_row(session, idx)
    session.dirty += 1


def split_row(session: Session, idx: int, at: int, indent: str = "") -> None:
    """Move the suffix starting at ``at`` onto a new row below.

    ``indent`` is prepended to the new row.
    """
    row = session.row_at(idx)
    if row is None or at < 0 or at > row.size:
        return
    suffix = row.chars[at:]
    row.chars = row.chars[:at]
    update_row(session, idx)
    insert_row(session, idx + 1, indent + suffix)


def join_row(session: Session, idx: int) -> None:
    """Append the next row onto row ``idx`` and remove the next row."""
    if idx < 0 or idx + 1 >= session.numrows:
        return
    append_text(session, idx, session.rows[idx + 1].chars)
    delete_row(session, idx + 1)


def rows_to_string(session: Session) -> str:
    return "".join(f"{row.chars}\n" for row in session.rows)
