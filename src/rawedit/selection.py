"""Range selection.

A selection is the half-open span between the anchor and the cursor in
document order. The boundary between two rows counts as one newline, so a
span that crosses rows joins the first row's prefix with the last row's
suffix when deleted. Nothing is painted into ``Row.hl``: the renderer asks
for :func:`render_span` every frame.
"""

from __future__ import annotations

from .models import Selection, Session
from .rows import append_text, char_to_render, delete_chars, delete_row

Position = tuple[int, int]


def _clamp(session: Session, pos: Position) -> Position:
    y, x = pos
    if session.numrows == 0:
        return 0, 0
    if y >= session.numrows:
        last = session.numrows - 1
        return last, session.rows[last].size
    y = max(0, y)
    return y, max(0, min(x, session.rows[y].size))


def selection_bounds(session: Session) -> tuple[Position, Position] | None:
    sel = session.selection
    if sel is None:
        return None
    a = _clamp(session, (sel.anchor_row, sel.anchor_col))
    b = _clamp(session, (session.cy, session.cx))
    return (a, b) if a <= b else (b, a)


def _mark_rows(session: Session, bounds: tuple[Position, Position] | None) -> None:
    if bounds is None:
        return
    (y0, _), (y1, _) = bounds
    for y in range(y0, min(y1, session.numrows - 1) + 1):
        session.rows[y].dirty = True


def start_selection(session: Session) -> None:
    if session.selection is None:
        session.selection = Selection(session.cy, session.cx)


def clear_selection(session: Session) -> None:
    _mark_rows(session, selection_bounds(session))
    session.selection = None


def extend_selection(session: Session, move) -> None:
    """Run ``move`` (a cursor motion) with the anchor held in place."""
    start_selection(session)
    before = selection_bounds(session)
    move()
    _mark_rows(session, before)
    _mark_rows(session, selection_bounds(session))


def render_span(session: Session, idx: int) -> tuple[int, int] | None:
    """Rendered columns ``[start, end)`` of row ``idx`` covered by the selection."""
    bounds = selection_bounds(session)
    if bounds is None:
        return None
    (y0, x0), (y1, x1) = bounds
    if idx < y0 or idx > y1:
        return None
    row = session.rows[idx]
    start = x0 if idx == y0 else 0
    end = x1 if idx == y1 else row.size
    if start >= end:
        return None
    return (
        char_to_render(row, start, session.tab_stop),
        char_to_render(row, end, session.tab_stop),
    )


def delete_selection(session: Session) -> bool:
    """Remove the selected span, leaving the cursor at its start.

    Returns False when there was nothing to delete.
    """
    bounds = selection_bounds(session)
    session.selection = None
    if bounds is None:
        return False
    (y0, x0), (y1, x1) = bounds
    if (y0, x0) == (y1, x1):
        _mark_rows(session, bounds)
        return False

    if y0 == y1:
        delete_chars(session, y0, x0, x1)
    else:
        suffix = session.rows[y1].chars[x1:]
        for y in range(y1, y0, -1):
            delete_row(session, y)
        delete_chars(session, y0, x0, session.rows[y0].size)
        if suffix:
            append_text(session, y0, suffix)

    session.cy, session.cx = y0, x0
    return True
