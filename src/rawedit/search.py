from __future__ import annotations

import logging

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ENTER,
    ESC,
    HL_MATCH,
)
from .models import Session
from .rows import render_to_char

logger = logging.getLogger(__name__)


class SearchState:
    """Incremental search driven by the prompt callback.

    Only one row carries the match highlight at a time; its previous
    highlight values are kept and put back before the next step.
    """

    def __init__(self) -> None:
        self.last_match = -1
        self.direction = 1
        self.saved_hl_line = -1
        self.saved_hl: list[int] | None = None

    def restore_highlight(self, session: Session) -> None:
        if self.saved_hl is not None:
            row = session.row_at(self.saved_hl_line)
            if row is not None and len(self.saved_hl) == row.rsize:
                row.hl = self.saved_hl
                row.dirty = True
        self.saved_hl = None
        self.saved_hl_line = -1

    def reset(self) -> None:
        self.last_match = -1
        self.direction = 1

    def __call__(self, session: Session, query: str, key: int) -> None:
        self.step(session, query, key)

    def step(self, session: Session, query: str, key: int) -> None:
        self.restore_highlight(session)

        if key in (ENTER, ESC):
            self.reset()
            return
        if key in (ARROW_RIGHT, ARROW_DOWN):
            self.direction = 1
        elif key in (ARROW_LEFT, ARROW_UP):
            self.direction = -1
        else:
            self.reset()

        if self.last_match == -1:
            self.direction = 1
        if not query:
            return

        current = self.last_match
        for _ in range(session.numrows):
            current += self.direction
            if current == -1:
                current = session.numrows - 1
            elif current == session.numrows:
                current = 0

            row = session.rows[current]
            offset = row.render.find(query)
            if offset == -1:
                continue

            self.last_match = current
            session.cy = current
            session.cx = render_to_char(row, offset, session.tab_stop)
            # Past the end so the next scroll puts the match on the top line.
            session.rowoff = session.numrows

            self.saved_hl_line = current
            self.saved_hl = row.hl.copy()
            end = min(offset + len(query), row.rsize)
            row.hl[offset:end] = [HL_MATCH] * (end - offset)
            row.dirty = True
            return

        logger.debug("No match for %r", query)
