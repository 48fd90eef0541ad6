from __future__ import annotations

from dataclasses import dataclass, field

from .constants import (
    RAWEDIT_MESSAGE_TIMEOUT,
    RAWEDIT_QUERY_LEN,
    RAWEDIT_QUIT_TIMES,
    RAWEDIT_TAB_STOP,
)


@dataclass(slots=True)
class EditorSyntax:
    filetype: str
    filematch: tuple[str, ...]
    keywords: tuple[str, ...]
    singleline_comment_start: str
    multiline_comment_start: str
    multiline_comment_end: str
    flags: int


@dataclass(slots=True)
class Row:
    idx: int
    chars: str
    render: str = ""
    hl: list[int] = field(default_factory=list)
    hl_open_comment: bool = False
    # Screen copy of this row is stale and must be redrawn.
    dirty: bool = True

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)


@dataclass(slots=True)
class Selection:
    """Fixed end of a selection; the cursor is the moving end."""

    anchor_row: int
    anchor_col: int


@dataclass(slots=True)
class Session:
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0
    rows: list[Row] = field(default_factory=list)
    dirty: int = 0
    filename: str | None = None
    statusmsg: str = ""
    statusmsg_time: float = 0.0
    syntax: EditorSyntax | None = None
    selection: Selection | None = None
    full_redraw: bool = True
    tab_stop: int = RAWEDIT_TAB_STOP
    quit_times: int = RAWEDIT_QUIT_TIMES
    message_timeout: float = RAWEDIT_MESSAGE_TIMEOUT
    query_len: int = RAWEDIT_QUERY_LEN

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def row_at(self, idx: int) -> Row | None:
        if 0 <= idx < len(self.rows):
            return self.rows[idx]
        return None

    def is_visible(self, idx: int) -> bool:
        return self.rowoff <= idx < self.rowoff + self.screenrows

    def mark_visible_dirty(self) -> None:
        end = min(self.numrows, self.rowoff + self.screenrows)
        for idx in range(self.rowoff, end):
            self.rows[idx].dirty = True
