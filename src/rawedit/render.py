from __future__ import annotations

import os
import time

from .constants import (
    ANSI_CLEAR_LINE,
    ANSI_CLEAR_SCREEN,
    ANSI_CURSOR_HOME,
    ANSI_DEFAULT_FG,
    ANSI_HIDE_CURSOR,
    ANSI_INVERT_ON,
    ANSI_RESET,
    ANSI_SHOW_CURSOR,
    HL_MATCH,
    HL_NORMAL,
    RAWEDIT_VERSION,
)
from .models import Row, Session
from .rows import char_to_render
from .selection import render_span
from .syntax import syntax_to_color


def position(y: int, x: int = 1) -> str:
    return f"\x1b[{y};{x}H"


def scroll(session: Session) -> bool:
    """Keep the cursor inside the viewport. Returns True if it moved."""
    rowoff, coloff = session.rowoff, session.coloff

    session.rx = 0
    if session.cy < session.numrows:
        session.rx = char_to_render(session.rows[session.cy], session.cx, session.tab_stop)

    if session.cy < session.rowoff:
        session.rowoff = session.cy
    if session.cy >= session.rowoff + session.screenrows:
        session.rowoff = session.cy - session.screenrows + 1
    if session.rx < session.coloff:
        session.coloff = session.rx
    if session.rx >= session.coloff + session.screencols:
        session.coloff = session.rx - session.screencols + 1

    return rowoff != session.rowoff or coloff != session.coloff


def draw_welcome(session: Session, ab: list[str]) -> None:
    welcome = f"Rawedit editor -- version {RAWEDIT_VERSION}"[: session.screencols]
    padding = (session.screencols - len(welcome)) // 2
    if padding:
        ab.append("~")
        padding -= 1
    if padding > 0:
        ab.append(" " * padding)
    ab.append(welcome)


def draw_row(session: Session, row: Row, ab: list[str]) -> None:
    start = session.coloff
    chars = row.render[start : start + session.screencols]
    hl = row.hl[start : start + session.screencols]

    span = render_span(session, row.idx)
    if span is not None:
        for col in range(max(span[0], start), min(span[1], start + len(chars))):
            hl[col - start] = HL_MATCH

    current_color: int | None = None
    inverse = False
    for j, ch in enumerate(chars):
        h = hl[j]
        code = ord(ch)
        if code < 32 or code == 127:
            sym = chr(ord("@") + code) if code <= 26 else "?"
            ab.append(ANSI_INVERT_ON)
            ab.append(sym)
            ab.append(ANSI_RESET)
            inverse = False
            if current_color is not None:
                ab.append(f"\x1b[{current_color}m")
        elif h == HL_MATCH:
            if not inverse:
                ab.append(ANSI_INVERT_ON)
                inverse = True
            ab.append(ch)
            if j + 1 >= len(chars) or hl[j + 1] != HL_MATCH:
                ab.append(ANSI_RESET)
                inverse = False
                current_color = None
        elif h == HL_NORMAL:
            if current_color is not None:
                ab.append(ANSI_DEFAULT_FG)
                current_color = None
            ab.append(ch)
        else:
            color = syntax_to_color(h)
            if color != current_color:
                ab.append(f"\x1b[{color}m")
                current_color = color
            ab.append(ch)
    ab.append(ANSI_DEFAULT_FG)


def draw_rows(session: Session, ab: list[str]) -> None:
    for y in range(session.screenrows):
        filerow = session.rowoff + y
        if filerow >= session.numrows:
            ab.append(position(y + 1))
            if session.numrows == 0 and y == session.screenrows // 3:
                draw_welcome(session, ab)
            else:
                ab.append("~")
            ab.append(ANSI_CLEAR_LINE)
            continue

        row = session.rows[filerow]
        if not row.dirty:
            continue
        row.dirty = False
        ab.append(position(y + 1))
        draw_row(session, row, ab)
        ab.append(ANSI_RESET)
        ab.append(ANSI_CLEAR_LINE)


def draw_status_bar(session: Session, ab: list[str]) -> None:
    cols = session.screencols
    ab.append(position(session.screenrows + 1))
    ab.append(ANSI_INVERT_ON)
    filename = session.filename if session.filename else "[No Name]"
    modified = "(modified)" if session.dirty else ""
    status = f"{filename:.20} - {session.numrows} lines {modified}"[:cols]
    filetype = session.syntax.filetype if session.syntax else "no ft"
    rstatus = f"{filetype} | {session.cy + 1}/{session.numrows}"
    ab.append(status)
    fill = len(status)
    while fill < cols:
        if cols - fill == len(rstatus):
            ab.append(rstatus)
            break
        ab.append(" ")
        fill += 1
    ab.append(ANSI_RESET)


def draw_message_bar(session: Session, ab: list[str], now: float) -> None:
    ab.append(position(session.screenrows + 2))
    ab.append(ANSI_CLEAR_LINE)
    if session.statusmsg and now - session.statusmsg_time < session.message_timeout:
        ab.append(session.statusmsg[: session.screencols])


def build_frame(session: Session, now: float | None = None) -> str:
    """Serialize one frame, redrawing only rows flagged dirty."""
    if scroll(session):
        session.mark_visible_dirty()

    ab: list[str] = [ANSI_HIDE_CURSOR]
    if session.full_redraw:
        ab.append(ANSI_CLEAR_SCREEN)
        session.mark_visible_dirty()
        session.full_redraw = False
    ab.append(ANSI_CURSOR_HOME)

    draw_rows(session, ab)
    draw_status_bar(session, ab)
    draw_message_bar(session, ab, time.time() if now is None else now)

    ab.append(position(session.cy - session.rowoff + 1, session.rx - session.coloff + 1))
    ab.append(ANSI_SHOW_CURSOR)
    return "".join(ab)


def refresh_screen(session: Session, fd: int) -> None:
    os.write(fd, build_frame(session).encode("latin-1", errors="replace"))
