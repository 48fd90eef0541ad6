from __future__ import annotations

import errno
import logging
import os
import signal
import sys
import time
from typing import Callable

from . import rows
from .config import apply_config, load_config
from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_ARROW_LEFT,
    CTRL_ARROW_RIGHT,
    CTRL_F,
    CTRL_G,
    CTRL_H,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    PAGE_DOWN,
    PAGE_UP,
    SHIFT_ARROW_DOWN,
    SHIFT_ARROW_LEFT,
    SHIFT_ARROW_RIGHT,
    SHIFT_ARROW_UP,
    SHIFT_ARROWS,
    TAB,
)
from .logging_config import setup_logging
from .models import Session
from .render import refresh_screen
from .search import SearchState
from .selection import clear_selection, delete_selection, extend_selection
from .syntax import select_syntax_highlight
from .terminal import RawMode, clear_screen, get_window_size, read_key

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find | Ctrl-G = jump"

SHIFT_TO_ARROW = {
    SHIFT_ARROW_LEFT: ARROW_LEFT,
    SHIFT_ARROW_RIGHT: ARROW_RIGHT,
    SHIFT_ARROW_UP: ARROW_UP,
    SHIFT_ARROW_DOWN: ARROW_DOWN,
}
DELETE_KEYS = (BACKSPACE, CTRL_H, DEL_KEY)


class Editor:
    def __init__(
        self,
        session: Session | None = None,
        stdin_fd: int = 0,
        stdout_fd: int = 1,
        key_source: Callable[[], int] | None = None,
    ) -> None:
        self.session = session if session is not None else Session()
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.key_source = key_source
        self.quit_times = self.session.quit_times
        self.keep_rx: int | None = None
        self.resize_pending = False
        self.search = SearchState()

    # -- terminal -----------------------------------------------------------

    def read_key(self) -> int:
        if self.key_source is not None:
            return self.key_source()
        return read_key(self.stdin_fd, self.on_idle)

    def update_window_size(self) -> None:
        try:
            screen_rows, screen_cols = get_window_size(self.stdin_fd, self.stdout_fd)
        except OSError as exc:
            raise OSError(exc.errno, "Unable to query screen size") from exc
        self.session.screenrows = max(1, screen_rows - 2)
        self.session.screencols = max(1, screen_cols)
        logger.debug("Window size %dx%d", self.session.screencols, self.session.screenrows)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        self.resize_pending = True

    def check_resize(self) -> None:
        if not self.resize_pending:
            return
        self.resize_pending = False
        self.update_window_size()
        self.session.full_redraw = True

    def on_idle(self) -> None:
        # A resize must be drawn without waiting for the next key.
        if self.resize_pending:
            self.check_resize()
            self.refresh_screen()

    def refresh_screen(self) -> None:
        refresh_screen(self.session, self.stdout_fd)

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.session.statusmsg = fmt % args if args else fmt
        self.session.statusmsg_time = time.time()

    # -- file io ------------------------------------------------------------

    def open_file(self, filename: str) -> None:
        s = self.session
        s.filename = filename
        s.syntax = None
        select_syntax_highlight(s)
        try:
            with open(filename, "rb") as f:
                for line in f:
                    line = line.rstrip(b"\r\n")
                    rows.insert_row(s, s.numrows, line.decode("latin-1"))
        except FileNotFoundError:
            logger.info("New file %s", filename)
        except OSError as exc:
            raise OSError(exc.errno, f"Opening file failed: {filename}") from exc
        else:
            logger.info("Opened %s (%d rows)", filename, s.numrows)
        s.dirty = 0

    def save(self) -> None:
        s = self.session
        if not s.filename:
            filename = self.prompt("Save as: %s (ESC to cancel)")
            if filename is None:
                self.set_status_message("Save aborted")
                return
            s.filename = filename
            select_syntax_highlight(s)

        data = rows.rows_to_string(s).encode("latin-1", errors="replace")
        try:
            fd = os.open(s.filename, os.O_RDWR | os.O_CREAT, 0o644)
            try:
                os.ftruncate(fd, len(data))
                written = 0
                while written < len(data):
                    n = os.write(fd, data[written:])
                    if n <= 0:
                        raise OSError(errno.EIO, "short write")
                    written += n
            finally:
                os.close(fd)
        except OSError as exc:
            logger.error("Saving %s failed: %s", s.filename, exc)
            self.set_status_message(
                "Can't save! I/O error: %s", os.strerror(exc.errno or errno.EIO)
            )
            return

        s.dirty = 0
        logger.info("Wrote %d bytes to %s", len(data), s.filename)
        self.set_status_message("%d bytes written to disk", len(data))

    # -- editing ------------------------------------------------------------

    def insert_char(self, c: int) -> None:
        s = self.session
        if s.cy == s.numrows:
            rows.insert_row(s, s.numrows, "")
        rows.insert_char(s, s.cy, s.cx, chr(c & 0xFF))
        s.cx += 1

    def insert_newline(self) -> None:
        s = self.session
        if s.cx == 0 or s.cy >= s.numrows:
            rows.insert_row(s, s.cy, "")
            indent = ""
        else:
            chars = s.rows[s.cy].chars
            width = 0
            while width < s.cx and chars[width] in " \t":
                width += 1
            indent = chars[:width]
            rows.split_row(s, s.cy, s.cx, indent)
        s.cy += 1
        s.cx = len(indent)

    def del_char(self) -> None:
        s = self.session
        if s.cy == s.numrows:
            return
        if s.cx == 0 and s.cy == 0:
            return
        if s.cx > 0:
            rows.delete_char(s, s.cy, s.cx - 1)
            s.cx -= 1
        else:
            s.cx = s.rows[s.cy - 1].size
            rows.join_row(s, s.cy - 1)
            s.cy -= 1

    # -- motion -------------------------------------------------------------

    def move_cursor(self, key: int) -> None:
        s = self.session
        row = s.row_at(s.cy)

        if key == ARROW_LEFT:
            if s.cx != 0:
                s.cx -= 1
            elif s.cy > 0:
                s.cy -= 1
                s.cx = s.rows[s.cy].size
        elif key == ARROW_RIGHT:
            if row is not None and s.cx < row.size:
                s.cx += 1
            elif row is not None and s.cx == row.size:
                s.cy += 1
                s.cx = 0
        elif key in (ARROW_UP, ARROW_DOWN):
            if self.keep_rx is None:
                self.keep_rx = rows.char_to_render(row, s.cx, s.tab_stop) if row else 0
            if key == ARROW_UP and s.cy != 0:
                s.cy -= 1
            elif key == ARROW_DOWN and s.cy < s.numrows:
                s.cy += 1
            target = s.row_at(s.cy)
            s.cx = rows.render_to_char(target, self.keep_rx, s.tab_stop) if target else 0

        if key in (ARROW_LEFT, ARROW_RIGHT):
            self.keep_rx = None

        row = s.row_at(s.cy)
        rowlen = row.size if row is not None else 0
        if s.cx > rowlen:
            s.cx = rowlen

    def move_word(self, key: int) -> None:
        s = self.session
        row = s.row_at(s.cy)
        if row is None:
            self.move_cursor(ARROW_LEFT if key == CTRL_ARROW_LEFT else ARROW_RIGHT)
            return
        chars = row.chars
        if key == CTRL_ARROW_LEFT:
            if s.cx == 0:
                self.move_cursor(ARROW_LEFT)
                return
            while s.cx > 0 and chars[s.cx - 1] == " ":
                s.cx -= 1
            while s.cx > 0 and chars[s.cx - 1] != " ":
                s.cx -= 1
        else:
            if s.cx == row.size:
                self.move_cursor(ARROW_RIGHT)
                return
            while s.cx < row.size and chars[s.cx] == " ":
                s.cx += 1
            while s.cx < row.size and chars[s.cx] != " ":
                s.cx += 1
        self.keep_rx = None

    def page(self, key: int) -> None:
        s = self.session
        if key == PAGE_UP:
            s.cy = s.rowoff
        else:
            s.cy = min(s.rowoff + s.screenrows - 1, s.numrows)
        for _ in range(s.screenrows):
            self.move_cursor(ARROW_UP if key == PAGE_UP else ARROW_DOWN)

    # -- prompts ------------------------------------------------------------

    def prompt(
        self,
        template: str,
        callback: Callable[[Session, str, int], None] | None = None,
    ) -> str | None:
        """Read a line on the message bar. Returns None when cancelled."""
        buf = ""
        while True:
            self.set_status_message(template, buf)
            self.refresh_screen()

            c = self.read_key()
            if c in DELETE_KEYS:
                buf = buf[:-1]
            elif c == ESC:
                self.set_status_message("")
                if callback:
                    callback(self.session, buf, c)
                return None
            elif c == ENTER:
                if buf:
                    self.set_status_message("")
                    if callback:
                        callback(self.session, buf, c)
                    return buf
            elif 32 <= c < 127 and len(buf) < self.session.query_len:
                buf += chr(c)

            if callback:
                callback(self.session, buf, c)

    def find(self) -> None:
        s = self.session
        saved = (s.cx, s.cy, s.coloff, s.rowoff)
        query = self.prompt("Search: %s (Use ESC/Arrows/Enter)", self.search)
        if query is None:
            s.cx, s.cy, s.coloff, s.rowoff = saved
            s.mark_visible_dirty()

    def jump(self) -> None:
        s = self.session
        answer = self.prompt("Jump to line: %s")
        if answer is None:
            return
        digits = answer[:9]
        if not digits.isdigit():
            self.set_status_message("Type only digits!")
            return
        line = max(1, int(digits))
        s.cy = max(0, min(line, s.numrows) - 1)
        row = s.row_at(s.cy)
        s.cx = min(s.cx, row.size if row else 0)
        s.rowoff = s.numrows
        self.keep_rx = None
        self.set_status_message("")

    # -- dispatch -----------------------------------------------------------

    def select(self, key: int) -> None:
        extend_selection(self.session, lambda: self.move_cursor(SHIFT_TO_ARROW[key]))

    def process_key(self, c: int) -> None:
        s = self.session
        if s.selection is not None:
            if c in SHIFT_ARROWS:
                self.select(c)
                self.quit_times = s.quit_times
                return
            if c in DELETE_KEYS:
                delete_selection(s)
                self.keep_rx = None
                self.quit_times = s.quit_times
                return
            clear_selection(s)

        if c not in (ARROW_UP, ARROW_DOWN, PAGE_UP, PAGE_DOWN):
            self.keep_rx = None

        if c == ENTER:
            self.insert_newline()
        elif c == CTRL_Q:
            if s.dirty and self.quit_times > 0:
                self.set_status_message(
                    "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more time%s to quit.",
                    self.quit_times,
                    "s" if self.quit_times > 1 else "",
                )
                self.quit_times -= 1
                return
            raise SystemExit(0)
        elif c == CTRL_S:
            self.save()
        elif c == CTRL_F:
            self.find()
        elif c == CTRL_G:
            self.jump()
        elif c == HOME_KEY:
            s.cx = 0
        elif c == END_KEY:
            if s.cy < s.numrows:
                s.cx = s.rows[s.cy].size
        elif c == DEL_KEY:
            row = s.row_at(s.cy)
            # Nothing sits under the cursor at the end of the last row.
            if row is not None and (s.cx < row.size or s.cy < s.numrows - 1):
                self.move_cursor(ARROW_RIGHT)
                self.del_char()
        elif c in (BACKSPACE, CTRL_H):
            self.del_char()
        elif c in (PAGE_UP, PAGE_DOWN):
            self.page(c)
        elif c in SHIFT_ARROWS:
            self.select(c)
        elif c in (CTRL_ARROW_LEFT, CTRL_ARROW_RIGHT):
            self.move_word(c)
        elif c in (ARROW_UP, ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT):
            self.move_cursor(c)
        elif c in (CTRL_L, ESC):
            pass
        elif c == TAB or 32 <= c < 256:
            self.insert_char(c)

        self.quit_times = s.quit_times

    def process_keypress(self) -> None:
        self.process_key(self.read_key())

    def run(self) -> None:
        self.set_status_message(HELP_MESSAGE)
        while True:
            self.check_resize()
            self.refresh_screen()
            self.process_keypress()


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        print("Usage: rawedit [filename]", file=sys.stderr)
        return 1

    config = load_config()
    setup_logging(config)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        print("rawedit: stdin/stdout must be a tty", file=sys.stderr)
        return 1

    session = Session()
    apply_config(session, config)
    editor = Editor(session, stdin_fd, stdout_fd)

    try:
        with RawMode(stdin_fd):
            editor.update_window_size()
            if args:
                editor.open_file(args[0])
            signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
            try:
                editor.run()
            finally:
                clear_screen(stdout_fd)
    except SystemExit as exc:
        if isinstance(exc.code, int):
            return exc.code
        return 0
    except OSError as exc:
        logger.exception("Fatal terminal error")
        print(f"rawedit: {exc.strerror or exc}", file=sys.stderr)
        return 1
    return 0
