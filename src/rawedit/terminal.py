from __future__ import annotations

import errno
import fcntl
import logging
import os
import re
import struct
import termios
from contextlib import AbstractContextManager
from typing import Callable, Iterator

from .constants import (
    ANSI_CLEAR_SCREEN,
    ANSI_CURSOR_HOME,
    CSI_MODIFIED_MAP,
    CSI_SIMPLE_MAP,
    CSI_TILDE_MAP,
    ESC,
    KEY_NAMES,
    SS3_SIMPLE_MAP,
)
from .logging_config import KEY_LOGGER as key_logger

logger = logging.getLogger(__name__)

ByteSource = Callable[[], "int | None"]


def _read_byte_once(fd: int) -> int | None:
    try:
        data = os.read(fd, 1)
    except InterruptedError:
        return None
    if not data:
        return None
    return data[0]


def _read_byte_blocking(fd: int, on_idle: Callable[[], None] | None = None) -> int:
    while True:
        c = _read_byte_once(fd)
        if c is not None:
            return c
        if on_idle is not None:
            on_idle()


def _is_digit(c: int) -> bool:
    return ord("0") <= c <= ord("9")


def decode_key(first: int, read_byte: ByteSource) -> int:
    """Decode one key event starting at byte ``first``.

    ``read_byte`` returns the next pending byte or ``None`` when nothing
    arrives in time. At most four bytes are read after an escape; anything
    unrecognised or cut short is a bare ``ESC``.
    """
    if first != ESC:
        return first

    seq0 = read_byte()
    if seq0 is None:
        return ESC
    seq1 = read_byte()
    if seq1 is None:
        return ESC

    if seq0 == ord("["):
        if not _is_digit(seq1):
            return CSI_SIMPLE_MAP.get(seq1, ESC)
        seq2 = read_byte()
        if seq2 is None:
            return ESC
        if seq2 == ord("~"):
            return CSI_TILDE_MAP.get(seq1, ESC)
        if seq2 == ord(";"):
            modifier = read_byte()
            if modifier is None:
                return ESC
            final = read_byte()
            if final is None:
                return ESC
            return CSI_MODIFIED_MAP.get((modifier, final), ESC)
    elif seq0 == ord("O"):
        return SS3_SIMPLE_MAP.get(seq1, ESC)
    return ESC


def read_key(fd: int, on_idle: Callable[[], None] | None = None) -> int:
    """Block until one key event arrives.

    ``on_idle`` runs after every read timeout while no byte is pending.
    """
    c = _read_byte_blocking(fd, on_idle)
    key = decode_key(c, lambda: _read_byte_once(fd))
    key_logger.debug("key %s", KEY_NAMES.get(key, repr(chr(key)) if key < 256 else key))
    return key


def iter_keys(data: bytes) -> Iterator[int]:
    """Decode a finished byte string into key events."""
    it = iter(data)

    def next_byte() -> int | None:
        return next(it, None)

    for c in it:
        yield decode_key(c, next_byte)


def get_cursor_position(ifd: int, ofd: int) -> tuple[int, int]:
    if os.write(ofd, b"\x1b[6n") != 4:
        raise OSError(errno.EIO, "cursor query write failed")

    buf = bytearray()
    while len(buf) < 31:
        c = _read_byte_once(ifd)
        if c is None:
            break
        buf.append(c)
        if c == ord("R"):
            break

    return parse_cursor_report(bytes(buf))


def parse_cursor_report(buf: bytes) -> tuple[int, int]:
    match = re.match(rb"\x1b\[(\d+);(\d+)R", buf)
    if not match:
        raise OSError(errno.EIO, "invalid cursor position response")
    return int(match.group(1)), int(match.group(2))


def get_window_size(ifd: int, ofd: int) -> tuple[int, int]:
    try:
        packed = fcntl.ioctl(ofd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
        rows, cols, _, _ = struct.unpack("HHHH", packed)
        if cols:
            return rows, cols
    except OSError:
        logger.debug("TIOCGWINSZ failed, falling back to cursor report")

    if os.write(ofd, b"\x1b[999C\x1b[999B") != 12:
        raise OSError(errno.EIO, "window query write failed")
    return get_cursor_position(ifd, ofd)


def clear_screen(ofd: int) -> None:
    os.write(ofd, (ANSI_CLEAR_SCREEN + ANSI_CURSOR_HOME).encode())


class RawMode(AbstractContextManager["RawMode"]):
    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._orig: list | None = None

    def __enter__(self) -> "RawMode":
        if not os.isatty(self.fd):
            raise OSError(errno.ENOTTY, "stdin is not a tty")

        self._orig = termios.tcgetattr(self.fd)
        raw = termios.tcgetattr(self.fd)
        raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._orig is not None:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._orig)
