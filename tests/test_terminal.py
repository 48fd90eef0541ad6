"""Input decoder tests.

Byte sequences are fed from memory, so the decoder is exercised exactly as
it would be behind a raw-mode tty.
"""

from __future__ import annotations

import pytest

from rawedit.constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    CTRL_ARROW_LEFT,
    CTRL_ARROW_RIGHT,
    DEL_KEY,
    END_KEY,
    ESC,
    HOME_KEY,
    PAGE_DOWN,
    PAGE_UP,
    SHIFT_ARROW_DOWN,
    SHIFT_ARROW_LEFT,
    SHIFT_ARROW_RIGHT,
    SHIFT_ARROW_UP,
)
from rawedit.terminal import decode_key, iter_keys, parse_cursor_report


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"\x1b[1;5C", CTRL_ARROW_RIGHT),
        (b"\x1b[1;5D", CTRL_ARROW_LEFT),
        (b"\x1b[1;2A", SHIFT_ARROW_UP),
        (b"\x1b[1;2B", SHIFT_ARROW_DOWN),
        (b"\x1b[1;2C", SHIFT_ARROW_RIGHT),
        (b"\x1b[1;2D", SHIFT_ARROW_LEFT),
        (b"\x1b[A", ARROW_UP),
        (b"\x1b[B", ARROW_DOWN),
        (b"\x1b[C", ARROW_RIGHT),
        (b"\x1b[D", ARROW_LEFT),
        (b"\x1b[H", HOME_KEY),
        (b"\x1b[F", END_KEY),
        (b"\x1bOH", HOME_KEY),
        (b"\x1bOF", END_KEY),
        (b"\x1b[1~", HOME_KEY),
        (b"\x1b[7~", HOME_KEY),
        (b"\x1b[3~", DEL_KEY),
        (b"\x1b[4~", END_KEY),
        (b"\x1b[8~", END_KEY),
        (b"\x1b[5~", PAGE_UP),
        (b"\x1b[6~", PAGE_DOWN),
    ],
)
def test_escape_sequences(data: bytes, expected: int) -> None:
    assert list(iter_keys(data)) == [expected]


@pytest.mark.parametrize(
    "data",
    [
        b"\x1b",
        b"\x1b[",
        b"\x1b[5",
        b"\x1b[1;",
        b"\x1b[1;5",
        b"\x1b[1;3C",
        b"\x1b[9~",
        b"\x1b[Z",
        b"\x1bOA",
        b"\x1bxy",
    ],
)
def test_short_or_unknown_sequences_are_escape(data: bytes) -> None:
    assert list(iter_keys(data)) == [ESC]


def test_plain_bytes_decode_to_themselves() -> None:
    assert list(iter_keys(b"ab\r\x7f\x11")) == [97, 98, 13, 127, 17]


def test_sequences_back_to_back() -> None:
    assert list(iter_keys(b"x\x1b[Ay\x1b[3~")) == [120, ARROW_UP, 121, DEL_KEY]


def test_decoder_stops_reading_after_timeout() -> None:
    pending = [ord("[")]
    calls = []

    def read_byte():
        calls.append(1)
        return pending.pop(0) if pending else None

    assert decode_key(ESC, read_byte) == ESC
    assert len(calls) == 2


def test_parse_cursor_report() -> None:
    assert parse_cursor_report(b"\x1b[24;80R") == (24, 80)
    with pytest.raises(OSError):
        parse_cursor_report(b"garbage")
