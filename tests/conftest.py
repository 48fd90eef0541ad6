"""Shared fixtures for the rawedit tests.

Sessions are built in memory; nothing here needs a real terminal. Frames
written by the editor during prompts go to ``/dev/null``.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Generator, Iterable

import pytest

from rawedit import rows
from rawedit.editor import Editor
from rawedit.logging_config import KEY_LOGGER
from rawedit.models import Session
from rawedit.syntax import select_syntax_highlight


def build_session(
    lines: Iterable[str] = (),
    filename: str | None = None,
    screenrows: int = 10,
    screencols: int = 40,
) -> Session:
    session = Session(screenrows=screenrows, screencols=screencols, filename=filename)
    select_syntax_highlight(session)
    for line in lines:
        rows.insert_row(session, session.numrows, line)
    session.dirty = 0
    return session


@pytest.fixture
def make_session() -> Callable[..., Session]:
    """Factory fixture returning a populated :class:`Session`."""
    return build_session


@pytest.fixture
def devnull_fd() -> Generator[int, None, None]:
    fd = os.open(os.devnull, os.O_WRONLY)
    yield fd
    os.close(fd)


@pytest.fixture
def make_editor(devnull_fd: int) -> Callable[..., Editor]:
    """Factory fixture: an :class:`Editor` fed from a fixed list of keys."""

    def factory(session: Session, keys: Iterable[int] = ()) -> Editor:
        return Editor(session, stdout_fd=devnull_fd, key_source=iter(list(keys)).__next__)

    return factory


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    saved_key_handlers = KEY_LOGGER.handlers[:]
    saved_key_disabled = KEY_LOGGER.disabled
    yield
    for handler in root.handlers + KEY_LOGGER.handlers:
        if handler not in saved_handlers and handler not in saved_key_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    KEY_LOGGER.handlers = saved_key_handlers
    KEY_LOGGER.disabled = saved_key_disabled
