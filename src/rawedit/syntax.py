from __future__ import annotations

import logging

from .constants import (
    C_HL_EXTENSIONS,
    C_HL_KEYWORDS,
    HL_COMMENT,
    HL_HIGHLIGHT_NUMBERS,
    HL_HIGHLIGHT_STRINGS,
    HL_KEYWORD1,
    HL_KEYWORD2,
    HL_MATCH,
    HL_MLCOMMENT,
    HL_NORMAL,
    HL_NUMBER,
    HL_STRING,
    PY_HL_EXTENSIONS,
    PY_HL_KEYWORDS,
    SEPARATORS,
)
from .models import EditorSyntax, Session

logger = logging.getLogger(__name__)


HLDB: tuple[EditorSyntax, ...] = (
    EditorSyntax(
        filetype="c",
        filematch=C_HL_EXTENSIONS,
        keywords=C_HL_KEYWORDS,
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_STRINGS | HL_HIGHLIGHT_NUMBERS,
    ),
    EditorSyntax(
        filetype="python",
        filematch=PY_HL_EXTENSIONS,
        keywords=PY_HL_KEYWORDS,
        singleline_comment_start="#",
        multiline_comment_start='"""',
        multiline_comment_end='"""',
        flags=HL_HIGHLIGHT_STRINGS | HL_HIGHLIGHT_NUMBERS,
    ),
)


def is_separator(c: str) -> bool:
    return not c or c == "\0" or c.isspace() or c in SEPARATORS


def syntax_to_color(hl: int) -> int:
    if hl in (HL_COMMENT, HL_MLCOMMENT):
        return 36
    if hl == HL_KEYWORD1:
        return 33
    if hl == HL_KEYWORD2:
        return 32
    if hl == HL_STRING:
        return 35
    if hl == HL_NUMBER:
        return 31
    if hl == HL_MATCH:
        return 34
    return 37


def find_syntax(filename: str | None) -> EditorSyntax | None:
    if not filename:
        return None
    dot = filename.rfind(".")
    ext = filename[dot:] if dot != -1 else ""
    for syntax in HLDB:
        for pattern in syntax.filematch:
            if pattern.startswith("."):
                if ext == pattern:
                    return syntax
            elif pattern in filename:
                return syntax
    return None


def select_syntax_highlight(session: Session) -> None:
    session.syntax = find_syntax(session.filename)
    logger.debug(
        "Syntax for %r: %s",
        session.filename,
        session.syntax.filetype if session.syntax else "none",
    )
    in_comment = False
    for row in session.rows:
        row.hl, in_comment = highlight(row.render, session.syntax, in_comment)
        row.hl_open_comment = in_comment
    session.mark_visible_dirty()


def highlight(
    render: str, syntax: EditorSyntax | None, in_comment: bool = False
) -> tuple[list[int], bool]:
    """Classify every character of ``render``.

    ``in_comment`` is the open-comment state left by the previous row.
    Returns the highlight array and the open-comment state at the end of
    this row.
    """
    size = len(render)
    hl = [HL_NORMAL] * size
    if syntax is None:
        return hl, False

    scs = syntax.singleline_comment_start
    mcs = syntax.multiline_comment_start
    mce = syntax.multiline_comment_end

    prev_sep = True
    in_string = ""

    i = 0
    while i < size:
        c = render[i]
        prev_hl = hl[i - 1] if i > 0 else HL_NORMAL

        if scs and not in_string and not in_comment and render.startswith(scs, i):
            hl[i:] = [HL_COMMENT] * (size - i)
            break

        if mcs and mce and not in_string:
            if in_comment:
                hl[i] = HL_MLCOMMENT
                if render.startswith(mce, i):
                    hl[i : i + len(mce)] = [HL_MLCOMMENT] * len(mce)
                    i += len(mce)
                    in_comment = False
                    prev_sep = True
                    continue
                i += 1
                continue
            if render.startswith(mcs, i):
                hl[i : i + len(mcs)] = [HL_MLCOMMENT] * len(mcs)
                i += len(mcs)
                in_comment = True
                continue

        if syntax.flags & HL_HIGHLIGHT_STRINGS:
            if in_string:
                hl[i] = HL_STRING
                if c == "\\" and i + 1 < size:
                    hl[i + 1] = HL_STRING
                    i += 2
                    continue
                if c == in_string:
                    in_string = ""
                i += 1
                prev_sep = True
                continue
            if c in ('"', "'"):
                in_string = c
                hl[i] = HL_STRING
                i += 1
                continue

        if syntax.flags & HL_HIGHLIGHT_NUMBERS:
            if (c.isdigit() and (prev_sep or prev_hl == HL_NUMBER)) or (
                c == "." and prev_hl == HL_NUMBER
            ):
                hl[i] = HL_NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            matched = False
            for kw in syntax.keywords:
                kw2 = kw.endswith("|")
                token = kw[:-1] if kw2 else kw
                klen = len(token)
                tail = render[i + klen] if i + klen < size else ""
                if render.startswith(token, i) and is_separator(tail):
                    hl[i : i + klen] = [HL_KEYWORD2 if kw2 else HL_KEYWORD1] * klen
                    i += klen
                    matched = True
                    break
            if matched:
                prev_sep = False
                continue

        prev_sep = is_separator(c)
        i += 1

    return hl, in_comment


def update_syntax(session: Session, idx: int) -> None:
    """Re-highlight row ``idx`` and every following row whose input changed.

    Rows are processed from a work list: the next row is only revisited
    while the open-comment state handed to it keeps changing.
    """
    pending = [idx]
    while pending:
        idx = pending.pop()
        if idx < 0 or idx >= session.numrows:
            continue
        row = session.rows[idx]
        in_comment = idx > 0 and session.rows[idx - 1].hl_open_comment
        row.hl, open_comment = highlight(row.render, session.syntax, in_comment)
        row.dirty = True
        if row.hl_open_comment != open_comment:
            row.hl_open_comment = open_comment
            pending.append(idx + 1)
