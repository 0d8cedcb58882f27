"""Cursor context extraction.

The resolver decides where a token lives by looking at the text in front
of it (``has_many :``, ``render :partial =>`` ...). These helpers cut that
text out of a line.
"""

from __future__ import annotations

import re

# File-name characters, plus the ":" and "@" that scope and sigil tokens carry
_FNAME = r"[\w/.\-+,#$%~=:@]"

_TRAILING_TOKEN = re.compile(r"(?:[:\"']|%[qQ]?[\[({<])?" + _FNAME + r"*$")
_FNAME_CHAR = re.compile(_FNAME)


def extract_context(line: str | None, column: int | None = None) -> str:
    """Return the text preceding the token under *column*.

    Without a column the line is returned as is.
    """
    if line is None:
        return ""
    if column is None:
        return line
    prefix = line[:max(column, 0)]
    return _TRAILING_TOKEN.sub("", prefix, count=1)


def token_span(line: str, column: int) -> tuple[int, int] | None:
    """Return the [start, end) span of the file-name-like token at *column*."""
    if not line or column < 0 or column >= len(line):
        return None
    if not _FNAME_CHAR.match(line[column]):
        return None
    start = column
    while start > 0 and _FNAME_CHAR.match(line[start - 1]):
        start -= 1
    end = column
    while end < len(line) and _FNAME_CHAR.match(line[end]):
        end += 1
    return start, end


def token_at(line: str, column: int) -> str:
    """Return the file-name-like token under *column* (0-based)."""
    span = token_span(line, column)
    if span is None:
        return ""
    # A trailing ":" or "," is hash or argument syntax, not part of the name
    return line[span[0]:span[1]].rstrip(":,")
