"""Project root detection.

Walks upward from a file looking for ``config/environment.rb``. Only
well-known Rails top-level folders are stripped on the way up, so a file
nested anywhere below ``app/`` or ``test/`` finds its root in a few probes.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePath

from railsnav.config import MARKER_FILE, TOP_LEVEL_DIRS

logger = logging.getLogger(__name__)


class NotAProjectError(Exception):
    """Raised when no Rails project root encloses a path."""


def _strip_top_level(directory: Path) -> Path:
    """Drop the last allow-listed segment and everything below it."""
    parts = directory.parts
    for i in range(len(parts) - 1, 0, -1):
        if parts[i] in TOP_LEVEL_DIRS:
            return Path(*parts[:i])
    return directory


def find_root(path: Path | str) -> Path | None:
    """Return the Rails root enclosing *path*, or None."""
    start = Path(path).absolute()
    directory = start if start.is_dir() else start.parent

    while True:
        if (directory / MARKER_FILE).is_file():
            logger.debug("rails root for %s: %s", start, directory)
            return directory
        parent = _strip_top_level(directory)
        if parent == directory:
            logger.debug("no rails root above %s", start)
            return None
        directory = parent


def require_root(path: Path | str) -> Path:
    """Like find_root, but raise NotAProjectError instead of returning None."""
    root = find_root(path)
    if root is None:
        raise NotAProjectError(f"Not in a Rails project: {path}")
    return root


def relative_path(root: Path, path: Path | str) -> str:
    """Return *path* relative to *root* as a POSIX string.

    Paths outside the root are returned unchanged.
    """
    p = Path(path).absolute()
    try:
        return PurePath(p.relative_to(root)).as_posix()
    except ValueError:
        return p.as_posix()
