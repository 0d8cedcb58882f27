"""Find-file primitive: look a candidate up along a search path."""

from __future__ import annotations

import glob
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def _expand(search_path: Iterable[str]) -> list[Path]:
    dirs: list[Path] = []
    for entry in search_path:
        if any(c in entry for c in "*?["):
            dirs.extend(Path(p) for p in sorted(glob.glob(entry)))
        else:
            dirs.append(Path(entry))
    return dirs


def _names(candidate: str, suffixes: Sequence[str]) -> list[str]:
    return [candidate] + [candidate + s for s in suffixes]


def find_file(
    candidate: str,
    search_path: Iterable[str],
    suffixes: Sequence[str] = (),
) -> Path | None:
    """Return the first existing file for *candidate*, or None.

    Absolute candidates are checked as given; relative ones are tried in
    each search directory, first bare and then with each suffix appended.
    """
    if not candidate:
        return None

    if Path(candidate).is_absolute():
        for name in _names(candidate, suffixes):
            if Path(name).is_file():
                return Path(name)
        return None

    for directory in _expand(search_path):
        for name in _names(candidate, suffixes):
            p = directory / name
            if p.is_file():
                logger.debug("found %s in %s", candidate, directory)
                return p
    return None
