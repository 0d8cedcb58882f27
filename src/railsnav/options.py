"""Buffer-scoped editor options derived from a project root."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from railsnav.config import RAKE, SEARCH_SUBDIRS, SUFFIXES

# Buffer-local options a project (or its override file) may set.
LOCAL_OPTIONS = ("path", "suffixesadd", "includeexpr")

# Global options swapped in while a project buffer is active.
GLOBAL_OPTIONS = ("makeprg",)


class BufferOptions(BaseModel):
    """Options attached to every buffer inside a Rails project."""

    path: list[str] = Field(default_factory=list)
    suffixesadd: list[str] = Field(default_factory=lambda: list(SUFFIXES))
    includeexpr: str = "railsnav.resolver.resolve"


def search_path(root: Path) -> list[str]:
    """Return the find-file search path: the root, then its Rails folders."""
    return [str(root)] + [str(root / sub) for sub in SEARCH_SUBDIRS]


def buffer_options(root: Path) -> BufferOptions:
    return BufferOptions(path=search_path(root))


def global_options(root: Path) -> dict[str, str]:
    """Return the global option values to use while in this project."""
    return {"makeprg": f"{RAKE} -f {root / 'Rakefile'}"}
