"""Buffer glue — per-buffer project state and option save/restore.

The host editor is modelled as an ``EditorState``: a dict of global
options plus the open buffers. Each ``Buffer`` owns its cached project
root, its local options, and the snapshot of global options taken when it
became active.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from railsnav.context import extract_context, token_at, token_span
from railsnav.options import buffer_options, global_options
from railsnav.overrides import Runner, SandboxError, source_override, yaml_runner
from railsnav.project import find_root
from railsnav.resolver import resolve

logger = logging.getLogger(__name__)


@dataclass
class Buffer:
    number: int
    path: Path
    options: dict[str, Any] = field(default_factory=dict)
    rails_root: Path | None = None
    detected: bool = False
    saved: dict[str, Any] | None = None

    @property
    def is_rails(self) -> bool:
        return self.rails_root is not None


@dataclass
class EditorState:
    global_options: dict[str, Any] = field(default_factory=dict)
    buffers: dict[int, Buffer] = field(default_factory=dict)

    def open(self, path: Path | str) -> Buffer:
        """Add a buffer for *path* and run project detection on it."""
        buffer = Buffer(number=len(self.buffers) + 1, path=Path(path).absolute())
        self.buffers[buffer.number] = buffer
        detect(buffer)
        return buffer


def detect(buffer: Buffer, runner: Runner = yaml_runner) -> Path | None:
    """Find and cache the buffer's project root. Safe to call repeatedly."""
    if buffer.detected:
        return buffer.rails_root
    buffer.detected = True
    buffer.rails_root = find_root(buffer.path)
    if buffer.rails_root is None:
        return None

    buffer.options.update(buffer_options(buffer.rails_root).model_dump())
    try:
        source_override(buffer.rails_root, buffer.options, runner)
    except (SandboxError, OSError) as e:
        logger.warning("override file for %s not applied: %s", buffer.rails_root, e)
    return buffer.rails_root


def enter(state: EditorState, buffer: Buffer) -> None:
    """Swap the project's global options in, remembering the old values."""
    if buffer.rails_root is None or buffer.saved is not None:
        return
    values = global_options(buffer.rails_root)
    buffer.saved = {name: state.global_options.get(name) for name in values}
    state.global_options.update(values)


def leave(state: EditorState, buffer: Buffer) -> None:
    """Restore the global options saved by ``enter``."""
    if buffer.saved is None:
        return
    for name, value in buffer.saved.items():
        if value is None:
            state.global_options.pop(name, None)
        else:
            state.global_options[name] = value
    buffer.saved = None


@contextmanager
def active(state: EditorState, buffer: Buffer) -> Iterator[Buffer]:
    enter(state, buffer)
    try:
        yield buffer
    finally:
        leave(state, buffer)


def includeexpr(buffer: Buffer, line: str, column: int) -> str:
    """Resolve the file name under the cursor, for the buffer's goto-file."""
    span = token_span(line, column)
    if span is None:
        return ""
    token = token_at(line, column)
    context = extract_context(line, span[0])
    return resolve(
        token, context, buffer_path=buffer.path, root=buffer.rails_root,
    )
