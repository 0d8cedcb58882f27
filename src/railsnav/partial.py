"""Make-partial — move a range of template lines into a new partial.

``extract_partial`` is pure: it validates the request, works out where the
partial goes and what replaces the range, and returns both. Only
``write_partial`` touches the filesystem. A request that fails validation
never gets that far.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from railsnav.config import ERB_EXTENSIONS

logger = logging.getLogger(__name__)

_VALID_NAME = re.compile(r"^[a-z0-9_/]+$")
_END_BLOCK = re.compile(r"^(\s*)<%\s*end\s*-?%>\s*$")


class InvalidPartialArgument(Exception):
    """Raised when a make-partial request is malformed."""


class PartialExistsError(Exception):
    """Raised when the partial file already exists and force is off."""


class PartialRequest(BaseModel):
    """A validated make-partial request. Line numbers are 1-based, inclusive."""

    name: str
    first: int
    last: int
    line_count: int

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not _VALID_NAME.match(v) or v.endswith("/"):
            raise ValueError(f"Invalid partial name: {v!r}")
        return v

    @model_validator(mode="after")
    def _check_range(self) -> PartialRequest:
        if not 1 <= self.first <= self.last <= self.line_count:
            raise ValueError(
                f"Invalid line range {self.first}-{self.last} "
                f"for a {self.line_count}-line buffer"
            )
        return self


@dataclass
class PartialResult:
    path: Path
    body: list[str]
    lines: list[str]  # the buffer after the range is replaced
    render: str


def parse_arguments(args: list[str]) -> str:
    """Check the command's argument list and return the partial name."""
    if len(args) != 1:
        raise InvalidPartialArgument("Incorrect number of arguments")
    return args[0]


def validate(name: str, first: int, last: int, line_count: int) -> PartialRequest:
    try:
        return PartialRequest(name=name, first=first, last=last, line_count=line_count)
    except ValidationError as e:
        msg = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
        raise InvalidPartialArgument(msg) from e


def partial_path(name: str, current_file: Path, root: Path) -> Path:
    """Return the file a partial called *name* is written to.

    - ``/shared/form`` → ``<root>/app/views/shared/_form``
    - ``form``         → next to the current file
    - ``shared/form``  → ``<current dir>/shared`` if it exists, else
      ``<root>/app/views/shared``
    """
    directory, _, base = name.rpartition("/")
    filename = f"_{base}{current_file.suffix}"

    current_dir = current_file.parent
    if name.startswith("/"):
        return root / "app" / "views" / directory.lstrip("/") / filename
    if not directory:
        return current_dir / filename
    if (current_dir / directory).is_dir():
        return current_dir / directory / filename
    return root / "app" / "views" / directory / filename


def _collection(lines: list[str], first: int, last: int, var: str) -> str | None:
    """Return ``@items`` when the range is the body of ``@items.each do |var|``."""
    if first < 2 or last >= len(lines):
        return None
    end = _END_BLOCK.match(lines[last])
    if end is None:
        return None
    opener = re.match(
        re.escape(end.group(1))
        + r"<%\s*(@\w+)\.each\s+do\s*\|\s*(\w+)\s*\|\s*-?%>\s*$",
        lines[first - 2],
    )
    if opener and opener.group(2) == var:
        return opener.group(1)
    return None


def extract_partial(
    lines: list[str],
    first: int,
    last: int,
    name: str,
    current_file: Path,
    root: Path,
) -> PartialResult:
    """Cut lines *first*..*last* out of *lines* into a partial called *name*."""
    request = validate(name, first, last, len(lines))

    var = request.name.rpartition("/")[2]
    out = partial_path(request.name, current_file, root)

    selected = lines[request.first - 1:request.last]
    indent = selected[0][: len(selected[0]) - len(selected[0].lstrip())]
    sigil_var = re.compile(r"(?<![\w@:\"'-])@" + re.escape(var) + r"\b")
    body = [
        sigil_var.sub(var, line[len(indent):] if line.startswith(indent) else line)
        for line in selected
    ]

    render = f"render :partial => '{request.name.lstrip('/')}'"
    collection = _collection(lines, request.first, request.last, var)
    if collection is not None:
        render += f", :collection => {collection}"
    if current_file.suffix in ERB_EXTENSIONS:
        render = f"<%= {render} %>"

    new_lines = lines[:request.first - 1] + [indent + render] + lines[request.last:]
    logger.debug("partial %s → %s (%d lines)", request.name, out, len(body))
    return PartialResult(path=out, body=body, lines=new_lines, render=render)


def write_partial(result: PartialResult, *, force: bool = False) -> Path:
    """Write the partial file. Refuses to overwrite unless *force*."""
    if result.path.exists() and not force:
        raise PartialExistsError(f"File exists (use --force to overwrite): {result.path}")
    result.path.parent.mkdir(parents=True, exist_ok=True)
    result.path.write_text("\n".join(result.body) + "\n", encoding="utf-8")
    return result.path
