"""Per-project override file, run against a restricted sandbox.

The override file is never interpreted here. A runner receives its path and
a ``Sandbox`` that can only set the buffer's local options.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from railsnav.config import OVERRIDE_FILE
from railsnav.options import LOCAL_OPTIONS, BufferOptions

logger = logging.getLogger(__name__)


class SandboxError(Exception):
    """Raised when an override tries something the sandbox does not allow."""


class Sandbox:
    """Capability handed to override runners: set buffer-local options."""

    def __init__(self, options: dict[str, Any]) -> None:
        self._options = options

    def set_option(self, name: str, value: Any) -> None:
        self.set_options({name: value})

    def set_options(self, values: dict[str, Any]) -> None:
        """Check every value first, then apply them together or not at all."""
        for name in values:
            if name not in LOCAL_OPTIONS:
                raise SandboxError(f"Option '{name}' is not allowed in the sandbox")
        try:
            checked = BufferOptions.model_validate({**self._options, **values})
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
            raise SandboxError(f"Invalid value for {fields}") from e
        for name in values:
            self._options[name] = getattr(checked, name)


Runner = Callable[[Path, Sandbox], None]


def yaml_runner(path: Path, sandbox: Sandbox) -> None:
    """Apply a YAML mapping of option names to values."""
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise SandboxError(f"{path}: {e}") from e
    if data is None:
        return
    if not isinstance(data, dict):
        raise SandboxError(f"{path}: expected a mapping of options")
    sandbox.set_options({str(name): value for name, value in data.items()})


def find_override(root: Path) -> Path | None:
    path = root / OVERRIDE_FILE
    return path if path.is_file() else None


def source_override(
    root: Path, options: dict[str, Any], runner: Runner = yaml_runner,
) -> bool:
    """Run the project's override file, if any. Returns True if one ran."""
    path = find_override(root)
    if path is None:
        return False
    logger.info("sourcing %s", path)
    runner(path, Sandbox(options))
    return True
