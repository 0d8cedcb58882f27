"""Alternate file lookup — model ↔ unit test, controller ↔ functional test.

Paths are POSIX strings relative to the project root. When no rule
recognizes a file the answer is the file with ``_test`` added or removed,
so the command always has somewhere to go.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

from railsnav.inflector import singularize

_MIGRATION = re.compile(r"^db/migrate/0*(\d+)_[^/]*\.rb$")
_MIGRATION_FILE = re.compile(r"^0*(\d+)_.*\.rb$")

_Rule = tuple[re.Pattern[str], Callable[[re.Match[str], Path | None], str]]


def _migrations(root: Path | None) -> dict[int, str]:
    """Map migration number → root-relative path."""
    if root is None:
        return {}
    migrate = root / "db" / "migrate"
    if not migrate.is_dir():
        return {}
    found: dict[int, str] = {}
    for p in migrate.iterdir():
        m = _MIGRATION_FILE.match(p.name)
        if m and p.is_file():
            found[int(m.group(1))] = f"db/migrate/{p.name}"
    return found


def _previous_migration(m: re.Match[str], root: Path | None) -> str:
    number = int(m.group(1))
    earlier = {n: p for n, p in _migrations(root).items() if n < number}
    return earlier[max(earlier)] if earlier else "db/schema.rb"


def _latest_migration(m: re.Match[str], root: Path | None) -> str:
    migrations = _migrations(root)
    return migrations[max(migrations)] if migrations else "db/migrate"


def _fixed(target: str) -> Callable[[re.Match[str], Path | None], str]:
    return lambda m, root: target


def _template(target: str) -> Callable[[re.Match[str], Path | None], str]:
    return lambda m, root: m.expand(target)


# First match wins.
_RULES: tuple[_Rule, ...] = (
    (re.compile(r"^config/environments/"), _fixed("config/environment.rb")),
    (re.compile(r"^config/environment\.rb$"), _fixed("config/routes.rb")),
    (re.compile(r"^config/routes\.rb$"), _fixed("config/environment.rb")),
    (re.compile(r"^config/database\.yml$"), _fixed("README")),
    (re.compile(r"^README$"), _fixed("config/database.yml")),
    (_MIGRATION, _previous_migration),
    (re.compile(r"^db/schema\.rb$"), _latest_migration),
    (re.compile(r"^public/javascripts/application\.js$"),
     _fixed("app/helpers/application_helper.rb")),
    (re.compile(r"^app/controllers/(.+)_controller\.rb$"),
     _template(r"test/functional/\1_controller_test.rb")),
    (re.compile(r"^app/views/(.+)/[^/]+$"),
     _template(r"test/functional/\1_controller_test.rb")),
    (re.compile(r"^app/helpers/(.+)_helper\.rb$"),
     _template(r"app/controllers/\1_controller.rb")),
    (re.compile(r"^app/models/(.+)\.rb$"), _template(r"test/unit/\1_test.rb")),
    (re.compile(r"^test/functional/(.+)_controller_test\.rb$"),
     _template(r"app/controllers/\1_controller.rb")),
    (re.compile(r"^test/unit/(.+)_test\.rb$"), _template(r"app/models/\1.rb")),
    (re.compile(r"^test/fixtures/(.+)\.yml$"),
     lambda m, root: f"app/models/{singularize(m.group(1))}.rb"),
)


def _toggle_test_suffix(rel_path: str) -> str:
    """Add or remove the ``_test`` suffix before the extension."""
    directory, _, filename = rel_path.rpartition("/")
    stem, dot, ext = filename.partition(".")
    if stem.endswith("_test"):
        stem = stem[: -len("_test")]
    else:
        stem += "_test"
    filename = stem + dot + ext
    return f"{directory}/{filename}" if directory else filename


def find_alternate(rel_path: str, root: Path | None = None) -> str:
    """Return the alternate of a root-relative file path.

    *root* is only needed to look up neighbouring migrations.
    """
    rel_path = rel_path.replace("\\", "/").lstrip("/")
    for pattern, target in _RULES:
        m = pattern.match(rel_path)
        if m:
            return target(m, root)
    return _toggle_test_suffix(rel_path)
