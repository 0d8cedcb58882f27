"""Filename resolver — maps a token under the cursor to a Rails file path.

Given a token (``Post``, ``:comments``, ``"shared/sidebar"``) and the text
in front of it on its line, guess which file Rails conventions put it in.
The guess is driven by an ordered rule table; the first rule whose
predicate matches decides the destination. The result is a candidate for
the editor's "find file" primitive, so it is usually relative to one of
the search-path directories (``models/post.rb``) rather than to the root.

Resolution never fails: tokens no rule recognizes fall through to a
singular, snake_case guess.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from railsnav.config import ASSETS_ROOT, CLASS_SUFFIX, VIEWS_DIR
from railsnav.inflector import singularize, to_snake_case

logger = logging.getLogger(__name__)

# Tokens answered before any cleanup.
SPECIAL_TOKENS = {
    "ApplicationController": "controllers/application.rb",
    "<%=": "action_view.rb",
}

_REQUIRE = re.compile(r"\b(?:require|load)\s*\(?\s*$")
_PARTIAL = re.compile(r"(?::partial|[\"']partial[\"'])\s*=>\s*|\bpartial:\s*")
_LAYOUT = re.compile(r"\blayout\s*\(?\s*|(?::layout|[\"']layout[\"'])\s*=>\s*")
_CONTROLLER = re.compile(r"(?::controller|[\"']controller[\"'])\s*=>\s*")
_HELPER = re.compile(r"\bhelper\s*\(?\s*")
_FIXTURES = re.compile(r"\bfixtures\s*\(?\s*")
_STYLESHEET = re.compile(r"\bstylesheet_(?:link_tag|path)\s*\(?\s*")
_JAVASCRIPT = re.compile(r"\bjavascript_(?:include_tag|path)\s*\(?\s*")
_HAS_ONE = re.compile(r"\b(?:has_one|belongs_to)\s*\(?\s*")
_HAS_MANY = re.compile(r"\bhas_(?:and_belongs_to_)?many\s*\(?\s*")
_DEF = re.compile(r"\bdef\s+")
_CONTROLLER_FILE = re.compile(r".*[/\\]app[/\\]controllers[/\\](.*?)_controller\.rb$")

_SIGIL = re.compile(r"^[@:]")
_QUOTED = re.compile(r"^([\"'])(.*)\1$")
_UPPER = re.compile(r"[A-Z]")
_EXTENSION = re.compile(r"^[^.]*$")


@dataclass(frozen=True)
class Request:
    """Everything a rule may look at."""

    raw: str  # cleaned token before snake_case
    name: str  # scope-resolved, snake_case token
    context: str
    buffer_path: str | None = None


@dataclass(frozen=True)
class Rule:
    """One entry of the resolution table."""

    name: str
    matches: Callable[[Request], bool]
    apply: Callable[[Request], str]


@dataclass(frozen=True)
class Resolution:
    """Result of ``explain``: the path and the rule that produced it."""

    path: str
    rule: str


def _context(pattern: re.Pattern[str]) -> Callable[[Request], bool]:
    return lambda req: pattern.search(req.context) is not None


def _unrooted(prefix: str, name: str) -> str:
    """Prefix *name* unless it already starts at the root."""
    return name if name.startswith("/") else prefix + name


def _partial(req: Request) -> str:
    directory, _, base = req.name.rpartition("/")
    if not directory and not req.name.startswith("/"):
        return f"_{base}"
    directory = directory.lstrip("/")
    return f"{VIEWS_DIR}/{directory}/_{base}" if directory else f"{VIEWS_DIR}/_{base}"


def _asset(req: Request, folder: str, ext: str) -> str:
    name = req.name
    if folder == "javascripts" and name == "defaults":
        name = "application"
    path = _unrooted(f"/{folder}/", name)
    if _EXTENSION.match(path):
        path += ext
    return ASSETS_ROOT + path


def _controller(req: Request) -> str | None:
    """Controller path of the buffer, when it is a controller file."""
    if req.buffer_path is None:
        return None
    m = _CONTROLLER_FILE.match(req.buffer_path)
    return m.group(1).replace("\\", "/") if m else None


def _is_action(req: Request) -> bool:
    return _DEF.search(req.context) is not None and _controller(req) is not None


def _action_view(req: Request) -> str:
    return f"{VIEWS_DIR}/{_controller(req)}/{req.name}"


def _fallback(req: Request) -> str:
    name = singularize(req.name)
    return name[:-3] if name.endswith("_id") else name


# First match wins.
RULES: tuple[Rule, ...] = (
    Rule("class", lambda req: _UPPER.search(req.raw) is not None,
         lambda req: req.name + CLASS_SUFFIX),
    Rule("partial", _context(_PARTIAL), _partial),
    Rule("layout", _context(_LAYOUT),
         lambda req: f"{VIEWS_DIR}/layouts/" + req.name.lstrip("/")),
    Rule("controller", _context(_CONTROLLER),
         lambda req: f"controllers/{req.name}_controller{CLASS_SUFFIX}"),
    Rule("helper", _context(_HELPER),
         lambda req: f"helpers/{req.name}_helper{CLASS_SUFFIX}"),
    Rule("fixtures", _context(_FIXTURES),
         lambda req: _unrooted("test/fixtures/", req.name)),
    Rule("stylesheet", _context(_STYLESHEET),
         lambda req: _asset(req, "stylesheets", ".css")),
    Rule("javascript", _context(_JAVASCRIPT),
         lambda req: _asset(req, "javascripts", ".js")),
    Rule("has_one", _context(_HAS_ONE),
         lambda req: f"models/{req.name}{CLASS_SUFFIX}"),
    Rule("has_many", _context(_HAS_MANY),
         lambda req: f"models/{singularize(req.name)}{CLASS_SUFFIX}"),
    Rule("action", _is_action, _action_view),
    Rule("fallback", lambda req: True, _fallback),
)


def clean_token(token: str) -> str:
    """Trim whitespace, one leading sigil and surrounding quotes."""
    token = _SIGIL.sub("", token.strip())
    return _QUOTED.sub(r"\2", token)


def _drop_missing_root(
    path: str, root: Path | None, exists: Callable[[Path], bool],
) -> str:
    if not path.startswith("/"):
        return path
    target = root / path.lstrip("/") if root is not None else Path(path)
    return path if exists(target) else path.lstrip("/")


def explain(
    token: str,
    context: str = "",
    *,
    buffer_path: Path | str | None = None,
    root: Path | None = None,
    exists: Callable[[Path], bool] | None = None,
) -> Resolution:
    """Resolve *token* and report which rule decided the path."""
    if token in SPECIAL_TOKENS:
        return Resolution(SPECIAL_TOKENS[token], "special")

    cleaned = clean_token(token)
    if _REQUIRE.search(context):
        return Resolution(cleaned, "require")

    scoped = cleaned.replace("::", "/")
    req = Request(
        raw=scoped,
        name=to_snake_case(scoped),
        context=context,
        buffer_path=str(buffer_path) if buffer_path is not None else None,
    )
    rule = next(r for r in RULES if r.matches(req))
    path = _drop_missing_root(rule.apply(req), root, exists or Path.is_file)
    logger.debug("resolved %r via %s rule: %s", token, rule.name, path)
    return Resolution(path, rule.name)


def resolve(
    token: str,
    context: str = "",
    *,
    buffer_path: Path | str | None = None,
    root: Path | None = None,
    exists: Callable[[Path], bool] | None = None,
) -> str:
    """Return the most likely file path for *token* given its *context*."""
    return explain(
        token, context, buffer_path=buffer_path, root=root, exists=exists,
    ).path
