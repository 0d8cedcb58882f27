"""String inflections used to turn Ruby constants into Rails file names.

These are heuristics covering the names Rails generators produce, not a
general English inflector.
"""

from __future__ import annotations

import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")

# First match wins.
_SINGULAR_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"eople$"), "erson"),
    (re.compile(r"(?<![aeio])ies$"), "y"),
    (re.compile(r"xe[ns]$"), "x"),
    (re.compile(r"ves$"), "f"),
    (re.compile(r"ss$"), "ss"),  # "address", "class"
    (re.compile(r"s$"), ""),
)


def to_snake_case(s: str) -> str:
    """Convert a CamelCase constant to snake_case.

    e.g. "XMLParser" → "xml_parser", "Admin/UserProfile" → "admin/user_profile"
    """
    s = _ACRONYM_BOUNDARY.sub(r"\1_\2", s)
    s = _WORD_BOUNDARY.sub(r"\1_\2", s)
    return s.replace("-", "_").lower()


def singularize(word: str) -> str:
    """Return the singular form of a pluralized Rails name."""
    for pattern, replacement in _SINGULAR_RULES:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)
    return word


def camelize(s: str) -> str:
    """Convert a snake_case path to a Ruby constant ("admin/user" → "Admin::User")."""
    return "::".join(
        "".join(part.capitalize() for part in segment.split("_"))
        for segment in s.split("/")
    )
