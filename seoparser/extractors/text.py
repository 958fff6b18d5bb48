"""Text normalisation shared by every extraction stage."""

from __future__ import annotations

import re

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

# Bracketed editorial markers: [edit], [citation needed], [note 3], [12], ...
_EDITORIAL_MARKER_RE = re.compile(
    r"\[\s*(?:"
    r"edit(?:\s+source)?"
    r"|citation\s+needed"
    r"|clarification\s+needed"
    r"|verification\s+needed"
    r"|dubious(?:\s*[-–]\s*discuss)?"
    r"|when\?"
    r"|who\?"
    r"|note\s+\d+"
    r"|nb\s+\d+"
    r"|\d+"
    r")\s*\]",
    re.IGNORECASE,
)
_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(value: str | None) -> str:
    """Strip editorial markers, collapse whitespace and trim *value*.

    Idempotent: ``clean_text(clean_text(s)) == clean_text(s)``.
    """
    if not value:
        return ""
    text = value
    # Removing a marker can expose another one, e.g. "[[1]2]".
    while True:
        stripped = _EDITORIAL_MARKER_RE.sub("", text)
        if stripped == text:
            break
        text = stripped
    return _WHITESPACE_RE.sub(" ", text).strip()


def node_text(tag: Tag) -> str:
    """Return the cleaned text of *tag* and all of its descendants."""
    return clean_text(tag.get_text())


def text_excluding(tag: Tag, excluded: frozenset[str]) -> str:
    """Return the cleaned text of *tag*, skipping strings under *excluded* tags.

    Only descendants of *tag* are considered when testing for an excluded
    ancestor, so a list item may read its own text without its nested lists
    while the tree stays untouched.
    """
    parts: list[str] = []
    for string in tag.find_all(string=True):
        if not isinstance(string, NavigableString) or isinstance(string, PreformattedString):
            continue
        if _has_excluded_ancestor(string, tag, excluded):
            continue
        parts.append(str(string))
    return clean_text("".join(parts))


def _has_excluded_ancestor(node: NavigableString, stop: Tag, excluded: frozenset[str]) -> bool:
    parent = node.parent
    while parent is not None and parent is not stop:
        if parent.name in excluded:
            return True
        parent = parent.parent
    return False
