"""Boilerplate removal: navigation, ads, consent banners, CMS chrome, hidden nodes.

This is the only stage that mutates the parsed tree.  Every rule removes whole
subtrees with ``decompose()`` and the pass is idempotent: running it again on
an already-filtered tree removes nothing.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Tag

from seoparser.config import DEFAULT_CONFIG, ExtractorConfig

logger = logging.getLogger(__name__)

_DISPLAY_NONE_RE = re.compile(r"display\s*:\s*none", re.IGNORECASE)
# Never removed as hidden: modal overlays set aria-hidden on <body>
_ROOT_TAGS = frozenset({"html", "body"})


def _class_id(tag: Tag) -> str:
    """Return the lower-cased class list and id of *tag* as one string."""
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return (" ".join(classes) + " " + str(tag.get("id") or "")).lower()


def is_hidden(tag: Tag) -> bool:
    """Return True if *tag* is hidden via attribute, inline style or ARIA."""
    if tag.has_attr("hidden"):
        return True
    if str(tag.get("aria-hidden") or "").strip().lower() == "true":
        return True
    style = str(tag.get("style") or "")
    return bool(_DISPLAY_NONE_RE.search(style))


class NoiseFilter:
    """Remove non-content subtrees from a parsed document in place."""

    def __init__(self, config: ExtractorConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._roles = frozenset(r.lower() for r in self.config.noise_roles)
        self._protected = frozenset(self.config.substring_protected_tags)

    def apply(self, root: BeautifulSoup | Tag) -> int:
        """Strip noise from *root* and return the number of subtrees removed."""
        removed = 0
        removed += self._remove_tags(root)
        removed += self._remove_roles(root)
        removed += self._remove_selectors(root)
        removed += self._remove_by_substring(root)
        removed += self._remove_hidden(root)
        logger.debug("noise filter removed %d subtrees", removed)
        return removed

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _remove_tags(self, root: Tag) -> int:
        return _decompose_all(root.find_all(list(self.config.noise_tags)))

    def _remove_roles(self, root: Tag) -> int:
        matches = [
            el for el in root.find_all(attrs={"role": True})
            if str(el.get("role") or "").strip().lower() in self._roles
        ]
        return _decompose_all(matches)

    def _remove_selectors(self, root: Tag) -> int:
        removed = 0
        for selector in self.config.noise_selectors:
            try:
                matches = root.select(selector)
            except Exception as exc:
                logger.debug("Skipping noise selector %r: %s", selector, exc)
                continue
            removed += _decompose_all(matches)
        return removed

    def _remove_by_substring(self, root: Tag) -> int:
        exempt = self.config.noise_exempt_substring.lower()
        substrings = tuple(s.lower() for s in self.config.noise_substrings)
        matches: list[Tag] = []
        for el in root.find_all(True):
            if el.name in self._protected:
                continue
            combined = _class_id(el)
            if not combined.strip():
                continue
            if exempt and exempt in combined:
                continue
            if any(s in combined for s in substrings):
                matches.append(el)
        return _decompose_all(matches)

    def _remove_hidden(self, root: Tag) -> int:
        return _decompose_all([
            el for el in root.find_all(True)
            if el.name not in _ROOT_TAGS and is_hidden(el)
        ])


def _decompose_all(elements: list[Tag]) -> int:
    """Decompose *elements*, skipping those already gone with an ancestor."""
    count = 0
    for el in elements:
        if not isinstance(el, Tag) or el.decomposed:
            continue
        el.decompose()
        count += 1
    return count


def strip_noise(root: BeautifulSoup | Tag, config: ExtractorConfig | None = None) -> int:
    """Convenience wrapper around :meth:`NoiseFilter.apply`."""
    return NoiseFilter(config).apply(root)
