"""Content container selection.

Phase A walks the configured semantic selectors in priority order and returns
the first one whose longest match carries enough text.  Phase B scores every
block-level element on text volume, text-to-markup ratio and text-to-tag
ratio, discards link-heavy candidates, and picks the best.  The document body
is the last resort.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from bs4 import BeautifulSoup, Tag

from seoparser.config import DEFAULT_CONFIG, ExtractorConfig
from seoparser.extractors.text import clean_text, node_text

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Scoring constants
# ---------------------------------------------------------------------------

PRIORITY_MIN_CHARS = 100
CANDIDATE_MIN_CHARS = 200
MAX_LINK_DENSITY = 0.5
CANDIDATE_TAGS: tuple[str, ...] = ("div", "section", "article", "main")

TEXT_LENGTH_WEIGHT = 0.4
TEXT_LENGTH_CAP = 5000
TEXT_HTML_RATIO_WEIGHT = 0.3
TEXT_TAG_RATIO_WEIGHT = 0.3
TEXT_TAG_RATIO_CAP = 50

TAG_MULTIPLIERS: dict[str, float] = {"article": 1.5, "main": 1.4}
CONTENT_HINT_MULTIPLIER = 1.3
SIDEBAR_HINT_MULTIPLIER = 0.3
DEPTH_PENALTY = 0.05

_CONTENT_HINT_RE = re.compile(r"content|article|post|entry|body|main", re.IGNORECASE)
_SIDEBAR_HINT_RE = re.compile(r"sidebar|widget|aside|related|popular|trending", re.IGNORECASE)


class ContainerCandidate(NamedTuple):
    element: Tag
    score: float


def _class_id(tag: Tag) -> str:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return " ".join(classes) + " " + str(tag.get("id") or "")


def link_density(tag: Tag, text_length: int | None = None) -> float:
    """Return the share of *tag*'s text that sits inside ``<a>`` elements."""
    if text_length is None:
        text_length = len(node_text(tag))
    if text_length <= 0:
        return 0.0
    link_chars = sum(len(clean_text(a.get_text())) for a in tag.find_all("a"))
    return link_chars / text_length


def _depth(tag: Tag) -> int:
    return sum(1 for parent in tag.parents if not isinstance(parent, BeautifulSoup))


def score_candidate(tag: Tag, text_length: int | None = None) -> float:
    """Return the Phase-B score of *tag* (0.0 for an empty element)."""
    if text_length is None:
        text_length = len(node_text(tag))
    if text_length <= 0:
        return 0.0
    html_length = max(len(str(tag)), 1)
    descendant_count = len(tag.find_all(True))
    text_to_tag = text_length / (descendant_count + 1)

    score = (
        TEXT_LENGTH_WEIGHT * min(text_length / TEXT_LENGTH_CAP, 1.0)
        + TEXT_HTML_RATIO_WEIGHT * (text_length / html_length)
        + TEXT_TAG_RATIO_WEIGHT * min(text_to_tag / TEXT_TAG_RATIO_CAP, 1.0)
    )

    score *= TAG_MULTIPLIERS.get(tag.name, 1.0)
    hints = _class_id(tag)
    if _CONTENT_HINT_RE.search(hints):
        score *= CONTENT_HINT_MULTIPLIER
    if _SIDEBAR_HINT_RE.search(hints):
        score *= SIDEBAR_HINT_MULTIPLIER
    return score / (1 + DEPTH_PENALTY * _depth(tag))


def _priority_container(soup: BeautifulSoup, config: ExtractorConfig) -> Tag | None:
    for selector in config.container_selectors:
        try:
            matches = soup.select(selector)
        except Exception as exc:
            logger.debug("Container selector %r failed: %s", selector, exc)
            continue
        if not matches:
            continue
        best = max(matches, key=lambda el: len(node_text(el)))
        if len(node_text(best)) > PRIORITY_MIN_CHARS:
            logger.debug("container: priority selector %r matched <%s>", selector, best.name)
            return best
    return None


def score_candidates(soup: BeautifulSoup) -> list[ContainerCandidate]:
    """Return every eligible Phase-B candidate with its score, in document order."""
    candidates: list[ContainerCandidate] = []
    for el in soup.find_all(list(CANDIDATE_TAGS)):
        text_length = len(node_text(el))
        if text_length < CANDIDATE_MIN_CHARS:
            continue
        if link_density(el, text_length) > MAX_LINK_DENSITY:
            continue
        candidates.append(ContainerCandidate(el, score_candidate(el, text_length)))
    return candidates


def select_container(soup: BeautifulSoup, config: ExtractorConfig | None = None) -> Tag:
    """Return the element that best represents the page's main content."""
    config = config or DEFAULT_CONFIG

    priority = _priority_container(soup, config)
    if priority is not None:
        return priority

    best: ContainerCandidate | None = None
    for candidate in score_candidates(soup):
        if best is None or candidate.score > best.score:
            best = candidate
    if best is not None and best.score > 0:
        logger.debug("container: scored <%s> at %.3f", best.element.name, best.score)
        return best.element

    body = soup.find("body")
    logger.debug("container: falling back to %s", "<body>" if body else "document")
    return body if isinstance(body, Tag) else soup
