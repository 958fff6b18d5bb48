"""Tiered fallback extraction for pages without usable headings.

Strategies, in strict priority order (first with output wins):
    article-containers → paragraphs → text-blocks
"""

from __future__ import annotations

import logging
import re

from bs4 import Tag

from seoparser.config import DEFAULT_CONFIG, ExtractorConfig
from seoparser.extractors.text import node_text
from seoparser.items import FallbackContent, FallbackSource

logger = logging.getLogger(__name__)

ARTICLE_MIN_CHARS = 50
ARTICLE_MAX_CHARS = 500
ARTICLE_LIMIT = 10
PARAGRAPH_MIN_CHARS = 30
PARAGRAPH_LIMIT = 20
TEXT_BLOCK_MIN_CHARS = 20
TEXT_BLOCK_MAX_CHARS = 500
TEXT_BLOCK_LIMIT = 30
TEXT_BLOCK_TAGS: tuple[str, ...] = ("td", "span", "a")
ELLIPSIS = "..."
SEPARATOR = "\n\n"


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + ELLIPSIS


class FallbackExtractor:
    """Best-effort text retrieval over a content container."""

    def __init__(self, config: ExtractorConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._nav_phrases = [
            re.compile(pattern, re.IGNORECASE) for pattern in self.config.nav_phrase_patterns
        ]

    def _select(self, container: Tag) -> list[Tag]:
        matched: list[Tag] = []
        seen: set[int] = set()
        for selector in self.config.article_selectors:
            try:
                found = container.select(selector)
            except Exception as exc:
                logger.debug("Fallback selector %r failed: %s", selector, exc)
                continue
            for el in found:
                if id(el) not in seen:
                    seen.add(id(el))
                    matched.append(el)
        # Restore document order across selectors
        order = {id(el): i for i, el in enumerate(container.find_all(True))}
        matched.sort(key=lambda el: order.get(id(el), 0))
        return matched

    def article_containers(self, container: Tag) -> list[str]:
        texts: list[str] = []
        taken: set[int] = set()
        for el in self._select(container):
            if any(id(parent) in taken for parent in el.parents):
                continue
            text = node_text(el)
            if len(text) <= ARTICLE_MIN_CHARS:
                continue
            taken.add(id(el))
            texts.append(_truncate(text, ARTICLE_MAX_CHARS))
            if len(texts) >= ARTICLE_LIMIT:
                break
        return texts

    def paragraphs(self, container: Tag) -> list[str]:
        texts: list[str] = []
        for p in container.find_all("p"):
            text = node_text(p)
            if len(text) > PARAGRAPH_MIN_CHARS:
                texts.append(text)
                if len(texts) >= PARAGRAPH_LIMIT:
                    break
        return texts

    def is_navigation_phrase(self, text: str) -> bool:
        return any(p.fullmatch(text) for p in self._nav_phrases)

    def text_blocks(self, container: Tag) -> list[str]:
        texts: list[str] = []
        seen: set[str] = set()
        for el in container.find_all(list(TEXT_BLOCK_TAGS)):
            text = node_text(el)
            if not TEXT_BLOCK_MIN_CHARS < len(text) < TEXT_BLOCK_MAX_CHARS:
                continue
            if text in seen or self.is_navigation_phrase(text):
                continue
            seen.add(text)
            texts.append(text)
            if len(texts) >= TEXT_BLOCK_LIMIT:
                break
        return texts

    def extract(self, container: Tag) -> FallbackContent | None:
        strategies = (
            (FallbackSource.ARTICLE_CONTAINERS, self.article_containers),
            (FallbackSource.PARAGRAPHS, self.paragraphs),
            (FallbackSource.TEXT_BLOCKS, self.text_blocks),
        )
        for source, strategy in strategies:
            texts = strategy(container)
            if texts:
                logger.debug("fallback: %s produced %d entries", source.value, len(texts))
                return FallbackContent(source=source, text=SEPARATOR.join(texts))
        logger.debug("fallback: no strategy produced output")
        return None


def extract_fallback(container: Tag, config: ExtractorConfig | None = None) -> FallbackContent | None:
    """Convenience wrapper around :meth:`FallbackExtractor.extract`."""
    return FallbackExtractor(config).extract(container)
