"""Heading hierarchy extraction.

Collects ``h1``–``h4`` inside the content container in document order and
pairs each with the content that follows it.  Content is gathered by walking
the heading's following siblings until a heading of the same or a higher
level is reached.  Some CMS markup (MediaWiki's ``<div class="mw-heading">``)
wraps every heading in its own container; in that case the walk starts from
the wrapper so the wrapper's later siblings are visited.
"""

from __future__ import annotations

import logging
import re

from bs4 import Tag

from seoparser.config import DEFAULT_CONFIG, ExtractorConfig
from seoparser.extractors.formatting import format_element
from seoparser.extractors.text import node_text
from seoparser.items import Heading

logger = logging.getLogger(__name__)

HEADING_TAGS: tuple[str, ...] = ("h1", "h2", "h3", "h4")
_HEADING_LEVELS: dict[str, int] = {name: int(name[1]) for name in HEADING_TAGS}


def heading_level(tag: Tag) -> int | None:
    """Return 1-4 for ``h1``-``h4``, otherwise None."""
    return _HEADING_LEVELS.get(tag.name)


class SectionExtractor:
    """Walk a container and build :class:`Heading` records."""

    def __init__(self, config: ExtractorConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._noise_headings = [
            re.compile(pattern, re.IGNORECASE) for pattern in self.config.noise_heading_patterns
        ]
        self._wrapper_prefixes = tuple(c.lower() for c in self.config.heading_wrapper_classes)

    # ------------------------------------------------------------------
    # Classification helpers
    # ------------------------------------------------------------------

    def is_noise_heading(self, text: str) -> bool:
        return any(p.fullmatch(text) for p in self._noise_headings)

    def is_wrapper(self, tag: Tag) -> bool:
        """Return True if *tag* carries a heading-wrapper class."""
        if heading_level(tag) is not None:
            return False
        classes = tag.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        return any(
            str(cls).lower().startswith(prefix)
            for cls in classes
            for prefix in self._wrapper_prefixes
        )

    def is_collected(self, tag: Tag) -> bool:
        """Return True if heading *tag* is kept as a section of its own."""
        text = node_text(tag)
        return bool(text) and not self.is_noise_heading(text)

    def _start_node(self, heading: Tag) -> Tag:
        parent = heading.parent
        if isinstance(parent, Tag) and self.is_wrapper(parent):
            return parent
        return heading

    # ------------------------------------------------------------------
    # Section walk
    # ------------------------------------------------------------------

    def _section_content(self, heading: Tag, level: int) -> list[str]:
        boundary = [name for name in HEADING_TAGS if _HEADING_LEVELS[name] <= level]
        content: list[str] = []
        seen: set[str] = set()

        for sibling in self._start_node(heading).find_next_siblings(True):
            sibling_level = heading_level(sibling)
            if sibling_level is not None:
                # Discarded headings do not end a section
                if sibling_level <= level and self.is_collected(sibling):
                    break
                continue
            # A sibling holding the next same-or-higher heading ends the section
            if any(self.is_collected(h) for h in sibling.find_all(boundary)):
                break
            if self.is_wrapper(sibling) and sibling.find(list(HEADING_TAGS)) is not None:
                continue
            for fragment in format_element(sibling):
                if fragment and fragment not in seen:
                    seen.add(fragment)
                    content.append(fragment)
        return content

    def extract(self, container: Tag) -> list[Heading]:
        """Return every qualifying heading in *container* with its content."""
        headings: list[Heading] = []
        for tag in container.find_all(list(HEADING_TAGS)):
            if not self.is_collected(tag):
                continue
            text = node_text(tag)
            level = _HEADING_LEVELS[tag.name]
            headings.append(
                Heading(level=level, text=text, content=self._section_content(tag, level)),
            )
        logger.debug("sections: %d headings extracted", len(headings))
        return headings


def extract_headings(container: Tag, config: ExtractorConfig | None = None) -> list[Heading]:
    """Convenience wrapper around :meth:`SectionExtractor.extract`."""
    return SectionExtractor(config).extract(container)
