"""Page metadata: title and description.

Priority chains (highest → lowest):
    title:       <title> → og:title → twitter:title → first <h1>
    description: <meta name=description> → og:description → twitter:description

Runs on the unmodified tree, before the noise filter drops ``<head>`` chrome
or the banner that may carry the page's only ``<h1>``.
"""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup, Tag

from seoparser.extractors.text import clean_text, node_text

logger = logging.getLogger(__name__)


def _safe_str(val: Any, default: str = "") -> str:
    """Safely convert a BeautifulSoup attribute value (str | list | None) to str."""
    if val is None:
        return default
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


def _first(*values: str | None) -> str | None:
    """Return the first non-empty value after cleaning, or None."""
    for v in values:
        cleaned = clean_text(v)
        if cleaned:
            return cleaned
    return None


def _meta_contents(soup: BeautifulSoup) -> dict[str, str]:
    """Map lower-cased ``name``/``property`` keys to their first non-empty content."""
    found: dict[str, str] = {}
    for tag in soup.find_all("meta"):
        if not isinstance(tag, Tag):
            continue
        content = _safe_str(tag.get("content")).strip()
        if not content:
            continue
        for attr in ("name", "property"):
            key = _safe_str(tag.get(attr)).strip().lower()
            if key and key not in found:
                found[key] = content
    return found


def _document_title(soup: BeautifulSoup) -> Tag | None:
    """Return the page <title>, ignoring <title> children of inline SVG."""
    for tag in soup.find_all("title"):
        if isinstance(tag, Tag) and tag.find_parent("svg") is None:
            return tag
    return None


def extract_metadata(soup: BeautifulSoup) -> dict[str, str | None]:
    """Return ``{"title": ..., "description": ...}``; either may be ``None``."""
    meta = _meta_contents(soup)

    title_tag = _document_title(soup)
    h1_tag = soup.find("h1")
    title = _first(
        title_tag.get_text() if isinstance(title_tag, Tag) else None,
        meta.get("og:title"),
        meta.get("twitter:title"),
        node_text(h1_tag) if isinstance(h1_tag, Tag) else None,
    )

    description = _first(
        meta.get("description"),
        meta.get("og:description"),
        meta.get("twitter:description"),
    )

    logger.debug("metadata: title=%r description=%r", title, description)
    return {"title": title, "description": description}
