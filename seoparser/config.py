"""Extraction configuration: noise selectors, container priorities, phrase lists.

The engine never reads module-level mutable state; every stage receives an
:class:`ExtractorConfig`.  Tests and callers can substitute smaller fixtures
or load overrides from YAML::

    # seoparser.yaml
    extend_noise_selectors:
      - ".promo-strip"
    heading_wrapper_classes:
      - "mw-heading"
      - "docs-heading"

    from seoparser.config import load_config
    config = load_config("seoparser.yaml")
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class ExtractorConfig:
    """Static lists that drive the heuristic stages."""

    # Structural tags removed outright by the noise filter
    noise_tags: tuple[str, ...] = (
        "nav",
        "aside",
        "footer",
        "script",
        "style",
        "noscript",
        "iframe",
        "template",
        "svg",
        "canvas",
        "button",
        "select",
        "textarea",
        "input",
    )

    # ARIA landmark roles removed by the noise filter
    noise_roles: tuple[str, ...] = (
        "navigation",
        "banner",
        "complementary",
        "contentinfo",
        "search",
        "menu",
        "menubar",
        "dialog",
        "alertdialog",
    )

    # CSS selectors (exact class/id and substring matches) for boilerplate
    noise_selectors: tuple[str, ...] = (
        # Page banners
        "body > header",
        "#masthead",
        ".site-header",
        # Ads
        ".ad",
        ".ads",
        ".adsbygoogle",
        ".ad-container",
        ".ad-slot",
        "[id^='ad-']",
        "[class*='advert']",
        "[id*='advert']",
        "[class*='sponsor']",
        # Cookie / consent banners
        "#onetrust-consent-sdk",
        "#CybotCookiebotDialog",
        "#cookie-law-info-bar",
        ".cookie-banner",
        ".cookie-notice",
        "[class*='gdpr']",
        "[aria-label='cookieconsent']",
        # Social widgets
        ".share-buttons",
        ".sharedaddy",
        ".addthis_toolbox",
        "[class*='social-']",
        # Pagination
        ".pagination",
        ".pager",
        ".nav-links",
        "[class*='breadcrumb']",
        # Comments
        "#comments",
        "#respond",
        ".comments-area",
        "#disqus_thread",
        # MediaWiki chrome
        ".mw-editsection",
        ".mw-jump-link",
        "#toc",
        ".toc",
        ".mw-references-wrap",
        ".navbox",
        ".metadata",
        ".ambox",
        "#catlinks",
        "#siteSub",
        "#contentSub",
        "#p-lang",
        ".printfooter",
        # Generic table-of-contents boxes
        "[class*='table-of-contents']",
        ".ez-toc-container",
        "#ez-toc-container",
        # Screen-reader-only helpers
        ".screen-reader-text",
        ".sr-only",
        ".visually-hidden",
    )

    # Class/id substrings that mark boilerplate unless "content" is present too
    noise_substrings: tuple[str, ...] = (
        "footer",
        "nav",
        "menu",
        "sidebar",
        "widget",
        "advertisement",
        "social",
        "share",
        "comment",
        "related",
        "promo",
        "newsletter",
        "subscribe",
        "cookie",
        "consent",
    )
    noise_exempt_substring: str = "content"
    # Never removed by the substring rule; heading ids are slugs of their text
    substring_protected_tags: tuple[str, ...] = (
        "html", "body", "h1", "h2", "h3", "h4", "h5", "h6",
    )

    # Container selectors in priority order (earlier wins)
    container_selectors: tuple[str, ...] = (
        "main",
        "[role='main']",
        "article",
        "#content",
        "#main-content",
        ".main-content",
        "#mw-content-text",
        ".post-content",
        ".article-content",
        ".entry-content",
        ".content",
        "#main",
    )

    # Class-name prefixes of elements that wrap a single heading
    heading_wrapper_classes: tuple[str, ...] = (
        "mw-heading",
        "heading-wrapper",
    )

    # Full-match patterns (case-insensitive) for headings that are chrome
    noise_heading_patterns: tuple[str, ...] = (
        r"edit",
        r"edit source",
        r"(?:table of )?contents",
        r"menu",
        r"main menu",
        r"navigation(?: menu)?",
        r"search",
        r"languages?",
        r"select language",
        r"change language",
        r"\d+ languages",
        r"tools",
        r"personal tools",
        r"views",
        r"namespaces",
        r"skip to (?:main )?content",
        r"share(?: this)?",
        r"related (?:posts|articles)",
        r"(?:leave a )?(?:comments?|reply)",
    )

    # Fallback strategy 1 selectors
    article_selectors: tuple[str, ...] = (
        "article",
        "[class*='article']",
        "[class*='post']",
        "[class*='entry']",
        "[class*='story']",
        "[class*='item']",
    )

    # Fallback strategy 3 rejects blocks that fully match any of these
    nav_phrase_patterns: tuple[str, ...] = (
        r"home(?: page)?",
        r"about(?: us)?",
        r"contact(?: us)?",
        r"log ?in|sign ?in|log ?out|sign ?out|sign ?up|register",
        r"search(?: this site)?",
        r"prev(?:ious)?(?: page| post| article)?",
        r"next(?: page| post| article)?",
        r"[\d\s.,/]+",
        r"(?:read |show |view |load )?more(?: \w+)?",
        r"(?:show )?less",
        r"show(?: \w+)?",
        r"hide(?: \w+)?",
    )

    def merged(self, overrides: dict[str, Any]) -> ExtractorConfig:
        """Return a copy with *overrides* applied.

        ``<field>`` replaces a list, ``extend_<field>`` appends to it.
        """
        names = {f.name for f in dataclasses.fields(self)}
        changes: dict[str, Any] = {}
        for key, value in overrides.items():
            extend = key.startswith("extend_")
            name = key[len("extend_"):] if extend else key
            if name not in names:
                raise ValueError(f"Unknown configuration key: {key!r}")
            current = changes.get(name, getattr(self, name))
            if isinstance(current, str):
                if extend or not isinstance(value, str):
                    raise ValueError(f"{name!r} expects a single string")
                changes[name] = value
                continue
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise ValueError(f"{key!r} expects a list of strings")
            items = tuple(str(v) for v in value)
            changes[name] = current + items if extend else items
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = ExtractorConfig()


def load_config(path: str | Path, base: ExtractorConfig | None = None) -> ExtractorConfig:
    """Load YAML overrides from *path* on top of *base* (defaults if omitted)."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return (base or DEFAULT_CONFIG).merged(data)
