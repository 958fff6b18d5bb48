"""seoparser - extract page metadata and the heading hierarchy of any web page.

Quick single-URL usage::

    from seoparser import fetch

    page = fetch("https://example.com/")
    print(page.meta_title)
    for heading in page.headings:
        print(f"H{heading.level}", heading.text)
        for fragment in heading.content:
            print("   ", fragment)

Pre-fetched HTML::

    from seoparser import extract

    page = extract(html, url="https://example.com/")
    if not page.headings and page.fallback_content:
        print(page.fallback_content.source, page.fallback_content.text)

Export::

    from seoparser import to_markdown, write_docx

    print(to_markdown(page))
    write_docx(page, "out/")
"""

from seoparser.config import DEFAULT_CONFIG, ExtractorConfig, load_config
from seoparser.export import to_docx, to_markdown, write_docx
from seoparser.items import ExtractedContent, FallbackContent, FallbackSource, Heading
from seoparser.query import FetchError, extract, fetch, fetch_batch, fetch_html

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_CONFIG",
    "ExtractedContent",
    "ExtractorConfig",
    "FallbackContent",
    "FallbackSource",
    "FetchError",
    "Heading",
    "extract",
    "fetch",
    "fetch_batch",
    "fetch_html",
    "load_config",
    "to_docx",
    "to_markdown",
    "write_docx",
]
