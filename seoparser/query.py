"""seoparser.query - single-URL fetch and extraction API.

Lets any Python script import and call ``fetch()`` to get the heading
structure of a page.  Uses only the stdlib (``urllib``) for HTTP.

Basic usage::

    from seoparser.query import fetch

    page = fetch("https://example.com/")
    print(page.meta_title)
    for heading in page.headings:
        print(heading.level, heading.text, heading.content)

    # As a camelCase dict
    data = page.to_dict()

Low-level access::

    from seoparser.query import fetch_html, extract

    html = fetch_html("https://example.com/")
    page = extract(html, url="https://example.com/")
"""

from __future__ import annotations

import gzip
import logging
import random
import time
import urllib.error
import urllib.request
import zlib
from datetime import UTC, datetime
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from seoparser.config import DEFAULT_CONFIG, ExtractorConfig
from seoparser.extractors.container import select_container
from seoparser.extractors.fallback import extract_fallback
from seoparser.extractors.metadata import extract_metadata
from seoparser.extractors.noise import strip_noise
from seoparser.extractors.sections import extract_headings
from seoparser.items import ExtractedContent

logger = logging.getLogger(__name__)

_DEFAULT_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


# ---------------------------------------------------------------------------
# Public exception
# ---------------------------------------------------------------------------

class FetchError(RuntimeError):
    """Raised when a URL cannot be fetched.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
        body   -- decoded error response body, when one was returned
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        status: int = 0,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body


def _decode_response_body(raw: bytes, headers: object | None) -> str:
    encoding = ""
    if headers is not None:
        try:
            encoding = str(headers.get("Content-Encoding", "")).lower().strip()
        except Exception:
            encoding = ""

    if encoding == "gzip":
        raw = gzip.decompress(raw)
    elif encoding in ("deflate", "zlib"):
        raw = zlib.decompress(raw)

    charset = "utf-8"
    if headers is not None:
        try:
            charset = headers.get_content_charset("utf-8") or "utf-8"
        except Exception:
            charset = "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Low-level HTTP fetch
# ---------------------------------------------------------------------------

_RETRY_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


class _TransientFetchError(FetchError):
    """A failure worth retrying: 429/5xx responses and network errors."""


def _http_error(exc: urllib.error.HTTPError, url: str) -> FetchError:
    body_text = ""
    try:
        raw = exc.read()
        if raw:
            body_text = _decode_response_body(raw, exc.headers)
    except Exception:
        body_text = ""
    error_cls = _TransientFetchError if exc.code in _RETRY_CODES else FetchError
    return error_cls(
        f"Failed to fetch URL: {exc.code} {exc.reason}",
        url=url,
        status=exc.code,
        body=body_text,
    )


def _request_once(req: urllib.request.Request, url: str, timeout: int) -> str:
    """Perform a single request, translating every failure into :class:`FetchError`."""
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw: bytes = resp.read()
            headers = resp.headers
    except urllib.error.HTTPError as exc:
        raise _http_error(exc, url) from exc
    except urllib.error.URLError as exc:
        raise _TransientFetchError(f"Network error fetching {url}: {exc.reason}", url=url) from exc
    except OSError as exc:
        raise _TransientFetchError(f"Network error fetching {url}: {exc}", url=url) from exc

    try:
        return _decode_response_body(raw, headers)
    except (OSError, zlib.error) as exc:
        raise FetchError(f"Failed to decompress response from {url}: {exc}", url=url) from exc


def fetch_html(
    url: str,
    *,
    timeout: int = 30,
    user_agent: str | None = None,
    max_retries: int = 3,
) -> str:
    """Fetch *url* and return the response body as a decoded string.

    Retries up to *max_retries* times with jittered exponential backoff on
    transient errors (429, 500, 502, 503, 504, and network-level failures).

    Args:
        url:         Fully-qualified HTTP/HTTPS URL.
        timeout:     Request timeout in seconds (default 30).
        user_agent:  Override the default browser User-Agent string.
        max_retries: Maximum number of retry attempts (default 3).

    Returns:
        Response body decoded to ``str``.

    Raises:
        FetchError: On HTTP errors, connection failures, or invalid URLs.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Unsupported URL scheme: {parsed.scheme!r}", url=url)

    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent or _DEFAULT_UA,
            "Accept": (
                "text/html,application/xhtml+xml,application/xml;"
                "q=0.9,image/webp,*/*;q=0.8"
            ),
            "Accept-Language": "en-US,en;q=0.5",
            "Accept-Encoding": "gzip, deflate",
        },
    )

    attempt = 0
    while True:
        try:
            return _request_once(req, url, timeout)
        except _TransientFetchError as exc:
            if attempt >= max_retries:
                raise
            delay = (2 ** attempt) + random.uniform(0, 1)
            attempt += 1
            logger.debug(
                "%s - retrying in %.1fs (attempt %d/%d)", exc, delay, attempt, max_retries,
            )
            time.sleep(delay)


# ---------------------------------------------------------------------------
# Extraction pipeline (no network)
# ---------------------------------------------------------------------------

def extract(
    html: str,
    url: str = "",
    *,
    config: ExtractorConfig | None = None,
) -> ExtractedContent:
    """Run the full extraction pipeline on already-fetched *html*.

    Stages: metadata → noise filter → container selection → heading
    sections, or the fallback extractor when no heading qualifies.  The
    parsed tree is private to this call.
    """
    config = config or DEFAULT_CONFIG
    soup = BeautifulSoup(html or "", "lxml")

    meta = extract_metadata(soup)
    strip_noise(soup, config)
    container = select_container(soup, config)
    headings = extract_headings(container, config)
    fallback = None if headings else extract_fallback(container, config)

    logger.debug(
        "extract: %d headings, fallback=%s url=%s",
        len(headings), fallback.source.value if fallback else None, url,
    )
    return ExtractedContent(
        url=url,
        meta_title=meta["title"],
        meta_description=meta["description"],
        headings=headings,
        fallback_content=fallback,
        extracted_at=datetime.now(UTC).isoformat(),
    )


# ---------------------------------------------------------------------------
# Main public API
# ---------------------------------------------------------------------------

def fetch(
    url: str,
    *,
    timeout: int = 30,
    user_agent: str | None = None,
    max_retries: int = 3,
    config: ExtractorConfig | None = None,
) -> ExtractedContent:
    """Fetch *url* and return its :class:`~seoparser.items.ExtractedContent`.

    Raises:
        :class:`FetchError`: If the URL cannot be fetched (HTTP errors,
            network errors, invalid scheme).  Extraction does not run.
    """
    logger.info("fetch: %s", url)
    html = fetch_html(url, timeout=timeout, user_agent=user_agent, max_retries=max_retries)
    return extract(html, url=url, config=config)


# ---------------------------------------------------------------------------
# Batch API
# ---------------------------------------------------------------------------

def fetch_batch(
    urls: list[str],
    *,
    max_workers: int = 8,
    timeout: int = 30,
    user_agent: str | None = None,
    on_error: str = "skip",
    config: ExtractorConfig | None = None,
) -> list[ExtractedContent | None]:
    """Fetch multiple URLs concurrently and return their extracted content.

    Results are returned in the same order as *urls* regardless of which
    requests finish first.  Each worker parses its own document.

    Args:
        on_error: ``"skip"`` (default) omits failed URLs; ``"raise"``
                  re-raises the first failure; ``"include"`` keeps a
                  ``None`` slot for every failed URL.

    Raises:
        :class:`FetchError`: Only when ``on_error="raise"`` and any URL fails.
        :class:`ValueError`: For unknown *on_error* values.
    """
    from concurrent.futures import ThreadPoolExecutor, as_completed

    if on_error not in ("skip", "raise", "include"):
        raise ValueError(f"on_error must be 'skip', 'raise', or 'include'; got {on_error!r}")

    results: list[ExtractedContent | None] = [None] * len(urls)

    def _fetch_one(idx: int, url: str) -> tuple[int, ExtractedContent | None]:
        try:
            return idx, fetch(url, timeout=timeout, user_agent=user_agent, config=config)
        except FetchError as exc:
            if on_error == "raise":
                raise
            logger.warning("fetch_batch: failed to fetch %s: %s", url, exc)
            return idx, None

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(_fetch_one, i, url) for i, url in enumerate(urls)]
        for future in as_completed(futures):
            idx, page = future.result()
            results[idx] = page

    if on_error == "include":
        return results
    return [r for r in results if r is not None]
