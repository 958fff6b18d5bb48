"""Tests for seoparser.extractors.fallback."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from seoparser.extractors.fallback import (
    ARTICLE_LIMIT,
    ARTICLE_MAX_CHARS,
    ELLIPSIS,
    PARAGRAPH_LIMIT,
    SEPARATOR,
    TEXT_BLOCK_LIMIT,
    FallbackExtractor,
    extract_fallback,
)
from seoparser.items import FallbackSource

SENTENCE = "This block of text is long enough to count as content on its own."


def _body(html: str):
    return BeautifulSoup(f"<html><body>{html}</body></html>", "lxml").body


class TestArticleContainers:
    def test_selected_first(self):
        body = _body(f"<div class='post-card'>{SENTENCE}</div><p>{SENTENCE} Paragraph.</p>")
        result = extract_fallback(body)
        assert result.source is FallbackSource.ARTICLE_CONTAINERS
        assert result.text == SENTENCE

    def test_short_matches_ignored(self):
        body = _body(f"<article>Too short.</article><p>{SENTENCE}</p>")
        result = extract_fallback(body)
        assert result.source is FallbackSource.PARAGRAPHS

    def test_truncated(self):
        body = _body(f"<article>{'word ' * 200}</article>")
        text = extract_fallback(body).text
        assert text.endswith(ELLIPSIS)
        assert len(text) <= ARTICLE_MAX_CHARS + len(ELLIPSIS)

    def test_limit(self):
        cards = "".join(f"<article>{SENTENCE} Card {i}.</article>" for i in range(15))
        result = extract_fallback(_body(cards))
        assert len(result.text.split(SEPARATOR)) == ARTICLE_LIMIT

    def test_nested_match_not_repeated(self):
        body = _body(f"<article class='story'><div class='entry-body'>{SENTENCE}</div></article>")
        assert FallbackExtractor().article_containers(body) == [SENTENCE]

    def test_document_order(self):
        body = _body(
            f"<div class='item'>{SENTENCE} First.</div>"
            f"<article>{SENTENCE} Second.</article>"
        )
        texts = FallbackExtractor().article_containers(body)
        assert texts == [f"{SENTENCE} First.", f"{SENTENCE} Second."]


class TestParagraphs:
    def test_paragraphs_strategy(self, paragraphs_html):
        body = BeautifulSoup(paragraphs_html, "lxml").body
        result = extract_fallback(body)
        assert result.source is FallbackSource.PARAGRAPHS
        entries = result.text.split(SEPARATOR)
        assert len(entries) == 10
        assert entries[0] == "Paragraph number 1 carries enough plain text to qualify."

    def test_short_paragraphs_skipped(self):
        body = _body(f"<p>Tiny.</p><p>{SENTENCE}</p>")
        assert FallbackExtractor().paragraphs(body) == [SENTENCE]

    def test_limit(self):
        body = _body("".join(f"<p>{SENTENCE} Number {i}.</p>" for i in range(25)))
        assert len(FallbackExtractor().paragraphs(body)) == PARAGRAPH_LIMIT


class TestTextBlocks:
    def test_text_blocks_strategy(self):
        body = _body(
            "<table><tr><td>Opening hours are nine to five daily</td></tr></table>"
            "<span>Opening hours are nine to five daily</span>"
            "<a href='/'>Home</a>"
        )
        result = extract_fallback(body)
        assert result.source is FallbackSource.TEXT_BLOCKS
        assert result.text == "Opening hours are nine to five daily"

    def test_length_bounds(self):
        body = _body("<span>Short one</span><span>" + "x" * 600 + "</span>")
        assert FallbackExtractor().text_blocks(body) == []

    def test_limit(self):
        spans = "".join(f"<span>Distinct text block number {i}</span>" for i in range(40))
        assert len(FallbackExtractor().text_blocks(_body(spans))) == TEXT_BLOCK_LIMIT

    @pytest.mark.parametrize(
        "phrase",
        ["Home", "About us", "Contact", "Sign in", "Next page", "Previous", "1 2 3 4 5 6 7 8 9 10 11", "Read more"],
    )
    def test_navigation_phrases(self, phrase):
        assert FallbackExtractor().is_navigation_phrase(phrase)

    def test_sentence_is_not_navigation(self):
        assert not FallbackExtractor().is_navigation_phrase("Home brewing is a rewarding hobby")


class TestExtractFallback:
    def test_none_when_nothing_qualifies(self):
        assert extract_fallback(_body("<p>Short.</p><span>Tiny</span>")) is None

    def test_empty_container(self):
        assert extract_fallback(_body("")) is None
