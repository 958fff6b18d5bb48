"""Tests for seoparser.items."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from seoparser.items import ExtractedContent, FallbackContent, FallbackSource, Heading


class TestHeading:
    def test_valid(self):
        heading = Heading(level=2, text="  Method ", content=["Step one"])
        assert heading.text == "Method"

    @pytest.mark.parametrize("level", [0, 5])
    def test_level_range(self, level):
        with pytest.raises(ValidationError):
            Heading(level=level, text="x")

    def test_blank_text_rejected(self):
        with pytest.raises(ValidationError):
            Heading(level=1, text="   ")

    def test_blank_content_rejected(self):
        with pytest.raises(ValidationError):
            Heading(level=1, text="x", content=["ok", " "])


class TestFallbackContent:
    def test_source_from_value(self):
        fallback = FallbackContent(source="text-blocks", text="abc")
        assert fallback.source is FallbackSource.TEXT_BLOCKS

    def test_unknown_source_rejected(self):
        with pytest.raises(ValidationError):
            FallbackContent(source="guesswork", text="abc")

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationError):
            FallbackContent(source="paragraphs", text="")


class TestExtractedContent:
    def test_headings_and_fallback_exclusive(self):
        with pytest.raises(ValidationError):
            ExtractedContent(
                headings=[Heading(level=1, text="x")],
                fallback_content=FallbackContent(source="paragraphs", text="y"),
            )

    def test_camel_case_dict(self):
        content = ExtractedContent(
            url="https://example.com/",
            meta_title="Example",
            fallback_content=FallbackContent(source="paragraphs", text="Body"),
            extracted_at="2024-01-01T00:00:00+00:00",
        )
        assert content.to_dict() == {
            "url": "https://example.com/",
            "metaTitle": "Example",
            "metaDescription": None,
            "headings": [],
            "fallbackContent": {"source": "paragraphs", "text": "Body"},
            "extractedAt": "2024-01-01T00:00:00+00:00",
        }

    def test_accepts_aliases(self):
        content = ExtractedContent.model_validate({"url": "u", "metaTitle": "T", "extractedAt": "now"})
        assert content.meta_title == "T"
        assert content.extracted_at == "now"
