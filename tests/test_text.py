"""Tests for seoparser.extractors.text."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from seoparser.extractors.text import clean_text, text_excluding


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


SAMPLES = [
    "",
    "   ",
    "plain",
    "  spaced   out \n\t text  ",
    "History[edit]",
    "Patented in 1884.[citation needed] Later [note 3] revised.[12]",
    "Nested [[1]2] marker",
    "[ edit source ] Heading",
    "Non breaking spaces",
    "[Citation  Needed]",
    "Keep [brackets] that are prose",
    "[[[1]]]",
]


class TestCleanText:
    def test_collapses_whitespace(self):
        assert clean_text("  a \n\n b\t c ") == "a b c"

    def test_strips_edit_marker(self):
        assert clean_text("History [edit]") == "History"

    def test_strips_citation_markers(self):
        assert clean_text("Patented in 1884.[citation needed][2]") == "Patented in 1884."

    def test_strips_note_markers(self):
        assert clean_text("A claim[note 4] here") == "A claim here"

    def test_keeps_prose_brackets(self):
        assert clean_text("Keep [brackets] intact") == "Keep [brackets] intact"

    def test_marker_exposed_by_removal(self):
        assert clean_text("x[[1]2]y") == "xy"

    def test_none_returns_empty(self):
        assert clean_text(None) == ""

    @pytest.mark.parametrize("sample", SAMPLES)
    def test_idempotent(self, sample):
        once = clean_text(sample)
        assert clean_text(once) == once

    @pytest.mark.parametrize("sample", SAMPLES)
    def test_never_lengthens(self, sample):
        assert len(clean_text(sample)) <= len(sample)


class TestTextExcluding:
    def test_skips_nested_lists(self):
        soup = _soup("<ul><li>Outer <b>bold</b><ul><li>Inner</li></ul></li></ul>")
        li = soup.find("li")
        assert text_excluding(li, frozenset({"ul", "ol"})) == "Outer bold"

    def test_does_not_mutate_tree(self):
        soup = _soup("<ul><li>Outer<ol><li>Inner</li></ol></li></ul>")
        before = str(soup)
        text_excluding(soup.find("li"), frozenset({"ul", "ol"}))
        assert str(soup) == before

    def test_ignores_comments(self):
        soup = _soup("<p>Visible<!-- hidden note --></p>")
        assert text_excluding(soup.find("p"), frozenset()) == "Visible"
