"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def article_html() -> str:
    return _read_fixture("article.html")


@pytest.fixture
def wiki_html() -> str:
    return _read_fixture("wiki.html")


@pytest.fixture
def paragraphs_html() -> str:
    paragraphs = "\n".join(
        f"<p>Paragraph number {i} carries enough plain text to qualify.</p>"
        for i in range(1, 11)
    )
    return (
        "<html><head><title>Plain notes</title></head>"
        f"<body><div>{paragraphs}</div></body></html>"
    )
