"""Tests for seoparser.extractors.noise."""

from __future__ import annotations

from bs4 import BeautifulSoup

from seoparser.config import DEFAULT_CONFIG
from seoparser.extractors.noise import NoiseFilter, is_hidden, strip_noise


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def _filtered(html: str) -> BeautifulSoup:
    soup = _soup(html)
    strip_noise(soup)
    return soup


class TestStructuralRules:
    def test_removes_noise_tags(self):
        soup = _filtered(
            "<body><nav>Menu</nav><p>Body text</p><aside>Side</aside>"
            "<footer>Foot</footer><script>var x;</script><style>p{}</style></body>"
        )
        assert soup.find(["nav", "aside", "footer", "script", "style"]) is None
        assert soup.find("p").get_text() == "Body text"

    def test_removes_landmark_roles(self):
        soup = _filtered(
            '<body><div role="navigation">Links</div><div role="Banner">Logo</div>'
            '<div role="main"><p>Kept</p></div></body>'
        )
        assert soup.find(attrs={"role": "navigation"}) is None
        assert soup.find(attrs={"role": "Banner"}) is None
        assert soup.find(attrs={"role": "main"}) is not None

    def test_removes_page_banner_but_not_article_header(self):
        soup = _filtered(
            "<body><header>Site logo</header>"
            "<article><header><h1>Title</h1></header><p>Text</p></article></body>"
        )
        headers = soup.find_all("header")
        assert len(headers) == 1
        assert headers[0].find("h1") is not None

    def test_removes_mediawiki_chrome(self):
        soup = _filtered(
            '<body><h2>History <span class="mw-editsection">[edit]</span></h2>'
            '<div id="toc"><h2>Contents</h2></div><table class="navbox"><tr><td>x</td></tr></table>'
            "</body>"
        )
        assert soup.find(class_="mw-editsection") is None
        assert soup.find(id="toc") is None
        assert soup.find("table") is None
        assert soup.find("h2").get_text(strip=True) == "History"


class TestSubstringRule:
    def test_removes_matching_class(self):
        soup = _filtered('<body><div class="newsletter-box">Join</div><p>Text</p></body>')
        assert soup.find(class_="newsletter-box") is None

    def test_removes_matching_id(self):
        soup = _filtered('<body><div id="related-links">More</div><p>Text</p></body>')
        assert soup.find(id="related-links") is None

    def test_content_exemption(self):
        soup = _filtered('<body><div class="content-sidebar-wrap"><p>Keep me</p></div></body>')
        assert soup.find(class_="content-sidebar-wrap") is not None

    def test_matching_is_case_insensitive(self):
        soup = _filtered('<body><div class="SiteFooter">x</div><p>y</p></body>')
        assert soup.find(class_="SiteFooter") is None

    def test_body_is_protected(self):
        soup = _filtered('<html><body class="has-sidebar"><p>Text</p></body></html>')
        assert soup.find("body") is not None
        assert soup.find("p") is not None

    def test_heading_ids_are_protected(self):
        soup = _filtered('<body><h2 id="Comments_policy">Comments policy</h2></body>')
        assert soup.find("h2") is not None


class TestHidden:
    def test_is_hidden_attribute(self):
        assert is_hidden(_soup("<p hidden>x</p>").find("p"))

    def test_is_hidden_aria(self):
        assert is_hidden(_soup('<p aria-hidden="true">x</p>').find("p"))
        assert not is_hidden(_soup('<p aria-hidden="false">x</p>').find("p"))

    def test_is_hidden_inline_style(self):
        assert is_hidden(_soup('<p style="color:red; DISPLAY : none">x</p>').find("p"))
        assert not is_hidden(_soup('<p style="display:block">x</p>').find("p"))

    def test_hidden_elements_removed(self):
        soup = _filtered(
            '<body><p hidden>a</p><p aria-hidden="true">b</p>'
            '<p style="display:none">c</p><p>d</p></body>'
        )
        assert [p.get_text() for p in soup.find_all("p")] == ["d"]

    def test_hidden_body_kept(self):
        soup = _filtered(
            '<html aria-hidden="true"><body aria-hidden="true">'
            '<h1>Title</h1><div hidden>modal</div></body></html>'
        )
        assert soup.find("h1") is not None
        assert soup.find("div") is None


class TestNoiseFilter:
    def test_returns_removed_count(self):
        soup = _soup("<body><nav>a</nav><footer>b</footer><p>c</p></body>")
        assert NoiseFilter().apply(soup) == 2

    def test_idempotent(self, article_html):
        soup = _soup(article_html)
        assert strip_noise(soup) > 0
        before = str(soup)
        assert strip_noise(soup) == 0
        assert str(soup) == before

    def test_invalid_selector_is_skipped(self):
        config = DEFAULT_CONFIG.merged({"noise_selectors": ["[[[", ".sale-strip"]})
        soup = _soup('<body><div class="sale-strip">Sale</div><p>Text</p></body>')
        NoiseFilter(config).apply(soup)
        assert soup.find(class_="sale-strip") is None
        assert soup.find("p") is not None

    def test_article_fixture_boilerplate_removed(self, article_html):
        soup = _filtered(article_html)
        text = soup.get_text()
        assert "Popular posts" not in text
        assert "Hidden promotional text" not in text
        assert "Share on Twitter" not in text
        assert "We use cookies" not in text
        assert "Copyright 2024" not in text
        assert "Brewing great coffee" in text
