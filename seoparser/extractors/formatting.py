"""Convert content-bearing elements into ordered text fragments.

Fragment kinds: list | paragraph | definition list | table | other
"""

from __future__ import annotations

from enum import Enum

from bs4 import Tag

from seoparser.extractors.text import clean_text, node_text, text_excluding

BULLET = "•"
INDENT = "  "
CELL_SEPARATOR = " | "

_LIST_TAGS = frozenset({"ul", "ol"})


class ContentKind(Enum):
    LIST = "list"
    PARAGRAPH = "paragraph"
    DEFINITION_LIST = "definition_list"
    TABLE = "table"
    OTHER = "other"


_KIND_BY_TAG: dict[str, ContentKind] = {
    "ul": ContentKind.LIST,
    "ol": ContentKind.LIST,
    "p": ContentKind.PARAGRAPH,
    "div": ContentKind.PARAGRAPH,
    "section": ContentKind.PARAGRAPH,
    "article": ContentKind.PARAGRAPH,
    "blockquote": ContentKind.PARAGRAPH,
    "caption": ContentKind.PARAGRAPH,
    "dl": ContentKind.DEFINITION_LIST,
    "table": ContentKind.TABLE,
}


def content_kind(tag: Tag) -> ContentKind:
    return _KIND_BY_TAG.get(tag.name, ContentKind.OTHER)


def _outermost(tag: Tag, names: frozenset[str]) -> list[Tag]:
    """Return descendants of *tag* named in *names* that are not nested in another."""
    found: list[Tag] = []
    for el in tag.find_all(list(names)):
        parent = el.parent
        nested = False
        while parent is not None and parent is not tag:
            if parent.name in names:
                nested = True
                break
            parent = parent.parent
        if not nested:
            found.append(el)
    return found


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

def format_list_lines(tag: Tag, depth: int = 0) -> list[str]:
    """Return one line per item of list *tag*, nested lists indented deeper."""
    ordered = tag.name == "ol"
    lines: list[str] = []
    for index, item in enumerate(tag.find_all("li", recursive=False), start=1):
        text = text_excluding(item, _LIST_TAGS)
        if text:
            marker = f"{index}." if ordered else BULLET
            lines.append(f"{INDENT * depth}{marker} {text}")
        for nested in _outermost(item, _LIST_TAGS):
            lines.extend(format_list_lines(nested, depth + 1))
    return lines


def format_list(tag: Tag) -> list[str]:
    lines = format_list_lines(tag)
    return ["\n".join(lines)] if lines else []


# ---------------------------------------------------------------------------
# Paragraph-like containers
# ---------------------------------------------------------------------------

def format_paragraph(tag: Tag) -> list[str]:
    nested_lists = _outermost(tag, _LIST_TAGS)
    if nested_lists:
        fragments: list[str] = []
        own = text_excluding(tag, _LIST_TAGS)
        if own:
            fragments.append(own)
        for nested in nested_lists:
            fragments.extend(format_list(nested))
        return fragments

    if tag.name != "p":
        paragraphs = tag.find_all("p")
        if paragraphs:
            return [text for text in (node_text(p) for p in paragraphs) if text]

    text = node_text(tag)
    return [text] if text else []


# ---------------------------------------------------------------------------
# Definition lists
# ---------------------------------------------------------------------------

def format_definition_list(tag: Tag) -> list[str]:
    fragments: list[str] = []
    for item in tag.find_all(["dt", "dd"]):
        if item.find_parent("dl") is not tag:
            continue
        text = node_text(item)
        if not text:
            continue
        if item.name == "dt":
            fragments.append(f"{text.rstrip(':').rstrip()}:")
        else:
            fragments.append(text)
    return fragments


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def format_table(tag: Tag) -> list[str]:
    fragments: list[str] = []
    for row in tag.find_all("tr"):
        if row.find_parent("table") is not tag:
            continue
        cells = [clean_text(cell.get_text()) for cell in row.find_all(["td", "th"], recursive=False)]
        line = CELL_SEPARATOR.join(c for c in cells if c)
        if line:
            fragments.append(line)
    return fragments


def format_element(tag: Tag) -> list[str]:
    """Return the text fragments of *tag* in document order."""
    kind = content_kind(tag)
    if kind is ContentKind.LIST:
        return format_list(tag)
    if kind is ContentKind.PARAGRAPH:
        return format_paragraph(tag)
    if kind is ContentKind.DEFINITION_LIST:
        return format_definition_list(tag)
    if kind is ContentKind.TABLE:
        return format_table(tag)
    return []
