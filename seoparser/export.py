"""Offline document export: Markdown and Word (.docx).

Both formats share one layout::

    Page Content Optimization
    URL: ...
    --- Meta Information ---
    Meta Title: ...
    Meta Description: ...
    --- Page Content ---
    [H1] Heading text
    Body content paragraph...
    • Bullet lines reproduced one per line
    Extracted at: ...
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

if TYPE_CHECKING:
    from docx.document import Document as DocxDocument
    from docx.text.paragraph import Paragraph

    from seoparser.items import ExtractedContent

logger = logging.getLogger(__name__)

DOCUMENT_TITLE = "Page Content Optimization"
NOT_FOUND = "Not found"
NO_CONTENT = "No content found"

# Per heading level: (font size in points, hex colour)
_HEADING_STYLES: dict[int, tuple[int, str]] = {
    1: (16, "2563EB"),
    2: (14, "7C3AED"),
    3: (13, "059669"),
    4: (12, "D97706"),
}
_DEFAULT_HEADING_STYLE = (12, "6B7280")


def export_filename(url: str, extension: str = "docx") -> str:
    """Return ``<domain>-content-extraction.<extension>`` for *url*."""
    try:
        host = urlparse(url).hostname or ""
    except ValueError:
        host = ""
    domain = host.removeprefix("www.") or "extracted"
    return f"{domain}-content-extraction.{extension}"


def _format_timestamp(value: str) -> str:
    try:
        return datetime.fromisoformat(value).strftime("%Y-%m-%d %H:%M:%S %Z").strip()
    except ValueError:
        return value


def _fallback_note(source: str) -> str:
    return f"Note: No semantic headings found. Content extracted using fallback method: {source}"


def _is_multiline(fragment: str) -> bool:
    return "\n" in fragment


# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------

def to_markdown(content: ExtractedContent) -> str:
    """Render *content* as a Markdown document."""
    lines: list[str] = [f"# {DOCUMENT_TITLE}", "", f"**URL:** {content.url}", ""]

    lines += ["---", "## Meta Information", "---", ""]
    lines.append(f"**Meta Title:** {content.meta_title or f'*{NOT_FOUND}*'}")
    lines.append("")
    lines.append(f"**Meta Description:** {content.meta_description or f'*{NOT_FOUND}*'}")
    lines.append("")

    lines += ["---", "## Page Content", "---", ""]
    if content.headings:
        for heading in content.headings:
            hashes = "#" * min(heading.level + 2, 6)
            lines.append(f"{hashes} [H{heading.level}] {heading.text}")
            lines.append("")
            for fragment in heading.content:
                if _is_multiline(fragment):
                    # Keep list indentation; two trailing spaces force a line break
                    lines.extend(f"{line}  " for line in fragment.split("\n") if line.strip())
                else:
                    lines.append(fragment)
                lines.append("")
    elif content.fallback_content is not None:
        lines.append(f"*{_fallback_note(content.fallback_content.source.value)}*")
        lines.append("")
        for line in content.fallback_content.text.split("\n"):
            if line.strip():
                lines += [line.strip(), ""]
    else:
        lines.append(f"*{NO_CONTENT}*")
        lines.append("")

    lines.append(f"*Extracted at: {_format_timestamp(content.extracted_at)}*")
    return "\n".join(lines).rstrip() + "\n"


# ---------------------------------------------------------------------------
# Word
# ---------------------------------------------------------------------------

def _add_section_divider(doc: DocxDocument, title: str) -> Paragraph:
    paragraph = doc.add_paragraph()
    run = paragraph.add_run(title)
    run.bold = True
    run.font.size = Pt(14)

    borders = OxmlElement("w:pBdr")
    for side in ("top", "bottom"):
        edge = OxmlElement(f"w:{side}")
        edge.set(qn("w:val"), "single")
        edge.set(qn("w:sz"), "6")
        edge.set(qn("w:space"), "1")
        edge.set(qn("w:color"), "333333")
        borders.append(edge)
    paragraph._p.get_or_add_pPr().append(borders)
    paragraph.paragraph_format.space_before = Pt(10)
    paragraph.paragraph_format.space_after = Pt(10)
    return paragraph


def _add_labelled(doc: DocxDocument, label: str, value: str | None) -> Paragraph:
    paragraph = doc.add_paragraph()
    paragraph.add_run(label).bold = True
    run = paragraph.add_run(value or NOT_FOUND)
    run.italic = not value
    return paragraph


def _add_heading(doc: DocxDocument, level: int, text: str) -> Paragraph:
    size, colour = _HEADING_STYLES.get(level, _DEFAULT_HEADING_STYLE)
    paragraph = doc.add_heading(level=min(level, 4))
    marker = paragraph.add_run(f"[H{level}] ")
    marker.bold = True
    marker.font.color.rgb = RGBColor.from_string(colour)
    title = paragraph.add_run(text)
    title.bold = True
    title.font.size = Pt(size)
    paragraph.paragraph_format.space_before = Pt(12)
    paragraph.paragraph_format.space_after = Pt(6)
    return paragraph


def to_docx(content: ExtractedContent) -> DocxDocument:
    """Build a python-docx ``Document`` for *content*."""
    doc = Document()

    title = doc.add_paragraph()
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    title_run = title.add_run(DOCUMENT_TITLE)
    title_run.bold = True
    title_run.font.size = Pt(16)

    doc.add_paragraph("")
    _add_labelled(doc, "URL: ", content.url)
    doc.add_paragraph("")

    _add_section_divider(doc, "Meta Information")
    _add_labelled(doc, "Meta Title: ", content.meta_title)
    _add_labelled(doc, "Meta Description: ", content.meta_description)
    doc.add_paragraph("")

    _add_section_divider(doc, "Page Content")
    if content.headings:
        for heading in content.headings:
            _add_heading(doc, heading.level, heading.text)
            for fragment in heading.content:
                if not _is_multiline(fragment):
                    doc.add_paragraph(fragment)
                    continue
                for line in fragment.split("\n"):
                    if not line.strip():
                        continue
                    paragraph = doc.add_paragraph(line.strip())
                    depth = (len(line) - len(line.lstrip(" "))) // 2
                    paragraph.paragraph_format.left_indent = Inches(0.5 * (depth + 1))
                    paragraph.paragraph_format.space_after = Pt(3)
    elif content.fallback_content is not None:
        note = doc.add_paragraph()
        note.add_run(_fallback_note(content.fallback_content.source.value)).italic = True
        for line in content.fallback_content.text.split("\n"):
            if line.strip():
                doc.add_paragraph(line.strip())
    else:
        doc.add_paragraph().add_run(NO_CONTENT).italic = True

    doc.add_paragraph("")
    footer = doc.add_paragraph()
    footer.alignment = WD_ALIGN_PARAGRAPH.CENTER
    footer_run = footer.add_run(f"Extracted at: {_format_timestamp(content.extracted_at)}")
    footer_run.font.size = Pt(10)
    footer_run.font.color.rgb = RGBColor.from_string("888888")
    return doc


def write_docx(content: ExtractedContent, path: str | Path) -> Path:
    """Write *content* as a .docx file at *path*.

    *path* names a directory when it exists as one, ends with a path
    separator or has no ``.docx`` suffix; the file inside it gets the
    name from :func:`export_filename`.
    """
    raw = str(path)
    target = Path(path)
    if (
        target.is_dir()
        or raw.endswith(("/", os.sep))
        or target.suffix.lower() != ".docx"
    ):
        target = target / export_filename(content.url)
    target.parent.mkdir(parents=True, exist_ok=True)
    to_docx(content).save(str(target))
    logger.info("Wrote %s", target)
    return target
