"""Extraction sub-package: deterministic, template-agnostic heading/content extraction."""

from .container import select_container
from .fallback import FallbackExtractor, extract_fallback
from .formatting import ContentKind, format_element
from .metadata import extract_metadata
from .noise import NoiseFilter, strip_noise
from .sections import SectionExtractor, extract_headings
from .text import clean_text

__all__ = [
    "ContentKind",
    "FallbackExtractor",
    "NoiseFilter",
    "SectionExtractor",
    "clean_text",
    "extract_fallback",
    "extract_headings",
    "extract_metadata",
    "format_element",
    "select_container",
    "strip_noise",
]
