"""Pydantic output schema for extracted page content."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Heading(BaseModel):
    """A heading (h1-h4) with the body text of its section."""

    level: int = Field(ge=1, le=4)
    text: str = Field(min_length=1)
    content: list[str] = Field(default_factory=list)

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("content")
    @classmethod
    def no_blank_content(cls, v: list[str]) -> list[str]:
        if any(not item.strip() for item in v):
            raise ValueError("content fragments must not be blank")
        return v


class FallbackSource(str, Enum):
    ARTICLE_CONTAINERS = "article-containers"
    PARAGRAPHS = "paragraphs"
    TEXT_BLOCKS = "text-blocks"


class FallbackContent(BaseModel):
    """Best-effort text used when a page has no usable headings."""

    source: FallbackSource
    text: str = Field(min_length=1)


class ExtractedContent(BaseModel):
    """Canonical output record of one extraction call.

    Field names serialise in camelCase (``metaTitle``, ``fallbackContent``,
    ...) with ``model_dump(by_alias=True)``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str = ""
    meta_title: str | None = None
    meta_description: str | None = None
    headings: list[Heading] = Field(default_factory=list)
    fallback_content: FallbackContent | None = None
    extracted_at: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode="after")
    def fallback_only_without_headings(self) -> ExtractedContent:
        if self.headings and self.fallback_content is not None:
            raise ValueError("fallback_content is only allowed when headings is empty")
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready camelCase representation."""
        return self.model_dump(mode="json", by_alias=True)
