"""Pydantic value records produced by one extraction call."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_FROZEN = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Page features
# ---------------------------------------------------------------------------

class LinkInfo(BaseModel):
    model_config = _FROZEN

    text: str
    href: str
    title: str = ""
    rel: str = ""


class HeadingInfo(BaseModel):
    model_config = _FROZEN

    level: int = Field(ge=1, le=6)
    text: str
    anchor_id: str = ""


class ImageInfo(BaseModel):
    model_config = _FROZEN

    src: str
    alt: str = ""
    title: str = ""
    width: int = 0
    height: int = 0


class MetaTagInfo(BaseModel):
    model_config = _FROZEN

    key: str
    content: str
    attribute: str = "name"  # "name" | "property"

    @field_validator("attribute")
    @classmethod
    def check_attribute(cls, v: str) -> str:
        if v not in ("name", "property"):
            raise ValueError(f"attribute must be 'name' or 'property', got {v!r}")
        return v


class PageFeatures(BaseModel):
    """Flat structural lists gathered independently of article extraction."""

    model_config = _FROZEN

    meta_tags: list[MetaTagInfo] = Field(default_factory=list)
    images: list[ImageInfo] = Field(default_factory=list)
    links: list[LinkInfo] = Field(default_factory=list)
    headings: list[HeadingInfo] = Field(default_factory=list)
    paragraphs: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Article extraction
# ---------------------------------------------------------------------------

class ExtractionResult(BaseModel):
    """Article-like fields.  ``length`` is always ``len(content)``."""

    model_config = _FROZEN

    title: str = ""
    content: str = ""
    text_content: str = ""
    excerpt: str = ""
    site_name: str = ""
    byline: str = ""
    length: int = 0

    @model_validator(mode="before")
    @classmethod
    def derive_length(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            content = data.get("content") or ""
            data.setdefault("text_content", content)
            data["length"] = len(content)
        return data


# ---------------------------------------------------------------------------
# Full output
# ---------------------------------------------------------------------------

class PageRecord(BaseModel):
    """Canonical output of one extraction cycle.

    ``length`` is always ``len(content)``.  ``readability_score`` is the length
    of the located article text and stays 0 when only raw body text was
    available.
    """

    model_config = _FROZEN

    # Identity
    url: str = ""
    timestamp: str = ""

    # Article
    title: str = ""
    content: str = ""
    text_content: str = ""
    excerpt: str = ""
    site_name: str = ""
    byline: str = ""
    length: int = 0

    # Host-facing counters
    text_length: int = 0
    readability_score: int = 0

    # Features
    links: list[LinkInfo] = Field(default_factory=list)
    headings: list[HeadingInfo] = Field(default_factory=list)
    images: list[ImageInfo] = Field(default_factory=list)
    paragraphs: list[str] = Field(default_factory=list)
    meta_tags: list[MetaTagInfo] = Field(default_factory=list)

    # Provenance
    extraction_method: str = "region"
    degraded: bool = False

    @model_validator(mode="before")
    @classmethod
    def derive_length(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            data["length"] = len(data.get("content") or "")
        return data

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @property
    def stats(self) -> dict[str, int]:
        """Counts shown to the host alongside the content."""
        return {
            "links": len(self.links),
            "headings": len(self.headings),
            "images": len(self.images),
            "paragraphs": len(self.paragraphs),
        }


def build_page_record(
    article: ExtractionResult,
    features: PageFeatures,
    *,
    url: str,
    timestamp: str,
    text: str,
    extraction_method: str,
) -> PageRecord:
    """Merge article fields and page features into one :class:`PageRecord`.

    *text* is the text handed to the host; it is ``article.content`` unless
    the caller had to fall back to raw body text.  ``length`` follows *text*;
    ``readability_score`` keeps the article length.
    """
    return PageRecord(
        url=url,
        timestamp=timestamp,
        title=article.title,
        content=text,
        text_content=text,
        excerpt=article.excerpt,
        site_name=article.site_name,
        byline=article.byline,
        text_length=len(text),
        readability_score=article.length,
        links=features.links,
        headings=features.headings,
        images=features.images,
        paragraphs=features.paragraphs,
        meta_tags=features.meta_tags,
        extraction_method=extraction_method,
    )
