"""Page-wide structural features: meta tags, images, links, headings, paragraphs.

Every collector walks the whole document in order and applies its own
validity filter.  None of them depends on the article extraction result.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin

from pagelens import settings
from pagelens.dom import AnyOf, ByTag, Document
from pagelens.items import HeadingInfo, ImageInfo, LinkInfo, MetaTagInfo, PageFeatures

logger = logging.getLogger(__name__)

_HEADING_PATTERN = AnyOf(tuple(ByTag(f"h{i}") for i in range(1, 7)))
_LINK_PATTERN = AnyOf((ByTag("a"), ByTag("area")))
_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def _to_int(raw: str | None) -> int:
    """Parse the leading integer of an HTML dimension ("640", "640px")."""
    if not raw:
        return 0
    m = _LEADING_INT_RE.match(raw)
    return int(m.group(1)) if m else 0


def _resolve(base_url: str, ref: str) -> str:
    return urljoin(base_url, ref) if base_url else ref


def is_navigational(href: str) -> bool:
    """False for ``javascript:``, ``mailto:`` and ``tel:`` hrefs."""
    return not href.strip().lower().startswith(settings.NON_NAVIGATIONAL_SCHEMES)


# ---------------------------------------------------------------------------
# Collectors
# ---------------------------------------------------------------------------

def collect_meta_tags(document: Document) -> list[MetaTagInfo]:
    """One record per name/content pair and one per property/content pair."""
    tags: list[MetaTagInfo] = []
    for node in document.query_all(ByTag("meta")):
        attrs = document.attributes_of(node)
        content = attrs.get("content", "")
        if not content:
            continue
        if attrs.get("name"):
            tags.append(MetaTagInfo(key=attrs["name"], content=content, attribute="name"))
        if attrs.get("property"):
            tags.append(MetaTagInfo(key=attrs["property"], content=content, attribute="property"))
    return tags


def collect_images(document: Document, base_url: str = "") -> list[ImageInfo]:
    images: list[ImageInfo] = []
    for node in document.query_all(ByTag("img")):
        attrs = document.attributes_of(node)
        src = attrs.get("src", "").strip()
        if not src:
            continue
        # Intrinsic size when the host recorded it, else the declared size
        width = _to_int(attrs.get("data-natural-width")) or _to_int(attrs.get("width"))
        height = _to_int(attrs.get("data-natural-height")) or _to_int(attrs.get("height"))
        images.append(
            ImageInfo(
                src=_resolve(base_url, src),
                alt=attrs.get("alt", ""),
                title=attrs.get("title", ""),
                width=width,
                height=height,
            ),
        )
    return images


def collect_links(document: Document, base_url: str = "") -> list[LinkInfo]:
    links: list[LinkInfo] = []
    for node in document.query_all(_LINK_PATTERN):
        attrs = document.attributes_of(node)
        if "href" not in attrs:
            continue
        href = _resolve(base_url, attrs["href"].strip())
        text = document.text_content_of(node).strip()
        if not text or not href or not is_navigational(href):
            continue
        links.append(
            LinkInfo(
                text=text,
                href=href,
                title=attrs.get("title", ""),
                rel=attrs.get("rel", ""),
            ),
        )
    return links


def collect_headings(document: Document) -> list[HeadingInfo]:
    headings: list[HeadingInfo] = []
    for node in document.query_all(_HEADING_PATTERN):
        text = document.text_content_of(node).strip()
        if not text:
            continue
        level = int(document.tag_name_of(node)[1])
        anchor_id = document.attributes_of(node).get("id", "")
        headings.append(HeadingInfo(level=level, text=text, anchor_id=anchor_id))
    return headings


def collect_paragraphs(document: Document) -> list[str]:
    paragraphs: list[str] = []
    for node in document.query_all(ByTag("p")):
        text = document.text_content_of(node).strip()
        if len(text) > settings.FEATURE_PARAGRAPH_MIN_CHARS:
            paragraphs.append(text)
    return paragraphs


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def collect_features(document: Document, base_url: str = "") -> PageFeatures:
    """Run every collector over *document*."""
    features = PageFeatures(
        meta_tags=collect_meta_tags(document),
        images=collect_images(document, base_url=base_url),
        links=collect_links(document, base_url=base_url),
        headings=collect_headings(document),
        paragraphs=collect_paragraphs(document),
    )
    logger.debug(
        "features: %d meta, %d images, %d links, %d headings, %d paragraphs",
        len(features.meta_tags), len(features.images), len(features.links),
        len(features.headings), len(features.paragraphs),
    )
    return features
