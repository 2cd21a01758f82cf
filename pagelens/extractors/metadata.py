"""Article metadata: title, excerpt, site name and byline.

Each extractor is an independent read-only pass over the document and
returns a string (possibly empty).  Priority chains (highest → lowest):

    title:     ranked h1/class hints → declared <title> → "Untitled"
    excerpt:   <meta name="description"> → first <p> (truncated)
    site name: <meta property="og:site_name"> → logo/brand element
    byline:    author/byline class hints → rel="author"
"""

from __future__ import annotations

import logging

from pagelens import settings
from pagelens.dom import ByAttributeValue, ByTag, Document
from pagelens.extractors.main_content import find_main_content
from pagelens.extractors.selectors import (
    BYLINE_PATTERNS,
    SITE_NAME_PATTERNS,
    TITLE_PATTERNS,
    select_first_match,
)
from pagelens.items import ExtractionResult

logger = logging.getLogger(__name__)


def _meta_content(document: Document, attr: str, value: str) -> str | None:
    """Trimmed ``content`` of the first ``<meta attr="value">``.

    None when there is no such tag or its ``content`` is missing or empty.
    Whitespace-only content still counts as present and comes back as ``""``.
    """
    node = document.query_first(ByAttributeValue(attr, value, tag="meta"))
    if node is None:
        return None
    content = document.attributes_of(node).get("content", "")
    if not content:
        return None
    return content.strip()


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------

def extract_title(document: Document) -> str:
    title = select_first_match(document, TITLE_PATTERNS)
    if title:
        return title
    return document.title or settings.UNTITLED


# ---------------------------------------------------------------------------
# Excerpt
# ---------------------------------------------------------------------------

def extract_excerpt(document: Document) -> str:
    """Meta description, else the opening of the first paragraph."""
    description = _meta_content(document, "name", "description")
    if description is not None:
        return description

    first_p = document.query_first(ByTag("p"))
    if first_p is not None:
        text = document.text_content_of(first_p).strip()
        if len(text) > settings.EXCERPT_MIN_CHARS:
            return text[: settings.EXCERPT_MAX_CHARS] + settings.EXCERPT_ELLIPSIS
    return ""


# ---------------------------------------------------------------------------
# Site name
# ---------------------------------------------------------------------------

def extract_site_name(document: Document) -> str:
    site_name = _meta_content(document, "property", "og:site_name")
    if site_name is not None:
        return site_name
    return select_first_match(document, SITE_NAME_PATTERNS) or ""


# ---------------------------------------------------------------------------
# Byline
# ---------------------------------------------------------------------------

def extract_byline(document: Document) -> str:
    return select_first_match(document, BYLINE_PATTERNS) or ""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def read_article(document: Document) -> tuple[ExtractionResult, str]:
    """Run the locator and every metadata extractor over *document*.

    Returns ``(result, method)`` where *method* names the locator step that
    produced the content.  Exceptions propagate; the orchestrator in
    :mod:`pagelens.query` is the only place they are caught.
    """
    location = find_main_content(document)
    result = ExtractionResult(
        title=extract_title(document),
        content=location.text,
        excerpt=extract_excerpt(document),
        site_name=extract_site_name(document),
        byline=extract_byline(document),
    )
    logger.debug(
        "article: title=%r method=%s length=%d excerpt=%d byline=%r",
        result.title, location.method, result.length, len(result.excerpt), result.byline,
    )
    return result, location.method
