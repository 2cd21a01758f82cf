"""Ranked structural hints and first-match selection."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pagelens.dom import (
    AnyOf,
    ByAttributeSubstring,
    ByAttributeValue,
    ByClass,
    ById,
    ByRole,
    ByTag,
    Document,
    Pattern,
)

logger = logging.getLogger(__name__)

# Most specific first; the bare tags come last.
TITLE_PATTERNS: tuple[Pattern, ...] = (
    ByAttributeSubstring("class", "title", tag="h1"),
    ByAttributeSubstring("class", "headline", tag="h1"),
    ByAttributeSubstring("class", "article", tag="h1"),
    ByTag("h1"),
    ByAttributeSubstring("class", "title"),
    ByAttributeSubstring("class", "headline"),
    ByTag("title"),
)

BYLINE_PATTERNS: tuple[Pattern, ...] = (
    ByAttributeSubstring("class", "author"),
    ByAttributeSubstring("class", "byline"),
    ByAttributeValue("rel", "author"),
    ByClass("author"),
    ByClass("byline"),
)

SITE_NAME_PATTERNS: tuple[Pattern, ...] = (
    AnyOf((ByAttributeSubstring("class", "logo"), ByAttributeSubstring("class", "brand"))),
)

# Semantic containers first, then common class/id hints.
CONTENT_REGION_PATTERNS: tuple[Pattern, ...] = (
    ByTag("main"),
    ByTag("article"),
    ByRole("main"),
    ByClass("content"),
    ByClass("main"),
    ById("content"),
    ById("main"),
    ByClass("post"),
    ByClass("entry"),
    ByClass("article"),
    ByClass("story"),
)


def select_first_match(
    document: Document,
    patterns: Iterable[Pattern],
    min_text_length: int = 0,
) -> str | None:
    """Return the trimmed text of the first qualifying match, or None.

    Patterns are tried in order.  For each one only the first matching
    element is looked at; it qualifies when its trimmed text is longer than
    *min_text_length*.
    """
    for pattern in patterns:
        node = document.query_first(pattern)
        if node is None:
            continue
        text = document.text_content_of(node).strip()
        if text and len(text) > min_text_length:
            logger.debug("pattern %r matched (%d chars)", pattern, len(text))
            return text
    return None

