"""Main content location with a three-step fallback.

Step 1: content regions  (semantic containers and class/id hints, longest wins)
Step 2: paragraph scan   (single longest ``<p>``, stricter threshold)
Step 3: body             (whole body text, normalized)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, NamedTuple

from pagelens import settings
from pagelens.dom import ByTag, Document, Pattern
from pagelens.extractors.selectors import CONTENT_REGION_PATTERNS
from pagelens.extractors.text import normalize

logger = logging.getLogger(__name__)

METHOD_REGION = "region"
METHOD_PARAGRAPH = "paragraph"
METHOD_BODY = "body"


class ContentLocation(NamedTuple):
    text: str
    method: str


def _longest(document: Document, nodes: Iterable[Any], threshold: int) -> tuple[Any, str]:
    """Return the node with the longest trimmed text above *threshold*.

    Strict ``>`` comparison: among equal lengths the first node seen wins.
    Returns ``(None, "")`` when nothing clears the threshold.
    """
    best: Any = None
    best_text = ""
    max_length = 0
    for node in nodes:
        text = document.text_content_of(node).strip()
        if len(text) > max_length and len(text) > threshold:
            max_length = len(text)
            best = node
            best_text = text
    return best, best_text


# ---------------------------------------------------------------------------
# Step 1: content regions
# ---------------------------------------------------------------------------

def _region_candidates(document: Document, patterns: Iterable[Pattern]) -> Iterable[Any]:
    for pattern in patterns:
        yield from document.query_all(pattern)


def _try_regions(document: Document) -> str | None:
    node, _ = _longest(
        document,
        _region_candidates(document, CONTENT_REGION_PATTERNS),
        settings.REGION_MIN_CHARS,
    )
    if node is None:
        return None
    return normalize(document.text_content_of(node))


# ---------------------------------------------------------------------------
# Step 2: longest paragraph
# ---------------------------------------------------------------------------

def _try_paragraphs(document: Document) -> str | None:
    # Returned trimmed but not normalized; only region text gets cleaned.
    _, text = _longest(document, document.query_all(ByTag("p")), settings.PARAGRAPH_MIN_CHARS)
    return text or None


# ---------------------------------------------------------------------------
# Step 3: body
# ---------------------------------------------------------------------------

def body_text(document: Document) -> str:
    """Raw text content of the document body, ``""`` without a body."""
    body = document.body
    if body is None:
        return ""
    return document.text_content_of(body)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def find_main_content(document: Document) -> ContentLocation:
    """Locate the main content and report which step produced it."""
    text = _try_regions(document)
    if text is not None:
        logger.debug("main content from region (%d chars)", len(text))
        return ContentLocation(text=text, method=METHOD_REGION)

    text = _try_paragraphs(document)
    if text is not None:
        logger.debug("main content from longest paragraph (%d chars)", len(text))
        return ContentLocation(text=text, method=METHOD_PARAGRAPH)

    text = normalize(body_text(document))
    logger.debug("main content from body fallback (%d chars)", len(text))
    return ContentLocation(text=text, method=METHOD_BODY)


def locate_main_content(document: Document) -> str:
    """Return the text judged to be the document's main content."""
    return find_main_content(document).text
