"""pagelens - pull the readable article and page structure out of any HTML page.

Quick single-URL usage::

    from pagelens import fetch

    record = fetch("https://example.com/blog/some-post")
    print(record.title)
    print(record.content)

Pre-fetched HTML, or any object implementing :class:`pagelens.dom.Document`::

    from pagelens import extract

    record = extract(html, url="https://example.com/blog/some-post")
    print(record.byline, record.excerpt)

Markdown export and questions about the page::

    from pagelens import Session

    session = Session(record)
    print(session.page_markdown())
"""

from pagelens.dom import Document, SoupDocument
from pagelens.items import (
    ExtractionResult,
    HeadingInfo,
    ImageInfo,
    LinkInfo,
    MetaTagInfo,
    PageFeatures,
    PageRecord,
)
from pagelens.query import FetchError, extract, fetch, fetch_html, parse, parse_from_browser
from pagelens.session import AnswerBackend, ChatMessage, Session

__version__ = "0.1.0"
__all__ = [
    "AnswerBackend",
    "ChatMessage",
    "Document",
    "ExtractionResult",
    "FetchError",
    "HeadingInfo",
    "ImageInfo",
    "LinkInfo",
    "MetaTagInfo",
    "PageFeatures",
    "PageRecord",
    "Session",
    "SoupDocument",
    "extract",
    "fetch",
    "fetch_html",
    "parse",
    "parse_from_browser",
]
