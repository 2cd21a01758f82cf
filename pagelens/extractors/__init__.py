"""Extraction sub-package: read-only heuristics over a document tree."""

from .features import collect_features
from .main_content import find_main_content, locate_main_content
from .markdown import render_conversation_markdown, render_page_markdown
from .metadata import extract_byline, extract_excerpt, extract_site_name, extract_title, read_article
from .selectors import select_first_match
from .text import normalize

__all__ = [
    "collect_features",
    "extract_byline",
    "extract_excerpt",
    "extract_site_name",
    "extract_title",
    "find_main_content",
    "locate_main_content",
    "normalize",
    "read_article",
    "render_conversation_markdown",
    "render_page_markdown",
    "select_first_match",
]
