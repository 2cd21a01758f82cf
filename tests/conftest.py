"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagelens.dom import SoupDocument

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ARTICLE_URL = "https://coastal.example.com/posts/tide-pools"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def article_html() -> str:
    return _read_fixture("article.html")


@pytest.fixture
def no_regions_html() -> str:
    return _read_fixture("no_regions.html")


@pytest.fixture
def article_doc(article_html: str) -> SoupDocument:
    return SoupDocument.from_html(article_html, url=ARTICLE_URL)


@pytest.fixture
def make_doc():
    """Build a :class:`SoupDocument` from an HTML snippet."""

    def _make(html: str, url: str = "") -> SoupDocument:
        return SoupDocument.from_html(html, url=url)

    return _make
