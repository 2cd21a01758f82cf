"""Tests for pagelens.dom - structural patterns and the soup-backed document."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from pagelens.dom import (
    AnyOf,
    ByAttributeSubstring,
    ByAttributeValue,
    ByClass,
    ById,
    ByRole,
    ByTag,
    Document,
    SoupDocument,
    matches,
)


def _tag(html: str):
    soup = BeautifulSoup(html, "lxml")
    return soup.body.find(True)


# ---------------------------------------------------------------------------
# matches()
# ---------------------------------------------------------------------------

class TestMatches:
    def test_by_tag(self):
        assert matches(ByTag("h1"), _tag("<h1>x</h1>"))
        assert not matches(ByTag("h2"), _tag("<h1>x</h1>"))

    def test_by_tag_is_case_insensitive_on_pattern(self):
        assert matches(ByTag("H1"), _tag("<h1>x</h1>"))

    def test_attribute_substring_on_class_list(self):
        tag = _tag('<div class="post entry-title big">x</div>')
        assert matches(ByAttributeSubstring("class", "title"), tag)
        assert matches(ByAttributeSubstring("class", "y-ti"), tag)

    def test_attribute_substring_is_case_sensitive(self):
        tag = _tag('<div class="Title">x</div>')
        assert not matches(ByAttributeSubstring("class", "title"), tag)

    def test_attribute_substring_with_tag(self):
        pattern = ByAttributeSubstring("class", "title", tag="h1")
        assert matches(pattern, _tag('<h1 class="title">x</h1>'))
        assert not matches(pattern, _tag('<h2 class="title">x</h2>'))

    def test_attribute_substring_missing_attribute(self):
        assert not matches(ByAttributeSubstring("class", ""), _tag("<div>x</div>"))

    def test_attribute_value_exact(self):
        assert matches(ByAttributeValue("rel", "author"), _tag('<a rel="author">x</a>'))
        assert not matches(ByAttributeValue("rel", "author"), _tag('<a rel="author me">x</a>'))

    def test_by_class_token(self):
        tag = _tag('<div class="content wide">x</div>')
        assert matches(ByClass("content"), tag)
        assert not matches(ByClass("cont"), tag)
        assert not matches(ByClass("content"), _tag('<div class="main-content">x</div>'))

    def test_by_role_and_id(self):
        assert matches(ByRole("main"), _tag('<div role="main">x</div>'))
        assert matches(ById("content"), _tag('<div id="content">x</div>'))
        assert not matches(ById("content"), _tag('<div id="content-wrap">x</div>'))

    def test_any_of(self):
        pattern = AnyOf((ByClass("logo"), ByTag("span")))
        assert matches(pattern, _tag('<div class="logo">x</div>'))
        assert matches(pattern, _tag("<span>x</span>"))
        assert not matches(pattern, _tag("<p>x</p>"))

    def test_unknown_pattern_rejected(self):
        with pytest.raises(TypeError):
            matches("h1", _tag("<h1>x</h1>"))  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# SoupDocument
# ---------------------------------------------------------------------------

class TestSoupDocument:
    def test_satisfies_protocol(self, make_doc):
        assert isinstance(make_doc("<p>x</p>"), Document)

    def test_title_collapses_whitespace(self, make_doc):
        doc = make_doc("<html><head><title>  A \n Title </title></head><body></body></html>")
        assert doc.title == "A Title"

    def test_missing_title_is_empty(self, make_doc):
        assert make_doc("<p>x</p>").title == ""

    def test_body_absent_for_empty_input(self, make_doc):
        assert make_doc("").body is None

    def test_query_all_document_order(self, make_doc):
        doc = make_doc('<div class="logo">A</div><span class="brand">B</span><div class="logo">C</div>')
        pattern = AnyOf((ByAttributeSubstring("class", "brand"), ByAttributeSubstring("class", "logo")))
        assert [doc.text_content_of(n) for n in doc.query_all(pattern)] == ["A", "B", "C"]

    def test_query_first_none_when_no_match(self, make_doc):
        assert make_doc("<p>x</p>").query_first(ByTag("article")) is None

    def test_text_content_keeps_script_and_style_text(self, make_doc):
        doc = make_doc(
            "<div id='x'>Hello <script>var a = 1;</script><style>p{}</style>world</div>",
        )
        node = doc.query_first(ById("x"))
        assert doc.text_content_of(node) == "Hello var a = 1;p{}world"

    def test_text_content_skips_comments(self, make_doc):
        doc = make_doc("<div id='x'>Hello <!-- hidden -->world</div>")
        assert doc.text_content_of(doc.query_first(ById("x"))) == "Hello world"

    def test_body_fallback_includes_inline_script(self, make_doc):
        from pagelens.extractors.main_content import body_text

        doc = make_doc("<body><p>Visible</p><script>track()</script></body>")
        assert body_text(doc) == "Visibletrack()"

    def test_attributes_join_multi_valued(self, make_doc):
        doc = make_doc('<a class="one two" rel="nofollow noopener" href="/x">x</a>')
        attrs = doc.attributes_of(doc.query_first(ByTag("a")))
        assert attrs["class"] == "one two"
        assert attrs["rel"] == "nofollow noopener"
        assert attrs["href"] == "/x"

    def test_queries_do_not_mutate_tree(self, article_doc):
        before = str(article_doc.soup)
        article_doc.query_all(ByTag("p"))
        article_doc.query_first(ByClass("content"))
        assert str(article_doc.soup) == before
