"""Tests for the pydantic record models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pagelens.items import (
    ExtractionResult,
    HeadingInfo,
    MetaTagInfo,
    PageFeatures,
    PageRecord,
    build_page_record,
)


class TestModels:
    def test_heading_level_bounds(self):
        assert HeadingInfo(level=6, text="x").level == 6
        with pytest.raises(ValidationError):
            HeadingInfo(level=7, text="x")
        with pytest.raises(ValidationError):
            HeadingInfo(level=0, text="x")

    def test_meta_attribute_validated(self):
        assert MetaTagInfo(key="og:type", content="article", attribute="property").attribute == "property"
        with pytest.raises(ValidationError):
            MetaTagInfo(key="refresh", content="5", attribute="http-equiv")

    def test_extraction_result_length_derived(self):
        result = ExtractionResult(title="T", content="abcdef", length=99)
        assert result.length == 6
        assert result.text_content == "abcdef"

    def test_page_record_length_follows_content(self):
        assert PageRecord(title="T", content="abc", length=40).length == 3

    def test_records_are_frozen(self):
        record = PageRecord(title="T")
        with pytest.raises(ValidationError):
            record.title = "changed"

    def test_build_page_record_body_text(self):
        article = ExtractionResult(title="T", content="")
        record = build_page_record(
            article,
            PageFeatures(),
            url=" https://example.com ",
            timestamp="2024-05-01T12:00:00+00:00",
            text="raw body",
            extraction_method="body",
        )
        assert record.url == "https://example.com"
        assert record.content == "raw body"
        assert record.text_length == 8
        assert record.length == 8
        assert record.readability_score == 0
        assert record.stats == {"links": 0, "headings": 0, "images": 0, "paragraphs": 0}
