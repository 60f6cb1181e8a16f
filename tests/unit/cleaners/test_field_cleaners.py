"""
Unit tests for the author, dek and lead image cleaners.
"""

from __future__ import annotations

import pytest

from articlequarry.cleaners.author import clean_author
from articlequarry.cleaners.dek import clean_dek
from articlequarry.cleaners.lead_image import clean_lead_image_url


class TestCleanAuthor:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("By Jane Rivera", "Jane Rivera"),
            ("by: Jane Rivera", "Jane Rivera"),
            ("Posted by Jane Rivera", "Jane Rivera"),
            ("Written by   Jane   Rivera", "Jane Rivera"),
            ("Byron Katie", "Byron Katie"),
            ("  Jane Rivera  ", "Jane Rivera"),
        ],
    )
    def test_prefixes(self, raw, expected):
        assert clean_author(raw) == expected


class TestCleanDek:
    def test_valid_dek(self):
        assert clean_dek("How vacant lots became   the greenest blocks.") == "How vacant lots became the greenest blocks."

    def test_too_short_or_too_long(self):
        assert clean_dek("Hi") is None
        assert clean_dek("x" * 1001) is None

    def test_rejects_urls(self):
        assert clean_dek("Read the full story at https://example.com/story") is None

    def test_rejects_excerpt_repeat(self):
        excerpt = "one two three four five six seven eight nine ten eleven twelve"
        dek = "one two three four five six seven eight nine ten and more"
        assert clean_dek(dek, excerpt) is None
        assert clean_dek(dek, "something different entirely") == dek

    def test_strips_markup(self):
        assert clean_dek("<em>A short</em> summary line") == "A short summary line"


class TestCleanLeadImageUrl:
    def test_absolute_url(self):
        url = "https://cdn.example.com/a.jpg"
        assert clean_lead_image_url(url) == url

    def test_relative_url_is_resolved(self):
        result = clean_lead_image_url("/images/a.jpg", "https://example.com/articles/1")
        assert result == "https://example.com/images/a.jpg"

    @pytest.mark.parametrize("url", ["", "   ", "data:image/png;base64,AAAA", "javascript:alert(1)", "/relative.jpg"])
    def test_rejected(self, url):
        assert clean_lead_image_url(url) is None

    def test_host_must_look_real(self):
        assert clean_lead_image_url("http://intranet/a.jpg") is None
        assert clean_lead_image_url("http://localhost:8000/a.jpg") == "http://localhost:8000/a.jpg"
