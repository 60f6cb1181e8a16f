"""
Unit tests for text helpers.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from articlequarry.dom.text import (
    ellipsize,
    excerpt_words,
    get_direction,
    link_density,
    normalize_spaces,
    strip_tags,
)


class TestNormalizeSpaces:
    def test_collapses_runs(self):
        assert normalize_spaces("  Hello    world  ") == "Hello world"

    def test_keeps_preformatted_whitespace(self):
        html = "<p>a    b</p><pre>x    y</pre>"
        assert normalize_spaces(html) == "<p>a b</p><pre>x    y</pre>"

    def test_empty(self):
        assert normalize_spaces("") == ""


class TestStripTags:
    def test_returns_text(self):
        assert strip_tags("Hello <b>bold</b> world") == "Hello bold world"

    def test_plain_text_unchanged(self):
        assert strip_tags("Just text") == "Just text"


class TestLinkDensity:
    def test_all_links(self):
        soup = BeautifulSoup("<div><a href='/'>menu</a></div>", "lxml")
        assert link_density(soup.div) == 1.0

    def test_no_text(self):
        soup = BeautifulSoup("<div></div>", "lxml")
        assert link_density(soup.div) == 0.0

    def test_partial(self):
        soup = BeautifulSoup("<div><a href='/'>abcd</a>efgh</div>", "lxml")
        assert link_density(soup.div) == 0.5


class TestExcerpts:
    def test_excerpt_words(self):
        assert excerpt_words("one two three four", words=2) == "one two"

    def test_ellipsize_short_text(self):
        assert ellipsize("short text", 20) == "short text"

    def test_ellipsize_cuts_at_word_boundary(self):
        result = ellipsize("alpha beta gamma delta", 13)
        assert result == "alpha beta..."
        assert len(result) <= 13 + 3


class TestGetDirection:
    """Test cases for text direction detection."""

    def test_empty(self):
        assert get_direction("") == ""

    def test_latin_text_is_ltr(self):
        assert get_direction("Hello world") == "ltr"

    def test_hebrew_text_is_rtl(self):
        assert get_direction("שלום עולם") == "rtl"

    def test_mixed_text_is_bidi(self):
        assert get_direction("Hello שלום") == "bidi"

    def test_marks_win(self):
        assert get_direction("\u200fabc") == "rtl"
