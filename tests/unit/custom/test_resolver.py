"""
Unit tests for resolving custom extractor rules against documents.
"""

from __future__ import annotations

from datetime import datetime, timezone

from articlequarry.custom.models import ContentRule, CustomExtractorDefinition, FieldRule
from articlequarry.custom.resolver import SelectorResolver

URL = "https://example.com/stories/1"

ARTICLE = """
<html>
<head><meta name="author" content="By Sam Writer"></head>
<body>
  <span class="tag">gardens</span><span class="tag">city</span><span class="tag">gardens</span>
  <time datetime="2021-01-05 12:00:00">January 5</time>
  <article>
    <h1>Story Head</h1>
    <p>The body of the story is long enough to read like prose, with a comma, and a full stop.</p>
    <div class="ad">Buy now</div>
  </article>
</body>
</html>
"""


class TestFieldResolution:
    """Test cases for plain field rules."""

    def test_example_definition(self, make_soup, custom_site_html, example_definition):
        resolved = SelectorResolver(make_soup(custom_site_html), URL).resolve(example_definition)
        assert resolved["title"] == "Example Story Headline"
        assert resolved["author"] == "Sam Writer"

        content = resolved["content"]
        first = content.index("First chunk")
        second = content.index("Second chunk")
        third = content.index("Third chunk")
        assert first < second < third
        assert "Unrelated sidebar" not in content
        assert content.count("\n") == 2

    def test_attribute_selector_and_cleaner(self, make_soup):
        rule = FieldRule.model_validate([["meta[name=author]", "value"]])
        resolver = SelectorResolver(make_soup(ARTICLE), URL)
        assert resolver.resolve_field("author", rule) == "Sam Writer"

    def test_default_cleaner_off(self, make_soup):
        rule = FieldRule.model_validate({"selectors": [["meta[name=author]", "value"]], "default_cleaner": False})
        assert SelectorResolver(make_soup(ARTICLE), URL).resolve_field("author", rule) == "By Sam Writer"

    def test_first_matching_selector_wins(self, make_soup):
        rule = FieldRule.model_validate([".missing", "h1", ".tag"])
        assert SelectorResolver(make_soup(ARTICLE), URL).resolve_raw(rule) == "Story Head"

    def test_allow_multiple_joins_distinct_values(self, make_soup):
        rule = FieldRule.model_validate({"selectors": [".tag"], "allow_multiple": True})
        assert SelectorResolver(make_soup(ARTICLE), URL).resolve_raw(rule) == "gardens, city"

    def test_multi_match_skips_members_without_matches(self, make_soup):
        resolver = SelectorResolver(make_soup(ARTICLE), URL)
        partial = FieldRule.model_validate({"selectors": [{"all": ["h1", ".missing"]}]})
        both = FieldRule.model_validate({"selectors": [{"all": ["h1", "time"]}]})
        nothing = FieldRule.model_validate({"selectors": [{"all": [".missing", ".absent"]}]})
        assert resolver.resolve_raw(partial) == "Story Head"
        # document order, not member order
        assert resolver.resolve_raw(both) == "January 5"
        assert resolver.resolve_raw(nothing) is None

    def test_date_with_timezone(self, make_soup):
        rule = FieldRule.model_validate(
            {"selectors": [{"selector": "time", "attribute": "datetime"}], "timezone": "America/New_York"}
        )
        result = SelectorResolver(make_soup(ARTICLE), URL).resolve_field("date_published", rule)
        assert result == datetime(2021, 1, 5, 17, 0, tzinfo=timezone.utc)

    def test_lead_image_is_absolutized(self, make_soup):
        soup = make_soup('<html><body><img class="hero" src="/img/hero.jpg"></body></html>')
        rule = FieldRule.model_validate([["img.hero", "src"]])
        assert SelectorResolver(soup, URL).resolve_field("lead_image_url", rule) == "https://example.com/img/hero.jpg"

    def test_unmatched_fields_are_omitted(self, make_soup):
        definition = CustomExtractorDefinition.model_validate({"domain": "example.com", "dek": [".missing"]})
        assert SelectorResolver(make_soup(ARTICLE), URL).resolve(definition) == {}


class TestContentResolution:
    """Test cases for content rules."""

    def test_clean_and_transforms(self, make_soup):
        rule = ContentRule.model_validate(
            {
                "selectors": ["article"],
                "clean": [".ad"],
                "transforms": {"h1": "h1_to_h2"},
                "default_cleaner": False,
            }
        )
        content = SelectorResolver(make_soup(ARTICLE), URL).resolve_content(rule)
        assert "<h2>Story Head</h2>" in content
        assert "Buy now" not in content
        assert "The body of the story" in content

    def test_source_document_is_untouched(self, make_soup):
        soup = make_soup(ARTICLE)
        rule = ContentRule.model_validate({"selectors": ["article"], "clean": [".ad"]})
        SelectorResolver(soup, URL).resolve_content(rule)
        assert soup.select_one(".ad") is not None
        assert soup.find("h1") is not None

    def test_attribute_selectors_are_skipped(self, make_soup):
        rule = ContentRule.model_validate({"selectors": [["time", "datetime"], "article p"]})
        content = SelectorResolver(make_soup(ARTICLE), URL).resolve_content(rule)
        assert content.startswith("The body of the story")
        assert "<p>" not in content

    def test_nested_matches_are_not_duplicated(self, make_soup):
        soup = make_soup("<html><body><div class='x'><div class='x'>Only once, with text.</div></div></body></html>")
        rule = ContentRule.model_validate({"selectors": [".x"], "default_cleaner": False})
        content = SelectorResolver(soup, URL).resolve_content(rule)
        assert content.count("Only once") == 1

    def test_no_match(self, make_soup):
        rule = ContentRule.model_validate({"selectors": [".missing"]})
        assert SelectorResolver(make_soup(ARTICLE), URL).resolve_content(rule) is None

    def test_multi_match_content_combines_members(self, make_soup):
        soup = make_soup(
            "<html><body>"
            "<div class='b'>Beta section, which comes first on the page.</div>"
            "<aside>Sidebar</aside>"
            "<div class='a'>Alpha section, which comes second on the page.</div>"
            "</body></html>"
        )
        rule = ContentRule.model_validate({"selectors": [{"all": [".a", ".missing", ".b"]}], "default_cleaner": False})
        content = SelectorResolver(soup, URL).resolve_content(rule)
        assert content == "Beta section, which comes first on the page.\nAlpha section, which comes second on the page."

    def test_content_is_inner_markup(self, make_soup):
        soup = make_soup("<html><body><section class='body'><p>One <b>bold</b> line.</p></section></body></html>")
        rule = ContentRule.model_validate({"selectors": [".body"], "default_cleaner": False})
        assert SelectorResolver(soup, URL).resolve_content(rule) == "<p>One <b>bold</b> line.</p>"
