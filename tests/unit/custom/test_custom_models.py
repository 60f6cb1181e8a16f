"""
Unit tests for custom extractor definition models.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from articlequarry.custom.models import (
    AttributeSelector,
    ContentRule,
    CustomExtractorDefinition,
    FieldRule,
    MultiMatchSelector,
    TextSelector,
)


class TestFieldRuleShorthands:
    """Test cases for the short YAML selector forms."""

    def test_single_string(self):
        rule = FieldRule.model_validate("h1.headline")
        assert rule.selectors == [TextSelector(selector="h1.headline")]

    def test_list_of_strings(self):
        rule = FieldRule.model_validate(["h1.headline", "h1"])
        assert [s.selector for s in rule.selectors] == ["h1.headline", "h1"]

    def test_attribute_pair(self):
        rule = FieldRule.model_validate([["meta[name=author]", "value"]])
        assert rule.selectors == [AttributeSelector(selector="meta[name=author]", attribute="value")]

    def test_multi_match(self):
        rule = FieldRule.model_validate({"selectors": [{"all": [".intro", ".body"]}]})
        assert rule.selectors == [MultiMatchSelector(selectors=[".intro", ".body"])]

    def test_explicit_form(self):
        rule = FieldRule.model_validate(
            {"selectors": [{"selector": "time", "attribute": "datetime"}], "timezone": "Europe/Berlin"}
        )
        assert isinstance(rule.selectors[0], AttributeSelector)
        assert rule.timezone == "Europe/Berlin"
        assert rule.allow_multiple is False
        assert rule.default_cleaner is True


class TestValidation:
    @pytest.mark.parametrize("selector", ["", "   ", "div["])
    def test_invalid_selectors(self, selector):
        with pytest.raises(ValidationError):
            FieldRule.model_validate([selector])

    def test_bad_attribute_pair(self):
        with pytest.raises(ValidationError):
            FieldRule.model_validate([["a", "b", "c"]])

    def test_empty_selector_list(self):
        with pytest.raises(ValidationError):
            FieldRule.model_validate({"selectors": []})

    def test_unknown_rule_key(self):
        with pytest.raises(ValidationError):
            FieldRule.model_validate({"selectors": ["h1"], "bogus": True})

    def test_unknown_transform(self):
        with pytest.raises(ValidationError, match="unknown transform"):
            ContentRule.model_validate({"selectors": ["article"], "transforms": {"h1": "explode"}})

    def test_rename_transform_is_valid(self):
        rule = ContentRule.model_validate({"selectors": ["article"], "transforms": {"div.lede": "rename:p"}})
        assert rule.transforms == {"div.lede": "rename:p"}

    def test_unknown_definition_field(self):
        with pytest.raises(ValidationError):
            CustomExtractorDefinition.model_validate({"domain": "example.com", "subtitle": ["h2"]})


class TestCustomExtractorDefinition:
    def test_domains_are_normalized(self):
        definition = CustomExtractorDefinition.model_validate(
            {"domain": " Example.COM ", "supported_domains": ["Blog.Example.com", " "]}
        )
        assert definition.domain == "example.com"
        assert definition.all_domains == ["example.com", "blog.example.com"]

    def test_field_rules_skip_content_and_missing(self, example_definition):
        assert [name for name, _ in example_definition.field_rules()] == ["title", "author"]
        assert example_definition.content is not None
        assert example_definition.content.selectors == [TextSelector(selector=".chunk")]

    def test_domain_required(self):
        with pytest.raises(ValidationError):
            CustomExtractorDefinition.model_validate({"title": ["h1"]})
