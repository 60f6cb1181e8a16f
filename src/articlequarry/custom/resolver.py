"""
Applies custom extractor rules to a document.
"""

from __future__ import annotations

from typing import Any

import structlog
from bs4 import BeautifulSoup, NavigableString, Tag

from ..cleaners.author import clean_author
from ..cleaners.content import extract_clean_node
from ..cleaners.date import clean_date_published
from ..cleaners.dek import clean_dek
from ..cleaners.lead_image import clean_lead_image_url
from ..cleaners.title import clean_title
from ..dom.prepare import parse_document
from ..dom.text import collapse_whitespace, normalize_spaces
from ..scoring.scorer import NodeScorer
from .models import AttributeSelector, ContentRule, CustomExtractorDefinition, FieldRule, MultiMatchSelector, TextSelector
from .transforms import apply_clean, apply_transforms

logger = structlog.get_logger(__name__)

MULTIPLE_VALUE_SEPARATOR = ", "


def _outermost(nodes: list[Tag]) -> list[Tag]:
    """Drop nodes nested inside another node of the list, keeping document order."""
    chosen = {id(node) for node in nodes}
    return [node for node in nodes if not any(id(parent) in chosen for parent in node.parents)]


class SelectorResolver:
    """
    Resolves the fields of a ``CustomExtractorDefinition`` against one document.

    Field selectors only read ``soup``. Content is resolved on a private copy
    because clean selectors and transforms rewrite the tree.
    """

    def __init__(self, soup: BeautifulSoup, url: str = "") -> None:
        self.soup = soup
        self.url = url

    def resolve(self, definition: CustomExtractorDefinition) -> dict[str, Any]:
        """Resolve every configured field; fields without a match are left out."""
        values: dict[str, Any] = {}
        for name, rule in definition.field_rules():
            value = self.resolve_field(name, rule)
            if value:
                values[name] = value

        if definition.content is not None:
            content = self.resolve_content(definition.content)
            if content:
                values["content"] = content

        logger.debug("Resolved custom fields", domain=definition.domain, fields=sorted(values))
        return values

    # --- Plain fields ---

    def _select_values(self, selector: TextSelector | AttributeSelector | MultiMatchSelector) -> list[str]:
        if isinstance(selector, AttributeSelector):
            nodes = self.soup.select(selector.selector)
            return [str(node.get(selector.attribute, "")).strip() for node in nodes if node.get(selector.attribute)]

        if isinstance(selector, MultiMatchSelector):
            nodes = self.soup.select(", ".join(selector.selectors))
        else:
            nodes = self.soup.select(selector.selector)

        texts = (collapse_whitespace(node.get_text()) for node in nodes)
        return [text for text in texts if text]

    def resolve_raw(self, rule: FieldRule) -> str | None:
        """First non-empty match of the rule, or every match joined when ``allow_multiple`` is set."""
        for selector in rule.selectors:
            values = self._select_values(selector)
            if not values:
                continue
            if rule.allow_multiple:
                return MULTIPLE_VALUE_SEPARATOR.join(dict.fromkeys(values))
            return values[0]
        return None

    def resolve_field(self, name: str, rule: FieldRule) -> Any:
        raw = self.resolve_raw(rule)
        if raw is None:
            return None

        if name == "date_published":
            return clean_date_published(raw, timezone=rule.timezone, date_format=rule.format)

        if not rule.default_cleaner:
            return raw

        if name == "title":
            return clean_title(raw, self.url, self.soup) or None
        if name == "author":
            return clean_author(raw) or None
        if name == "lead_image_url":
            return clean_lead_image_url(raw, self.url)
        if name == "dek":
            return clean_dek(raw)
        return normalize_spaces(raw) or None

    # --- Content ---

    def _content_nodes(self, soup: BeautifulSoup, rule: ContentRule) -> list[Tag]:
        for selector in rule.selectors:
            if isinstance(selector, AttributeSelector):
                continue

            if isinstance(selector, MultiMatchSelector):
                nodes = soup.select(", ".join(selector.selectors))
            else:
                nodes = soup.select(selector.selector)

            nodes = _outermost(nodes)
            if any(node.get_text().strip() or node.find("img") is not None for node in nodes):
                return nodes
        return []

    def resolve_content(self, rule: ContentRule) -> str | None:
        """
        Inner markup of every element matched by the winning selector, newline-joined
        in document order after clean selectors and transforms ran.
        """
        soup = parse_document(str(self.soup))
        nodes = self._content_nodes(soup, rule)
        if not nodes:
            return None

        wrapper = soup.new_tag("div")
        for node in nodes:
            wrapper.append(node.extract())

        apply_clean(wrapper, rule.clean)
        apply_transforms(wrapper, rule.transforms)

        parts = []
        scorer = NodeScorer()
        for child in list(wrapper.contents):
            if isinstance(child, NavigableString):
                if child.strip():
                    parts.append(normalize_spaces(str(child)))
                continue
            if rule.default_cleaner:
                extract_clean_node(child, soup, scorer, url=self.url, clean_conditionally=True)
            parts.append(normalize_spaces(child.decode_contents()))

        content = "\n".join(part for part in parts if part)
        return content or None
