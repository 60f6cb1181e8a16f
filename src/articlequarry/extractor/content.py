"""
Heuristic article body extraction.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

import structlog
from bs4 import BeautifulSoup, Tag

from ..cleaners.content import extract_clean_node
from ..dom.cleaning import convert_to_paragraphs, strip_unlikely_candidates
from ..dom.prepare import parse_document
from ..dom.text import normalize_spaces
from ..scoring.candidates import find_top_candidate
from ..scoring.scorer import NodeScorer

logger = structlog.get_logger(__name__)


@dataclass(slots=True, frozen=True)
class ContentOptions:
    """Switches of the content heuristics, relaxed one by one on retry."""

    strip_unlikely_candidates: bool = True
    weight_nodes: bool = True
    clean_conditionally: bool = True


class GenericContentExtractor:
    """
    Finds the main content region of a document by scoring its nodes.

    Each attempt works on a fresh parse of the HTML, because scoring and
    cleaning rewrite the tree. When an attempt yields too little text the next
    one runs with one more heuristic switched off.
    """

    name = "generic_content"
    min_content_length = 100

    def __init__(self, options: ContentOptions | None = None) -> None:
        self.options = options or ContentOptions()
        self.logger = logger.bind(component="GenericContentExtractor")

    def extract(self, html: str, title: str = "", url: str = "") -> str:
        """Return the cleaned inner HTML of the best content node, or an empty string."""
        options = self.options
        node = self.get_content_node(parse_document(html), title, url, options)
        if self._is_sufficient(node):
            return self._render(node)

        for option in fields(ContentOptions):
            if not getattr(options, option.name):
                continue
            options = replace(options, **{option.name: False})
            self.logger.debug("Retrying content extraction", disabled=option.name, url=url)

            node = self.get_content_node(parse_document(html), title, url, options)
            if self._is_sufficient(node):
                return self._render(node)

        return self._render(node)

    def get_content_node(
        self,
        soup: BeautifulSoup,
        title: str,
        url: str,
        options: ContentOptions,
    ) -> Tag | None:
        """Score ``soup``, pick the top candidate and clean it."""
        if options.strip_unlikely_candidates:
            strip_unlikely_candidates(soup)
        convert_to_paragraphs(soup)

        scorer = NodeScorer(weight_nodes=options.weight_nodes)
        scores = scorer.score_content(soup)

        candidate = find_top_candidate(soup, scores)
        article = candidate.as_element(soup)
        if article is None:
            return None

        return extract_clean_node(
            article,
            soup,
            scorer,
            url=url,
            title=title,
            clean_conditionally=options.clean_conditionally,
        )

    def _is_sufficient(self, node: Tag | None) -> bool:
        return node is not None and len(node.get_text().strip()) >= self.min_content_length

    @staticmethod
    def _render(node: Tag | None) -> str:
        if node is None:
            return ""
        return normalize_spaces(node.decode_contents())
