"""
Node scoring for the content heuristics.

Scores are scratch state of one scoring pass. They live in a ``ScoreMap`` keyed
by node identity, so the document's own attributes are never touched and
nothing leaks into the extracted markup.
"""

from __future__ import annotations

from typing import Iterator

import soupsieve as sv
import structlog
from bs4 import BeautifulSoup, Tag

from ..dom.constants import (
    BAD_TAGS,
    CHILD_CONTENT_TAGS,
    HNEWS_CONTENT_SELECTORS,
    NEGATIVE_SCORE_RE,
    PARAGRAPH_SCORE_TAGS,
    PHOTO_HINTS_RE,
    POSITIVE_SCORE_RE,
    READABILITY_ASSET_RE,
)

logger = structlog.get_logger(__name__)


class ScoreMap:
    """Integer scores keyed by node identity."""

    def __init__(self) -> None:
        self._scores: dict[int, int] = {}
        # Holding the node keeps its id() from being reused while the map lives
        self._nodes: dict[int, Tag] = {}

    def get(self, node: Tag) -> int:
        return self._scores.get(id(node), 0)

    def set(self, node: Tag, score: int) -> None:
        key = id(node)
        self._scores[key] = score
        self._nodes[key] = node

    def __contains__(self, node: object) -> bool:
        return id(node) in self._scores

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self) -> Iterator[Tag]:
        return iter(list(self._nodes.values()))


def _class_string(node: Tag) -> str:
    classes = node.get("class") or ""
    if isinstance(classes, list):
        return " ".join(classes)
    return classes


def _parent_element(node: Tag) -> Tag | None:
    parent = node.parent
    if parent is None or isinstance(parent, BeautifulSoup):
        return None
    return parent


def score_paragraph(node: Tag) -> int:
    """Score prose by comma count and length."""
    text = node.get_text().strip()
    if not text:
        return 0

    length = len(text)
    score = text.count(",")
    score += length // 50

    if length < 20:
        score -= 10

    if 50 <= length <= 200:
        score += 5

    return score


def score_node(node: Tag) -> int:
    """Base score from the tag name."""
    tag = (node.name or "").lower()

    if tag in PARAGRAPH_SCORE_TAGS:
        return score_paragraph(node)
    if tag == "div":
        return 5
    if tag in CHILD_CONTENT_TAGS:
        return 3
    if tag in BAD_TAGS:
        return -3
    if tag == "th":
        return -5
    return 0


def get_weight(node: Tag) -> int:
    """Weight a node by its id and class hints; the id wins when it decides."""
    classes = _class_string(node)
    node_id = node.get("id") or ""
    score = 0

    if node_id:
        if POSITIVE_SCORE_RE.search(node_id):
            score += 25
        if NEGATIVE_SCORE_RE.search(node_id):
            score -= 25

    if classes:
        if score == 0:
            if POSITIVE_SCORE_RE.search(classes):
                score += 25
            if NEGATIVE_SCORE_RE.search(classes):
                score -= 25

        if PHOTO_HINTS_RE.search(classes):
            score += 10

        if READABILITY_ASSET_RE.search(classes):
            score += 25

    return score


class NodeScorer:
    """
    Accumulates node scores for one document.

    The first touch of an unscored node computes its base score plus weight and
    pushes a quarter of it to the parent before any increment is applied, so
    scores cascade upward lazily as the pass walks the paragraphs.
    """

    def __init__(self, score_map: ScoreMap | None = None, weight_nodes: bool = True) -> None:
        self.scores = score_map if score_map is not None else ScoreMap()
        self.weight_nodes = weight_nodes

    def get_score(self, node: Tag) -> int:
        return self.scores.get(node)

    def get_or_init_score(self, node: Tag, weight_nodes: bool = True) -> int:
        score = self.scores.get(node)
        if score != 0:
            return score

        score = score_node(node)
        if weight_nodes:
            score += get_weight(node)

        self.add_to_parent(node, score)
        return score

    def add_score(self, node: Tag, amount: int) -> int:
        score = self.get_or_init_score(node) + amount
        self.scores.set(node, score)
        return score

    def add_to_parent(self, node: Tag, score: int) -> None:
        parent = _parent_element(node)
        if parent is not None:
            self.add_score(parent, int(score * 0.25))

    def score_content(self, soup: BeautifulSoup | Tag) -> ScoreMap:
        """Score the whole document and return the score map."""
        for parent_selector, child_selector in HNEWS_CONTENT_SELECTORS:
            for node in soup.select(f"{parent_selector} {child_selector}"):
                ancestor = self._closest(node, parent_selector)
                if ancestor is not None:
                    self.add_score(ancestor, 80)

        # The second pass only touches paragraphs the first one left unscored
        self._score_paragraphs(soup)
        self._score_paragraphs(soup)

        logger.debug("Scored document", scored_nodes=len(self.scores))
        return self.scores

    def _score_paragraphs(self, soup: BeautifulSoup | Tag) -> None:
        for node in soup.find_all(["p", "pre"]):
            if node in self.scores:
                continue

            self.scores.set(node, self.get_or_init_score(node, self.weight_nodes))

            raw_score = score_node(node)
            parent = _parent_element(node)
            if parent is None:
                continue
            self._add_score_to(parent, raw_score)

            grandparent = _parent_element(parent)
            if grandparent is not None:
                self._add_score_to(grandparent, int(raw_score / 2))

    def _add_score_to(self, node: Tag, score: int) -> None:
        if node.name == "span":
            node.name = "div"
        self.add_score(node, score)

    @staticmethod
    def _closest(node: Tag, selector: str) -> Tag | None:
        for parent in node.parents:
            if isinstance(parent, BeautifulSoup):
                return None
            if sv.match(selector, parent):
                return parent
        return None
