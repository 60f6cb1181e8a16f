"""
Selection of the top-scoring content container and merging of its siblings.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog
from bs4 import BeautifulSoup, Tag

from ..dom.constants import NON_TOP_CANDIDATE_TAGS
from ..dom.text import collapse_whitespace, has_sentence_end, link_density
from .scorer import ScoreMap

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class Candidate:
    """
    The element chosen as the content region plus its merged siblings.

    ``members`` lists every element contributing to the region in document
    order. A candidate is a view over the document, not a copy of it.
    """

    node: Tag | None
    score: int = 0
    members: list[Tag] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.node is None

    @property
    def is_merged(self) -> bool:
        return len(self.members) > 1

    def as_element(self, soup: BeautifulSoup) -> Tag | None:
        """
        The region as a single element.

        A lone candidate is returned as is; merged members are moved into a new
        ``<div>`` in document order.
        """
        if not self.is_merged:
            return self.node

        wrapper = soup.new_tag("div")
        for member in self.members:
            wrapper.append(member.extract())
        return wrapper


def _class_attr(node: Tag) -> str:
    classes = node.get("class") or ""
    if isinstance(classes, list):
        return " ".join(classes)
    return classes


def merge_siblings(candidate: Candidate, scores: ScoreMap) -> Candidate:
    """Collect the siblings of ``candidate`` that belong to the same content region."""
    node = candidate.node
    if node is None:
        return candidate

    parent = node.parent
    if parent is None or isinstance(parent, BeautifulSoup):
        candidate.members = [node]
        return candidate

    top_score = candidate.score
    threshold = max(10, top_score * 0.25)
    candidate_class = _class_attr(node)
    members: list[Tag] = []

    for sibling in parent.find_all(True, recursive=False):
        tag = (sibling.name or "").lower()
        if tag in NON_TOP_CANDIDATE_TAGS:
            continue

        if sibling is node:
            members.append(sibling)
            continue

        sibling_score = scores.get(sibling)
        if sibling_score <= 0:
            continue

        density = link_density(sibling)
        bonus = 0
        if density < 0.05:
            bonus += 20
        if density >= 0.5:
            bonus -= 20

        sibling_class = _class_attr(sibling)
        if sibling_class and sibling_class == candidate_class:
            bonus += int(top_score * 0.2)

        if sibling_score + bonus >= threshold:
            members.append(sibling)
            continue

        if tag == "p":
            text = sibling.get_text()
            length = len(collapse_whitespace(text))
            if length > 80 and density < 0.25:
                members.append(sibling)
            elif length <= 80 and density == 0 and has_sentence_end(text):
                members.append(sibling)

    candidate.members = members
    if len(members) > 1:
        logger.debug("Merged candidate siblings", members=len(members), top_score=top_score)
    return candidate


def find_top_candidate(soup: BeautifulSoup, scores: ScoreMap) -> Candidate:
    """
    Pick the highest-scoring eligible element and merge its siblings.

    Ties keep the element seen first in document order. Without any scored
    element the body is returned, then the first element, then an empty
    candidate.
    """
    top: Tag | None = None
    top_score = 0

    for node in soup.find_all(True):
        if node not in scores:
            continue
        if (node.name or "").lower() in NON_TOP_CANDIDATE_TAGS:
            continue
        score = scores.get(node)
        if score > top_score:
            top = node
            top_score = score

    if top is None:
        fallback = soup.find("body") or soup.find(True)
        if fallback is None:
            return Candidate(node=None)
        return Candidate(node=fallback, members=[fallback])

    return merge_siblings(Candidate(node=top, score=top_score), scores)
