"""Node scoring and top candidate selection."""

from __future__ import annotations

from .candidates import Candidate, find_top_candidate, merge_siblings
from .scorer import NodeScorer, ScoreMap, get_weight, score_node, score_paragraph

__all__ = [
    "Candidate",
    "NodeScorer",
    "ScoreMap",
    "find_top_candidate",
    "get_weight",
    "merge_siblings",
    "score_node",
    "score_paragraph",
]
