"""
Author cleaning.
"""

from __future__ import annotations

from ..dom.constants import CLEAN_AUTHOR_RE
from ..dom.text import normalize_spaces


def clean_author(author: str) -> str:
    """Drop ``By``, ``Posted by`` and ``Written by`` prefixes and tidy whitespace."""
    match = CLEAN_AUTHOR_RE.match(author or "")
    if match:
        author = match.group(2)
    return normalize_spaces((author or "").strip())
