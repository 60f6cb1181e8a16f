"""
Dek (subheading) cleaning.
"""

from __future__ import annotations

from ..dom.constants import TEXT_LINK_RE
from ..dom.text import excerpt_words, normalize_spaces, strip_tags

MIN_DEK_LENGTH = 5
MAX_DEK_LENGTH = 1000


def clean_dek(dek: str, excerpt: str = "") -> str | None:
    """
    Return the cleaned dek, or None when it is not a usable subheading.

    A dek that only repeats the opening of the excerpt, or that carries a bare
    URL, is rejected.
    """
    if not dek or len(dek) > MAX_DEK_LENGTH or len(dek) < MIN_DEK_LENGTH:
        return None

    if excerpt and excerpt_words(dek) == excerpt_words(excerpt):
        return None

    text = strip_tags(dek)
    if TEXT_LINK_RE.search(text):
        return None

    cleaned = normalize_spaces(text.strip())
    if len(cleaned) < MIN_DEK_LENGTH:
        return None
    return cleaned
