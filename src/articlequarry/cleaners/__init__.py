"""Cleaners that normalize raw field values."""

from __future__ import annotations

from .author import clean_author
from .content import extract_clean_node
from .date import clean_date_published
from .dek import clean_dek
from .lead_image import clean_lead_image_url
from .title import clean_title, levenshtein_ratio, resolve_split_title

__all__ = [
    "clean_author",
    "clean_date_published",
    "clean_dek",
    "clean_lead_image_url",
    "clean_title",
    "extract_clean_node",
    "levenshtein_ratio",
    "resolve_split_title",
]
