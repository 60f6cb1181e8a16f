"""
Generic dek (subheading) extraction.
"""

from __future__ import annotations

from typing import Sequence

from bs4 import BeautifulSoup

from ..cleaners.dek import clean_dek
from ..dom.meta import meta_value

DEK_META_TAGS = ["description", "og:description", "twitter:description", "dc.description"]

DEK_SELECTORS = [
    ".entry-summary",
    'h2[itemprop="description"]',
    ".subtitle",
    ".sub-title",
    ".deck",
    ".dek",
    ".standfirst",
    ".summary",
    ".description",
]


class GenericDekExtractor:
    name = "dek"

    def extract(self, soup: BeautifulSoup, meta_cache: Sequence[str], excerpt: str = "") -> str | None:
        """Return the first meta or selector dek that survives cleaning against ``excerpt``."""
        dek = self._from_meta(soup, meta_cache)
        if dek:
            cleaned = clean_dek(dek, excerpt)
            if cleaned:
                return cleaned

        dek = self._from_selectors(soup)
        if dek:
            return clean_dek(dek, excerpt)

        return None

    @staticmethod
    def _from_meta(soup: BeautifulSoup, meta_cache: Sequence[str]) -> str:
        for name in DEK_META_TAGS:
            if name not in meta_cache:
                continue
            value = meta_value(soup, name)
            if value:
                return value
        return ""

    @staticmethod
    def _from_selectors(soup: BeautifulSoup) -> str:
        for selector in DEK_SELECTORS:
            node = soup.select_one(selector)
            if node is not None:
                return node.get_text()
        return ""
