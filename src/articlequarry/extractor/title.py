"""
Generic title extraction.
"""

from __future__ import annotations

from typing import Sequence

from bs4 import BeautifulSoup

from ..cleaners.title import clean_title
from ..dom.meta import extract_from_meta, extract_from_selectors

STRONG_TITLE_META_TAGS = ["tweetmeme-title", "dc.title", "rbtitle", "headline", "title"]
WEAK_TITLE_META_TAGS = ["og:title"]

STRONG_TITLE_SELECTORS = [
    ".hentry .entry-title",
    "h1#articleHeader",
    "h1.articleHeader",
    "h1.article",
    ".instapaper_title",
    "#meebo-title",
]
WEAK_TITLE_SELECTORS = [
    "article h1",
    "#entry-title",
    ".entry-title",
    "#entryTitle",
    "#entrytitle",
    ".entryTitle",
    ".entrytitle",
    "#articleTitle",
    ".articleTitle",
    "post post-title",
    "h1.title",
    "h2.article",
    "h1",
    "html head title",
    "title",
]


class GenericTitleExtractor:
    """Strong meta tags, strong selectors, then their weak counterparts."""

    name = "title"

    def extract(self, soup: BeautifulSoup, url: str, meta_cache: Sequence[str]) -> str | None:
        title = extract_from_meta(soup, STRONG_TITLE_META_TAGS, meta_cache)
        if title:
            return clean_title(title, url, soup)

        title = extract_from_selectors(soup, STRONG_TITLE_SELECTORS)
        if title:
            return clean_title(title, url, soup)

        title = extract_from_meta(soup, WEAK_TITLE_META_TAGS, meta_cache)
        if title:
            return clean_title(title, url, soup)

        title = extract_from_selectors(soup, WEAK_TITLE_SELECTORS)
        if title:
            return clean_title(title, url, soup)

        return None
