"""
Generic author extraction.
"""

from __future__ import annotations

from typing import Sequence

from bs4 import BeautifulSoup

from ..cleaners.author import clean_author
from ..dom.constants import BYLINE_SELECTORS_RE
from ..dom.meta import extract_from_meta, extract_from_selectors

AUTHOR_META_TAGS = ["byl", "clmst", "dc.author", "dcsext.author", "dc.creator", "rbauthors", "authors"]

AUTHOR_MAX_LENGTH = 300

AUTHOR_SELECTORS = [
    ".entry .entry-author",
    ".author.vcard .fn",
    ".author .vcard .fn",
    ".byline.vcard .fn",
    ".byline .vcard .fn",
    ".byline .by .author",
    ".byline .by",
    ".byline .author",
    ".post-author.vcard",
    ".post-author .vcard",
    "a[rel=author]",
    "#by_author",
    ".by_author",
    "#entryAuthor",
    ".entryAuthor",
    ".byline a[href*=author]",
    "#author .authorname",
    ".author .authorname",
    "#author",
    ".author",
    ".articleauthor",
    ".ArticleAuthor",
    ".byline",
]


class GenericAuthorExtractor:
    name = "author"

    def extract(self, soup: BeautifulSoup, meta_cache: Sequence[str]) -> str | None:
        author = extract_from_meta(soup, AUTHOR_META_TAGS, meta_cache)
        if author and len(author) < AUTHOR_MAX_LENGTH:
            return clean_author(author) or None

        author = extract_from_selectors(soup, AUTHOR_SELECTORS, max_children=2)
        if author and len(author) < AUTHOR_MAX_LENGTH:
            return clean_author(author) or None

        for selector, byline_re in BYLINE_SELECTORS_RE:
            nodes = soup.select(selector)
            if len(nodes) != 1:
                continue
            text = nodes[0].get_text().strip()
            if byline_re.match(text):
                return clean_author(text) or None

        return None
