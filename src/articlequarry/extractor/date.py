"""
Generic publication date extraction.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Sequence

from bs4 import BeautifulSoup

from ..cleaners.date import clean_date_published
from ..dom.meta import extract_from_meta, extract_from_selectors

DATE_PUBLISHED_META_TAGS = [
    "article:published_time",
    "displaydate",
    "dc.date",
    "dc.date.issued",
    "rbpubdate",
    "publish_date",
    "pub_date",
    "pagedate",
    "pubdate",
    "revision_date",
    "doc_date",
    "date_created",
    "content_create_date",
    "lastmodified",
    "created",
    "date",
]

DATE_PUBLISHED_SELECTORS = [
    ".hentry .dtstamp.published",
    ".hentry .published",
    ".hentry .dtstamp.updated",
    ".hentry .updated",
    ".single .published",
    ".meta .published",
    ".meta .postDate",
    ".entry-date",
    ".byline .date",
    ".postmetadata .date",
    ".article_datetime",
    ".date-header",
    ".story-date",
    ".dateStamp",
    "#story .datetime",
    ".dateline",
    ".pubdate",
]

DATE_PUBLISHED_URL_RES = [
    re.compile(r"/(20\d{2}/\d{2}/\d{2})/"),
    re.compile(r"(20\d{2}-[01]\d-[0-3]\d)"),
    re.compile(r"/(20\d{2}/(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)/[0-3]\d)/", re.IGNORECASE),
]


def date_from_url(url: str) -> str | None:
    for pattern in DATE_PUBLISHED_URL_RES:
        match = pattern.search(url or "")
        if match:
            return match.group(1)
    return None


class GenericDateExtractor:
    """Date meta tags, then date selectors, then a date embedded in the URL."""

    name = "date_published"

    def extract(self, soup: BeautifulSoup, url: str, meta_cache: Sequence[str]) -> datetime | None:
        candidates = [
            extract_from_meta(soup, DATE_PUBLISHED_META_TAGS, meta_cache, clean_tags=False),
            extract_from_selectors(soup, DATE_PUBLISHED_SELECTORS, max_children=5),
            date_from_url(url),
        ]
        for candidate in candidates:
            if not candidate:
                continue
            parsed = clean_date_published(candidate)
            if parsed is not None:
                return parsed
        return None
