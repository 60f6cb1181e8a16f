"""
Generic lead image extraction.

Meta tags win. Otherwise every image in the content is scored on its URL,
attributes, surroundings, dimensions and position, and the best positive
score wins.
"""

from __future__ import annotations

import re
from typing import Sequence

from bs4 import BeautifulSoup, Tag

from ..cleaners.lead_image import clean_lead_image_url
from ..dom.constants import PHOTO_HINTS_RE
from ..dom.meta import meta_value
from ..dom.prepare import parse_document
from ..dom.text import get_sig

LEAD_IMAGE_URL_META_TAGS = ["og:image", "twitter:image", "image_src"]
LEAD_IMAGE_URL_SELECTORS = ["link[rel=image_src]"]

POSITIVE_LEAD_IMAGE_URL_HINTS = ["upload", "wp-content", "large", "photo", "wp-image"]
NEGATIVE_LEAD_IMAGE_URL_HINTS = [
    "spacer",
    "sprite",
    "blank",
    "throbber",
    "gradient",
    "tile",
    "bg",
    "background",
    "icon",
    "social",
    "header",
    "hdr",
    "advert",
    "spinner",
    "loader",
    "loading",
    "default",
    "rating",
    "share",
    "facebook",
    "twitter",
    "theme",
    "promo",
    "ads",
    "wp-includes",
]

POSITIVE_LEAD_IMAGE_URL_HINTS_RE = re.compile("|".join(POSITIVE_LEAD_IMAGE_URL_HINTS), re.IGNORECASE)
NEGATIVE_LEAD_IMAGE_URL_HINTS_RE = re.compile("|".join(NEGATIVE_LEAD_IMAGE_URL_HINTS), re.IGNORECASE)
GIF_RE = re.compile(r"\.gif(\?.*)?$", re.IGNORECASE)
JPG_RE = re.compile(r"\.jpe?g(\?.*)?$", re.IGNORECASE)


def score_image_url(url: str) -> int:
    url = url.strip()
    score = 0
    if POSITIVE_LEAD_IMAGE_URL_HINTS_RE.search(url):
        score += 20
    if NEGATIVE_LEAD_IMAGE_URL_HINTS_RE.search(url):
        score -= 20
    if GIF_RE.search(url):
        score -= 10
    if JPG_RE.search(url):
        score += 10
    return score


def score_attr(img: Tag) -> int:
    return 5 if img.has_attr("alt") else 0


def score_by_parents(img: Tag) -> int:
    score = 0
    if img.find_parent("figure") is not None:
        score += 25

    parent = img.parent
    if isinstance(parent, Tag) and not isinstance(parent, BeautifulSoup):
        if PHOTO_HINTS_RE.search(get_sig(parent)):
            score += 15
        grandparent = parent.parent
        if isinstance(grandparent, Tag) and not isinstance(grandparent, BeautifulSoup):
            if PHOTO_HINTS_RE.search(get_sig(grandparent)):
                score += 15
    return score


def score_by_sibling(img: Tag) -> int:
    sibling = img.find_next_sibling()
    if sibling is None:
        return 0

    score = 0
    if sibling.name == "figcaption":
        score += 25
    if PHOTO_HINTS_RE.search(get_sig(sibling)):
        score += 15
    return score


def score_by_dimensions(img: Tag) -> int:
    try:
        width = float(img.get("width", ""))
        height = float(img.get("height", ""))
    except ValueError:
        return 0

    score = 0
    if width <= 50:
        score -= 50
    if height <= 50:
        score -= 50

    if width > 0 and height > 0 and "sprite" not in img.get("src", ""):
        area = width * height
        if area < 5000:
            score -= 100
        else:
            score += round(area / 1000)
    return score


def score_by_position(count: int, index: int) -> int:
    """Earlier images score higher; the first of ``count`` gets ``count / 2``."""
    return int(count / 2 - index)


class GenericLeadImageExtractor:
    name = "lead_image_url"

    def extract(
        self,
        soup: BeautifulSoup,
        url: str,
        meta_cache: Sequence[str],
        content: str = "",
    ) -> str | None:
        for name in LEAD_IMAGE_URL_META_TAGS:
            if name not in meta_cache:
                continue
            cleaned = clean_lead_image_url(meta_value(soup, name), url)
            if cleaned:
                return cleaned

        if content:
            cleaned = clean_lead_image_url(self.best_content_image(content) or "", url)
            if cleaned:
                return cleaned

        for selector in LEAD_IMAGE_URL_SELECTORS:
            node = soup.select_one(selector)
            if node is None:
                continue
            value = node.get("src") or node.get("href") or node.get("value") or ""
            cleaned = clean_lead_image_url(value, url)
            if cleaned:
                return cleaned

        return None

    @staticmethod
    def best_content_image(content: str) -> str | None:
        """Highest-scoring image ``src`` in the content HTML, if any scores above zero."""
        images = parse_document(content).find_all("img", src=True)
        top_url = None
        top_score = 0

        for index, img in enumerate(images):
            src = img["src"].strip()
            if not src:
                continue
            score = (
                score_image_url(src)
                + score_attr(img)
                + score_by_parents(img)
                + score_by_sibling(img)
                + score_by_dimensions(img)
                + score_by_position(len(images), index)
            )
            if score > top_score:
                top_url = src
                top_score = score

        return top_url
