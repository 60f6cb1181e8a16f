"""
Title cleaning: breadcrumb resolution and removal of site-name segments.
"""

from __future__ import annotations

from collections import Counter
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from rapidfuzz import distance

from ..dom.constants import DOMAIN_ENDINGS_RE, TITLE_SPLITTERS_RE
from ..dom.text import collapse_whitespace, strip_tags

MAX_TITLE_LENGTH = 150


def levenshtein_ratio(a: str, b: str) -> float:
    """Similarity in ``[0, 1]`` derived from the Levenshtein distance."""
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    dist = distance.Levenshtein.distance(a, b)
    return max(0.0, 1.0 - dist / max(len(a), len(b)))


def split_title(title: str) -> list[str]:
    """Split on title separators, keeping the separators as tokens."""
    return [token for token in TITLE_SPLITTERS_RE.split(title) if token]


def _breadcrumb_title(tokens: list[str], title: str) -> str | None:
    if len(tokens) < 6:
        return None

    term, count = Counter(tokens).most_common(1)[0]

    # A short separator used more than once is the breadcrumb divider
    if count >= 2 and len(term) <= 4:
        tokens = title.split(term)

    longest = max([tokens[0], tokens[-1]], key=len)
    if len(longest) > 10:
        return longest.strip()
    return title


def _slug(token: str) -> str:
    return token.replace(" ", "").lower()


def _remove_domain_segment(tokens: list[str], url: str) -> str | None:
    if not url or len(tokens) < 3:
        return None

    host = urlparse(url).netloc
    if not host:
        return None
    naked_domain = DOMAIN_ENDINGS_RE.sub("", host.lower())

    start_slug = _slug(tokens[0])
    if levenshtein_ratio(start_slug, naked_domain) > 0.4 and len(start_slug) > 5:
        return "".join(tokens[2:])

    end_slug = _slug(tokens[-1])
    if levenshtein_ratio(end_slug, naked_domain) > 0.4 and len(end_slug) >= 5:
        return "".join(tokens[:-2])

    return None


def resolve_split_title(title: str, url: str = "") -> str:
    """
    Decide whether any segment of a separator-delimited title should go.

    Breadcrumb titles such as ``Gadgets : Bits : Blogs : NYTimes.com`` resolve to
    their longest end segment. Otherwise an end segment that fuzzy-matches the
    host (``NYTimes - Headline`` on nytimes.com) is dropped with its separator.
    """
    tokens = split_title(title)
    if len(tokens) <= 1:
        return title

    breadcrumb = _breadcrumb_title(tokens, title)
    if breadcrumb is not None:
        return breadcrumb

    without_domain = _remove_domain_segment(tokens, url)
    if without_domain is not None:
        return without_domain

    return title


def clean_title(title: str, url: str = "", soup: BeautifulSoup | None = None) -> str:
    """Strip markup from a raw title, resolve separators and collapse every whitespace run to one space."""
    cleaned = strip_tags(title).strip()

    if TITLE_SPLITTERS_RE.search(cleaned):
        cleaned = resolve_split_title(cleaned, url)

    if len(cleaned) > MAX_TITLE_LENGTH and soup is not None:
        h_ones = soup.find_all("h1")
        if len(h_ones) == 1:
            cleaned = h_ones[0].get_text()

    return collapse_whitespace(cleaned)
