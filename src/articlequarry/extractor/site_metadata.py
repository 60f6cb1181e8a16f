"""
Site-level metadata extractors.

These only read the document, so the orchestrator runs them side by side.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterator, Sequence
from urllib.parse import urljoin

import structlog
from bs4 import BeautifulSoup

from ..dom.meta import meta_value
from ..dom.text import collapse_whitespace

logger = structlog.get_logger(__name__)

SITE_NAME_META_TAGS = ["og:site_name", "twitter:site", "application-name", "al:ios:app_name", "al:android:app_name"]
SITE_TITLE_META_TAGS = ["og:title", "twitter:title"]
SITE_IMAGE_META_TAGS = ["og:image", "twitter:image", "twitter:image:src", "thumbnail", "image"]
FAVICON_RELS = ["apple-touch-icon", "apple-touch-icon-precomposed", "icon", "shortcut icon"]
DESCRIPTION_META_TAGS = ["description", "og:description", "twitter:description", "dc.description"]
LANGUAGE_META_TAGS = ["og:locale", "content-language", "dc.language", "language"]

DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 500
DESCRIPTION_REJECT_PREFIXES = ("in this article", "this article", "read more about", "continue reading", "full story:")
DESCRIPTION_STRIP_SUFFIXES = (" - Read more", " | Read more", " - Continue reading", " | Continue reading")

LANGUAGE_CODE_RE = re.compile(r"^([a-z]{2,3})(?:[-_]([a-z]{2}|[a-z]{4}))?$", re.IGNORECASE)


def iter_json_ld(soup: BeautifulSoup) -> Iterator[dict[str, Any]]:
    """Yield every JSON-LD object of the document, flattening arrays and ``@graph``."""
    for script in soup.find_all("script", type="application/ld+json"):
        text = script.get_text().strip()
        if not text:
            continue
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.debug("Skipping invalid JSON-LD block", error=str(e))
            continue

        stack = data if isinstance(data, list) else [data]
        for item in stack:
            if not isinstance(item, dict):
                continue
            yield item
            graph = item.get("@graph")
            if isinstance(graph, list):
                yield from (node for node in graph if isinstance(node, dict))


def _json_ld_type(item: dict[str, Any]) -> set[str]:
    value = item.get("@type")
    if isinstance(value, list):
        return {str(v) for v in value}
    return {str(value)} if value else set()


def iter_meta_values(soup: BeautifulSoup, names: Sequence[str], meta_cache: Sequence[str]) -> Iterator[str]:
    """Non-empty values of the ``names`` present in ``meta_cache``, in ``names`` order."""
    for name in names:
        if name not in meta_cache:
            continue
        value = meta_value(soup, name)
        if value:
            yield value


def normalize_language(code: str) -> str | None:
    """Normalize ``en_us`` or ``EN-us`` to ``en-US``; None when not a language code."""
    match = LANGUAGE_CODE_RE.match(code.strip())
    if not match:
        return None
    language, region = match.groups()
    if not region:
        return language.lower()
    if len(region) == 4:
        return f"{language.lower()}-{region.title()}"
    return f"{language.lower()}-{region.upper()}"


class SiteNameExtractor:
    name = "site_name"

    def extract(self, soup: BeautifulSoup, url: str, meta_cache: Sequence[str]) -> str | None:
        return next(iter_meta_values(soup, SITE_NAME_META_TAGS, meta_cache), None)


class SiteTitleExtractor:
    name = "site_title"

    def extract(self, soup: BeautifulSoup, url: str, meta_cache: Sequence[str]) -> str | None:
        value = next(iter_meta_values(soup, SITE_TITLE_META_TAGS, meta_cache), None)
        if value:
            return value

        title = soup.find("title")
        if title is not None:
            return collapse_whitespace(title.get_text()) or None
        return None


class SiteImageExtractor:
    """Representative site image; only URL-like values are accepted."""

    name = "site_image"

    @staticmethod
    def _is_image_url(value: str) -> bool:
        return value.startswith(("http://", "https://", "//", "/"))

    def extract(self, soup: BeautifulSoup, url: str, meta_cache: Sequence[str]) -> str | None:
        for value in iter_meta_values(soup, SITE_IMAGE_META_TAGS, meta_cache):
            if self._is_image_url(value):
                return value

        link = soup.find("link", rel="image_src", href=True)
        if link is not None:
            href = link["href"].strip()
            if self._is_image_url(href):
                return href
        return None


class FaviconExtractor:
    name = "favicon"

    def extract(self, soup: BeautifulSoup, url: str, meta_cache: Sequence[str]) -> str | None:
        for rel in FAVICON_RELS:
            wanted = rel.split()
            for link in soup.find_all("link", href=True):
                rels = [value.lower() for value in (link.get("rel") or [])]
                if rels == wanted:
                    return urljoin(url, link["href"].strip())
        return urljoin(url, "/favicon.ico")


class DescriptionExtractor:
    name = "description"

    @staticmethod
    def _is_valid(description: str) -> bool:
        description = description.strip()
        if not DESCRIPTION_MIN_LENGTH <= len(description) <= DESCRIPTION_MAX_LENGTH:
            return False
        if "http://" in description or "https://" in description:
            return False
        return not description.lower().startswith(DESCRIPTION_REJECT_PREFIXES)

    @staticmethod
    def _clean(description: str) -> str:
        description = collapse_whitespace(description)
        for suffix in DESCRIPTION_STRIP_SUFFIXES:
            if description.endswith(suffix):
                description = description[: -len(suffix)]
                break
        return description.strip()

    def extract(self, soup: BeautifulSoup, url: str, meta_cache: Sequence[str]) -> str | None:
        for value in iter_meta_values(soup, DESCRIPTION_META_TAGS, meta_cache):
            if self._is_valid(value):
                return self._clean(value)

        for item in iter_json_ld(soup):
            types = _json_ld_type(item)
            description = None
            if types & {"WebSite", "Organization", "NewsMediaOrganization"}:
                description = item.get("description")
            elif types & {"Article", "NewsArticle", "BlogPosting"}:
                publisher = item.get("publisher")
                if isinstance(publisher, dict):
                    description = publisher.get("description")
            if isinstance(description, str) and self._is_valid(description):
                return self._clean(description)
        return None


class LanguageExtractor:
    name = "language"

    def extract(self, soup: BeautifulSoup, url: str, meta_cache: Sequence[str]) -> str | None:
        html = soup.find("html")
        if html is not None:
            for attr in ("lang", "xml:lang"):
                value = html.get(attr)
                if value:
                    normalized = normalize_language(value)
                    if normalized:
                        return normalized

        for tag in LANGUAGE_META_TAGS:
            value = meta_value(soup, tag) if tag in meta_cache else ""
            if not value and tag == "content-language":
                node = soup.find("meta", attrs={"http-equiv": re.compile("^content-language$", re.I)})
                value = (node.get("content") or "") if node is not None else ""
            normalized = normalize_language(value) if value else None
            if normalized:
                return normalized

        for item in iter_json_ld(soup):
            for key in ("inLanguage", "@language", "contentLanguage"):
                value = item.get(key)
                if isinstance(value, str):
                    normalized = normalize_language(value)
                    if normalized:
                        return normalized
        return None


SITE_METADATA_EXTRACTORS = (
    SiteNameExtractor,
    SiteTitleExtractor,
    SiteImageExtractor,
    FaviconExtractor,
    DescriptionExtractor,
    LanguageExtractor,
)
