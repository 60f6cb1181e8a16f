"""
Parsing and preparation of raw HTML before any field extraction runs.
"""

from __future__ import annotations

import re

import structlog
from bs4 import BeautifulSoup, Comment

logger = structlog.get_logger(__name__)

PARSER = "lxml"

IS_LINK_RE = re.compile(r"https?://", re.IGNORECASE)
IS_IMAGE_RE = re.compile(r"\.(png|gif|jpe?g|webp|avif)", re.IGNORECASE)
IS_SRCSET_RE = re.compile(r"\.(png|gif|jpe?g|webp|avif)(\?\S+)?(\s*[\d.]+[wx])", re.IGNORECASE)

REMOVE_ON_PREPARE = ["script", "style", "template"]


def parse_document(html: str) -> BeautifulSoup:
    """Parse raw HTML with the lxml backend."""
    return BeautifulSoup(html or "", PARSER)


def normalize_meta_tags(soup: BeautifulSoup) -> None:
    """
    Give every ``<meta>`` a ``name`` and a ``value``.

    OpenGraph style tags use ``property``/``content``; copying them keeps a single
    lookup path for the meta cache and the field extractors.
    """
    for meta in soup.find_all("meta"):
        if not meta.get("name") and meta.get("property"):
            meta["name"] = meta["property"]
        if meta.get("value") is None and meta.get("content") is not None:
            meta["value"] = meta["content"]


def convert_lazy_loaded_images(soup: BeautifulSoup) -> None:
    for img in soup.find_all("img"):
        for attr, value in list(img.attrs.items()):
            if not isinstance(value, str) or attr in ("src", "srcset"):
                continue
            if attr != "srcset" and IS_SRCSET_RE.search(value) and "," in value:
                img["srcset"] = value
            elif IS_LINK_RE.match(value) and IS_IMAGE_RE.search(value):
                img["src"] = value


def remove_comments(soup: BeautifulSoup) -> None:
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()


def remove_scripts(soup: BeautifulSoup) -> None:
    for node in soup.find_all(REMOVE_ON_PREPARE):
        # JSON-LD feeds the description and language extractors
        if node.name == "script" and node.get("type") == "application/ld+json":
            continue
        node.decompose()
    # noscript blocks are kept only when they wrap a single image
    for node in soup.find_all("noscript"):
        children = node.find_all(True, recursive=False)
        if len(children) == 1 and children[0].name == "img":
            continue
        node.decompose()


def prepare_document(soup: BeautifulSoup) -> BeautifulSoup:
    """Normalize a parsed document in place and return it."""
    normalize_meta_tags(soup)
    convert_lazy_loaded_images(soup)
    remove_comments(soup)
    remove_scripts(soup)
    logger.debug("Document prepared", meta_tags=len(soup.find_all("meta")))
    return soup


def load_document(html: str) -> BeautifulSoup:
    return prepare_document(parse_document(html))
