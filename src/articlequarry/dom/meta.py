"""
Meta-tag and selector lookups shared by the generic field extractors.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from bs4 import BeautifulSoup, Tag

from .constants import COMMENT_HINTS_RE
from .text import get_sig, normalize_spaces, strip_tags


def build_meta_cache(soup: BeautifulSoup) -> list[str]:
    """Distinct ``name`` attribute values of every ``<meta>`` element, in document order."""
    seen: set[str] = set()
    names: list[str] = []
    for meta in soup.find_all("meta"):
        name = meta.get("name")
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return names


def meta_value(soup: BeautifulSoup, name: str) -> str:
    """Value of the first ``<meta>`` named ``name`` through either ``name`` or ``property``."""
    for attr in ("name", "property"):
        node = soup.find("meta", attrs={attr: name})
        if node is None:
            continue
        value = node.get("value") or node.get("content") or ""
        if value.strip():
            return value.strip()
    return ""


def extract_from_meta(
    soup: BeautifulSoup,
    meta_names: Sequence[str],
    meta_cache: Iterable[str],
    clean_tags: bool = True,
) -> str | None:
    """
    Return the value of the first meta name present in ``meta_cache``.

    A name only yields a value when exactly one non-empty ``<meta>`` carries it,
    since several conflicting values are no better than none.
    """
    cache = set(meta_cache)
    for name in meta_names:
        if name not in cache:
            continue

        values = []
        for node in soup.find_all("meta", attrs={"name": name}):
            value = node.get("value")
            if value is None:
                value = node.get("content")
            if value:
                values.append(value)

        if len(values) == 1:
            value = values[0]
            if clean_tags:
                value = strip_tags(value) or value
            return value.strip()

    return None


def is_within_comment(node: Tag) -> bool:
    """True when any ancestor looks like a comment thread."""
    for parent in node.parents:
        if not isinstance(parent, Tag) or isinstance(parent, BeautifulSoup):
            continue
        if COMMENT_HINTS_RE.search(get_sig(parent)):
            return True
    return False


def is_good_node(node: Tag, max_children: int) -> bool:
    children = node.find_all(True, recursive=False)
    if len(children) > max_children:
        return False
    return not is_within_comment(node)


def extract_from_selectors(
    root: BeautifulSoup | Tag,
    selectors: Sequence[str],
    max_children: int = 1,
    text_only: bool = True,
) -> str | None:
    """
    Return the text of the first selector that matches exactly one acceptable node.
    """
    for selector in selectors:
        nodes = root.select(selector)
        if len(nodes) != 1:
            continue

        node = nodes[0]
        if not is_good_node(node, max_children):
            continue

        if text_only:
            content = node.get_text()
        else:
            content = node.decode_contents()

        content = normalize_spaces(content)
        if content:
            return content

    return None
