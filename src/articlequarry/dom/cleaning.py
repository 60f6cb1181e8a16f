"""
DOM cleaning passes.

The first group prepares a document for scoring (unlikely candidates,
paragraph conversion). The second group cleans the selected article node
before it is rendered.
"""

from __future__ import annotations

import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString, Tag

from .constants import (
    BLOCK_LEVEL_TAGS,
    CANDIDATES_BLACKLIST_RE,
    CANDIDATES_WHITELIST_RE,
    CLEAN_CONDITIONALLY_TAGS,
    DIV_TO_P_BLOCK_SELECTOR,
    HEADER_TAG_LIST,
    KEEP_CLASS,
    KEEP_SELECTORS,
    REMOVE_EMPTY_TAGS,
    SPACER_RE,
    STRIP_OUTPUT_TAGS,
    WHITELIST_ATTRS,
)
from ..scoring.scorer import NodeScorer, get_weight
from .text import get_sig, link_density, normalize_spaces

SRCSET_CANDIDATE_RE = re.compile(r"\s*(\S+)(\s+[\d.]+[wx])?\s*(?:,|$)")


def _is_live(node: Tag) -> bool:
    return not getattr(node, "decomposed", False)


def _has_class(node: Tag, name: str) -> bool:
    return name in (node.get("class") or [])


# --- Pre-scoring passes ---


def strip_unlikely_candidates(soup: BeautifulSoup) -> BeautifulSoup:
    """Remove elements whose class or id marks them as boilerplate."""
    for node in soup.find_all(True):
        if not _is_live(node) or node.name in ("a", "html", "body"):
            continue

        if not node.get("class") and not node.get("id"):
            continue

        sig = get_sig(node)
        if CANDIDATES_WHITELIST_RE.search(sig):
            continue
        if CANDIDATES_BLACKLIST_RE.search(sig):
            node.decompose()

    return soup


def _next_is_br(node: Tag) -> bool:
    sibling = node.next_sibling
    while isinstance(sibling, NavigableString) and not sibling.strip():
        sibling = sibling.next_sibling
    return isinstance(sibling, Tag) and sibling.name == "br"


def _paragraphize(soup: BeautifulSoup, br: Tag) -> None:
    paragraph = soup.new_tag("p")
    sibling = br.next_sibling
    while sibling is not None and not (isinstance(sibling, Tag) and sibling.name in BLOCK_LEVEL_TAGS):
        following = sibling.next_sibling
        paragraph.append(sibling.extract())
        sibling = following
    br.replace_with(paragraph)


def brs_to_ps(soup: BeautifulSoup) -> BeautifulSoup:
    """Collapse runs of ``<br>`` into paragraphs wrapping the inline content that follows."""
    collapsing = False
    for br in soup.find_all("br"):
        if br.parent is None:
            continue
        if _next_is_br(br):
            collapsing = True
            br.decompose()
        elif collapsing:
            collapsing = False
            _paragraphize(soup, br)
    return soup


def convert_to_paragraphs(soup: BeautifulSoup) -> BeautifulSoup:
    """Turn ``<br>`` runs, block-free divs and free-standing spans into paragraphs."""
    brs_to_ps(soup)

    for div in soup.find_all("div"):
        if div.select_one(DIV_TO_P_BLOCK_SELECTOR) is None:
            div.name = "p"

    for span in soup.find_all("span"):
        if span.find_parent(["p", "div", "li", "figcaption"]) is None:
            span.name = "p"

    return soup


# --- Article cleaning passes ---


def rewrite_top_level(article: Tag) -> Tag:
    """Rename ``html`` and ``body`` wrappers to ``div``."""
    if article.name in ("html", "body"):
        article.name = "div"
    for node in article.find_all(["html", "body"]):
        node.name = "div"
    return article


def _int_attr(node: Tag, attr: str) -> int | None:
    value = node.get(attr)
    if value is None:
        return None
    match = re.match(r"\s*(\d+)", str(value))
    return int(match.group(1)) if match else None


def clean_images(article: Tag) -> Tag:
    """Drop tiny and spacer images and the height attribute of the rest."""
    for img in article.find_all("img"):
        height = _int_attr(img, "height")
        width = _int_attr(img, "width")
        if (height is not None and height < 10) or (width is not None and width < 10):
            img.decompose()
            continue
        if height is not None:
            del img["height"]

        src = img.get("src")
        if not src or SPACER_RE.search(src):
            img.decompose()
    return article


def _absolutize_srcset(base: str, srcset: str) -> str:
    parts = []
    for match in SRCSET_CANDIDATE_RE.finditer(srcset):
        url = match.group(1)
        if not url:
            continue
        descriptor = match.group(2) or ""
        parts.append(f"{urljoin(base, url)}{descriptor}")
    return ", ".join(parts)


def make_links_absolute(article: Tag, soup: BeautifulSoup, url: str) -> Tag:
    """Resolve ``href``, ``src`` and ``srcset`` against the page URL and any ``<base>``."""
    base = url
    base_tag = soup.find("base", href=True)
    if base_tag is not None:
        base = urljoin(url, base_tag["href"])

    for attr in ("href", "src"):
        for node in article.find_all(attrs={attr: True}):
            value = node[attr].strip()
            if value and not value.startswith(("#", "javascript:", "mailto:", "data:")):
                node[attr] = urljoin(base, value)

    for node in article.find_all(attrs={"srcset": True}):
        node["srcset"] = _absolutize_srcset(base, node["srcset"])

    return article


def mark_to_keep(article: Tag) -> Tag:
    """Flag embedded video players so the junk stripper leaves them alone."""
    for selector in KEEP_SELECTORS:
        for node in article.select(selector):
            classes = node.get("class") or []
            if KEEP_CLASS not in classes:
                node["class"] = [*classes, KEEP_CLASS]
    return article


def strip_junk_tags(article: Tag) -> Tag:
    for node in article.find_all(STRIP_OUTPUT_TAGS):
        if _is_live(node) and not _has_class(node, KEEP_CLASS):
            node.decompose()
    return article


def clean_h_ones(article: Tag) -> Tag:
    """A couple of h1s are title repeats; many h1s are section headers."""
    h_ones = article.find_all("h1")
    if len(h_ones) < 3:
        for node in h_ones:
            node.decompose()
    else:
        for node in h_ones:
            node.name = "h2"
    return article


def clean_headers(article: Tag, title: str = "") -> Tag:
    has_paragraphs = article.find("p") is not None
    normalized_title = normalize_spaces(title)

    for header in article.find_all(HEADER_TAG_LIST):
        if not _is_live(header):
            continue

        if has_paragraphs and header.find_previous_sibling("p") is None:
            header.decompose()
            continue

        if normalized_title and normalize_spaces(header.get_text()) == normalized_title:
            header.decompose()
            continue

        if get_weight(header) < 0:
            header.decompose()
            continue

        if len(header.get_text().strip()) < 3:
            header.decompose()

    return article


def remove_unless_content(node: Tag, weight: int) -> bool:
    """Remove a container that does not look like content. Returns True when removed."""
    if _has_class(node, "entry-content-asset"):
        return False

    content = normalize_spaces(node.get_text())
    if content.count(",") >= 10:
        return False

    p_count = len(node.find_all("p"))
    input_count = len(node.find_all("input"))
    if input_count > p_count / 3:
        node.decompose()
        return True

    content_length = len(content)
    img_count = len(node.find_all("img"))
    if content_length < 25 and img_count == 0:
        node.decompose()
        return True

    density = link_density(node)
    if weight < 25 and density > 0.2 and content_length > 75:
        node.decompose()
        return True

    if weight >= 25 and density > 0.5:
        if node.name in ("ol", "ul"):
            previous = node.find_previous_sibling()
            if previous is not None and normalize_spaces(previous.get_text()).endswith(":"):
                return False
        node.decompose()
        return True

    if node.find("script") is not None and content_length < 150:
        node.decompose()
        return True

    return False


def clean_tags(article: Tag, scorer: NodeScorer) -> Tag:
    """Conditionally remove lists, tables, divs and forms that carry no content."""
    for node in article.find_all(CLEAN_CONDITIONALLY_TAGS):
        if not _is_live(node):
            continue
        if _has_class(node, KEEP_CLASS) or node.find(class_=KEEP_CLASS) is not None:
            continue

        weight = scorer.get_score(node)
        if weight == 0:
            weight = scorer.get_or_init_score(node)
            scorer.scores.set(node, weight)

        if weight < 0:
            node.decompose()
        else:
            remove_unless_content(node, weight)

    return article


def remove_empty(article: Tag) -> Tag:
    for node in article.find_all(REMOVE_EMPTY_TAGS):
        if not _is_live(node):
            continue
        if node.find(["img", "iframe"]) is None and not node.get_text().strip():
            node.decompose()
    return article


def clean_attributes(article: Tag) -> Tag:
    """Reduce every element's attributes to the output whitelist."""
    for node in [article, *article.find_all(True)]:
        node.attrs = {key: value for key, value in node.attrs.items() if key.lower() in WHITELIST_ATTRS}
    return article
