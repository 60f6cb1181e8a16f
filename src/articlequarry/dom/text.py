"""
Text helpers that operate on strings and BeautifulSoup nodes.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from .constants import SENTENCE_END_RE

# Runs of whitespace outside <pre>, <code> and <textarea> blocks
NORMALIZE_RE = re.compile(r"\s{2,}(?![^<>]*</(pre|code|textarea)>)")
WHITESPACE_RE = re.compile(r"\s+")

LTR_MARK = "\u200e"
RTL_MARK = "\u200f"

RTL_SCRIPT_RANGES = [
    (0x0590, 0x05FF),  # Hebrew
    (0x0600, 0x06FF),  # Arabic
    (0x0700, 0x074F),  # Syriac
    (0x0780, 0x07BF),  # Thaana
    (0x07C0, 0x07FF),  # NKo
    (0x2D30, 0x2D7F),  # Tifinagh
]
NON_DIRECTIONAL_RE = re.compile(r"[\s\x00\f\t\v'\"\-0-9+?!]+")


def normalize_spaces(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    if not text:
        return ""
    return NORMALIZE_RE.sub(" ", text).strip()


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run, including newlines inside markup-free text."""
    return WHITESPACE_RE.sub(" ", text).strip()


def strip_tags(html: str) -> str:
    """Return the text content of an HTML fragment."""
    if not html:
        return ""
    fragment = BeautifulSoup(f"<span>{html}</span>", "lxml")
    return fragment.get_text()


def node_text(node: Tag | None) -> str:
    """Trimmed text of a node; empty for a missing node."""
    if node is None:
        return ""
    return node.get_text().strip()


def text_length(node: Tag) -> int:
    return len(collapse_whitespace(node.get_text()))


def link_density(node: Tag) -> float:
    """Share of a node's text that sits inside anchors."""
    total = node_text(node)
    if not total:
        return 0.0
    link_text = "".join(a.get_text() for a in node.find_all("a")).strip()
    return len(link_text) / len(total)


def has_sentence_end(text: str) -> bool:
    return bool(SENTENCE_END_RE.search(text.strip()))


def excerpt_words(content: str, words: int = 10) -> str:
    """First ``words`` whitespace-separated tokens of ``content``."""
    tokens = content.split()
    return " ".join(tokens[:words])


def ellipsize(text: str, max_length: int, ellipsis: str = "...") -> str:
    """Cut normalized ``text`` at a word boundary no longer than ``max_length``."""
    text = collapse_whitespace(text)
    if len(text) <= max_length:
        return text
    cut = text[:max_length]
    if " " in cut and not text[max_length].isspace():
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip(" ,;:") + ellipsis


def get_sig(node: Tag) -> str:
    """Class and id of a node joined by a space."""
    classes = node.get("class") or []
    if isinstance(classes, list):
        classes = " ".join(classes)
    return f"{classes} {node.get('id') or ''}"


def get_direction(text: str) -> str:
    """Return ``ltr``, ``rtl``, ``bidi`` or an empty string for ``text``."""
    if not text:
        return ""

    has_ltr_mark = LTR_MARK in text
    has_rtl_mark = RTL_MARK in text
    if has_ltr_mark and has_rtl_mark:
        return "bidi"
    if has_ltr_mark:
        return "ltr"
    if has_rtl_mark:
        return "rtl"

    has_rtl = False
    has_ltr = False
    for char in NON_DIRECTIONAL_RE.sub("", text):
        code = ord(char)
        if any(low <= code <= high for low, high in RTL_SCRIPT_RANGES):
            has_rtl = True
        else:
            has_ltr = True

    if has_rtl and has_ltr:
        return "bidi"
    if has_ltr:
        return "ltr"
    if has_rtl:
        return "rtl"
    return ""
