"""
Post-selection cleaning of the article node.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from ..dom.cleaning import (
    clean_attributes,
    clean_h_ones,
    clean_headers,
    clean_images,
    clean_tags,
    make_links_absolute,
    mark_to_keep,
    remove_empty,
    rewrite_top_level,
    strip_junk_tags,
)
from ..scoring.scorer import NodeScorer


def extract_clean_node(
    article: Tag,
    soup: BeautifulSoup,
    scorer: NodeScorer,
    url: str = "",
    title: str = "",
    clean_conditionally: bool = True,
    default_cleaner: bool = True,
) -> Tag:
    """
    Clean the selected article node in place and return it.

    The order matters: links are resolved and embeds marked before junk tags
    go, and conditional cleaning sees the headers already pruned.
    """
    rewrite_top_level(article)

    if default_cleaner:
        clean_images(article)

    if url:
        make_links_absolute(article, soup, url)

    mark_to_keep(article)
    strip_junk_tags(article)
    clean_h_ones(article)
    clean_headers(article, title)

    if clean_conditionally:
        clean_tags(article, scorer)

    remove_empty(article)
    clean_attributes(article)
    return article
