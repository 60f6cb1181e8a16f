"""
Named DOM transforms that custom extractor definitions can apply to content.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Mapping

from bs4 import BeautifulSoup, Tag

from ..dom.constants import KEEP_CLASS

Transform = Callable[[Tag], None]

RENAME_PREFIX = "rename:"
TAG_NAME_RE = re.compile(r"^[a-z][a-z0-9-]*$")


def rename_to(tag_name: str) -> Transform:
    def _rename(node: Tag) -> None:
        node.name = tag_name

    return _rename


def noscript_to_span(node: Tag) -> None:
    """Expose the markup of a ``<noscript>`` block as a ``<span>``."""
    if node.find(True) is None and "<" in node.get_text():
        fragment = BeautifulSoup(node.get_text(), "lxml")
        root = fragment.body or fragment
        node.clear()
        for child in list(root.contents):
            node.append(child.extract())
    node.name = "span"


def unwrap(node: Tag) -> None:
    node.unwrap()


def keep(node: Tag) -> None:
    """Protect the node from the junk and conditional cleaners."""
    classes = node.get("class") or []
    if KEEP_CLASS not in classes:
        node["class"] = [*classes, KEEP_CLASS]


TRANSFORMS: dict[str, Transform] = {
    "noscript_to_span": noscript_to_span,
    "unwrap": unwrap,
    "h1_to_h2": rename_to("h2"),
    "h2_to_h3": rename_to("h3"),
    "keep": keep,
}


def is_valid_transform(name: str) -> bool:
    if name in TRANSFORMS:
        return True
    if name.startswith(RENAME_PREFIX):
        return bool(TAG_NAME_RE.match(name[len(RENAME_PREFIX) :]))
    return False


def get_transform(name: str) -> Transform:
    """Look up a transform by name; ``rename:<tag>`` builds a renaming transform."""
    if name in TRANSFORMS:
        return TRANSFORMS[name]
    if is_valid_transform(name):
        return rename_to(name[len(RENAME_PREFIX) :])
    raise ValueError(f"Unknown transform: {name}")


def apply_transforms(root: Tag, transforms: Mapping[str, str]) -> None:
    for selector, name in transforms.items():
        transform = get_transform(name)
        for node in root.select(selector):
            transform(node)


def apply_clean(root: Tag, selectors: Iterable[str]) -> None:
    """Remove every element matching one of ``selectors``."""
    selectors = list(selectors)
    if not selectors:
        return
    for node in root.select(", ".join(selectors)):
        if not getattr(node, "decomposed", False):
            node.decompose()
