"""
Unit tests for named content transforms.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from articlequarry.custom.transforms import apply_clean, apply_transforms, get_transform, is_valid_transform
from articlequarry.dom.constants import KEEP_CLASS


def _div(html: str):
    return BeautifulSoup(f"<div id='root'>{html}</div>", "lxml").select_one("#root")


class TestTransformLookup:
    @pytest.mark.parametrize("name", ["noscript_to_span", "unwrap", "h1_to_h2", "h2_to_h3", "keep", "rename:figure"])
    def test_valid_names(self, name):
        assert is_valid_transform(name)
        assert callable(get_transform(name))

    @pytest.mark.parametrize("name", ["explode", "rename:", "rename:1bad"])
    def test_invalid_names(self, name):
        assert not is_valid_transform(name)
        with pytest.raises(ValueError):
            get_transform(name)


class TestApplyTransforms:
    def test_rename(self):
        root = _div("<h1>Title</h1><div class='lede'>Lede</div>")
        apply_transforms(root, {"h1": "h1_to_h2", "div.lede": "rename:p"})
        assert root.find("h1") is None
        assert root.h2.get_text() == "Title"
        assert root.select_one("p.lede").get_text() == "Lede"

    def test_unwrap(self):
        root = _div("<section><p>Inside</p></section>")
        apply_transforms(root, {"section": "unwrap"})
        assert root.find("section") is None
        assert root.p.get_text() == "Inside"

    def test_noscript_to_span(self):
        root = _div('<noscript><img src="photo.jpg"></noscript>')
        apply_transforms(root, {"noscript": "noscript_to_span"})
        assert root.find("noscript") is None
        assert root.span.img["src"] == "photo.jpg"

    def test_keep_marks_node(self):
        root = _div("<iframe class='player' src='https://player.example/1'></iframe>")
        apply_transforms(root, {"iframe": "keep"})
        assert root.iframe["class"] == ["player", KEEP_CLASS]


class TestApplyClean:
    def test_removes_matches(self):
        root = _div("<p>Keep</p><div class='ad'><span class='ad'>Nested ad</span></div><aside>Drop</aside>")
        apply_clean(root, [".ad", "aside"])
        assert root.get_text() == "Keep"

    def test_no_selectors(self):
        root = _div("<p>Keep</p>")
        apply_clean(root, [])
        assert root.get_text() == "Keep"
