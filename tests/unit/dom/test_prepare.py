"""
Unit tests for document preparation and meta lookups.
"""

from __future__ import annotations

from articlequarry.dom.meta import build_meta_cache, extract_from_meta, extract_from_selectors, meta_value
from articlequarry.dom.prepare import load_document, parse_document


class TestPrepareDocument:
    """Test cases for document preparation."""

    def test_property_is_copied_to_name(self):
        soup = load_document('<head><meta property="og:title" content="Hello"></head>')
        meta = soup.find("meta")
        assert meta["name"] == "og:title"
        assert meta["value"] == "Hello"

    def test_lazy_images_get_src(self):
        soup = load_document('<body><img data-src="https://cdn.example.com/photo.jpg"></body>')
        assert soup.img["src"] == "https://cdn.example.com/photo.jpg"

    def test_lazy_srcset(self):
        soup = load_document(
            '<body><img data-srcset="https://cdn.example.com/a.jpg 1x, https://cdn.example.com/b.jpg 2x"></body>'
        )
        assert "b.jpg 2x" in soup.img["srcset"]

    def test_scripts_styles_and_comments_removed(self):
        soup = load_document(
            "<body><!-- note --><script>alert(1)</script><style>p{}</style><p>text</p></body>"
        )
        assert soup.find("script") is None
        assert soup.find("style") is None
        assert "note" not in str(soup)
        assert soup.p.get_text() == "text"

    def test_json_ld_is_kept(self):
        soup = load_document('<head><script type="application/ld+json">{"@type": "WebSite"}</script></head>')
        assert soup.find("script", type="application/ld+json") is not None

    def test_noscript_image_is_kept(self):
        soup = load_document(
            '<body><noscript><img src="https://example.com/a.jpg"></noscript>'
            "<noscript><p>Enable JavaScript</p></noscript></body>"
        )
        noscripts = soup.find_all("noscript")
        assert len(noscripts) == 1
        assert noscripts[0].img is not None


class TestMetaLookups:
    """Test cases for the meta cache and meta/selector extraction."""

    def test_meta_cache_is_distinct_and_ordered(self):
        soup = load_document(
            '<head><meta name="author" content="a"><meta property="og:title" content="t">'
            '<meta name="author" content="b"></head>'
        )
        assert build_meta_cache(soup) == ["author", "og:title"]

    def test_extract_from_meta_requires_single_value(self):
        soup = load_document('<head><meta name="byl" content="a"><meta name="byl" content="b"></head>')
        cache = build_meta_cache(soup)
        assert extract_from_meta(soup, ["byl"], cache) is None

    def test_extract_from_meta_skips_names_not_cached(self):
        soup = load_document('<head><meta name="dc.title" content="Title"></head>')
        assert extract_from_meta(soup, ["dc.title"], []) is None
        assert extract_from_meta(soup, ["dc.title"], build_meta_cache(soup)) == "Title"

    def test_extract_from_meta_strips_tags(self):
        soup = load_document('<head><meta name="title" content="&lt;b&gt;Bold&lt;/b&gt; title"></head>')
        assert extract_from_meta(soup, ["title"], build_meta_cache(soup)) == "Bold title"

    def test_meta_value_first_match(self):
        soup = load_document(
            '<head><meta property="og:image" content="https://a.example/1.jpg">'
            '<meta property="og:image" content="https://a.example/2.jpg"></head>'
        )
        assert meta_value(soup, "og:image") == "https://a.example/1.jpg"

    def test_selectors_need_a_single_match(self):
        soup = parse_document("<body><h1>One</h1><h1>Two</h1><p class='dek'>Only</p></body>")
        assert extract_from_selectors(soup, ["h1"]) is None
        assert extract_from_selectors(soup, [".dek"]) == "Only"

    def test_selectors_skip_comment_sections(self):
        soup = parse_document("<body><div class='comments'><span class='byline'>Troll</span></div></body>")
        assert extract_from_selectors(soup, [".byline"]) is None

    def test_selectors_respect_max_children(self):
        soup = parse_document("<body><div class='author'><a>A</a><a>B</a></div></body>")
        assert extract_from_selectors(soup, [".author"]) is None
        assert extract_from_selectors(soup, [".author"], max_children=2) == "AB"
