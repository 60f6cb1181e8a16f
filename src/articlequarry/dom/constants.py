"""
Regular expressions and tag sets shared by scoring, cleaning and field extraction.
"""

from __future__ import annotations

import re

# --- Keep marker ---

KEEP_CLASS = "articlequarry-keep"

KEEP_SELECTORS = [
    'iframe[src^="https://www.youtube.com"]',
    'iframe[src^="https://www.youtube-nocookie.com"]',
    'iframe[src^="http://www.youtube.com"]',
    'iframe[src^="https://player.vimeo.com"]',
    'iframe[src^="http://player.vimeo.com"]',
    'iframe[src^="https://www.redditmedia.com"]',
]

# --- Unlikely candidates ---

UNLIKELY_CANDIDATES_BLACKLIST = [
    "ad-break",
    "ad-banner",
    "adbox",
    "advert",
    "addthis",
    "agegate",
    "aux",
    "blogger-labels",
    "combx",
    "comment",
    "conversation",
    "disqus",
    "entry-unrelated",
    "extra",
    "foot",
    "header",
    "hidden",
    "loader",
    "login",
    "menu",
    "meta",
    "nav",
    "outbrain",
    "pager",
    "pagination",
    "predicta",
    "presence_control_external",
    "popup",
    "printfriendly",
    "related",
    "remove",
    "remark",
    "rss",
    "share",
    "shoutbox",
    "sidebar",
    "sociable",
    "sponsor",
    "taboola",
    "tools",
]

UNLIKELY_CANDIDATES_WHITELIST = [
    "and",
    "article",
    "body",
    "blogindex",
    "column",
    "content",
    "entry-content-asset",
    "format",
    "hfeed",
    "hentry",
    "hatom",
    "main",
    "page",
    "posts",
    "shadow",
]

CANDIDATES_BLACKLIST_RE = re.compile("|".join(UNLIKELY_CANDIDATES_BLACKLIST), re.IGNORECASE)
CANDIDATES_WHITELIST_RE = re.compile("|".join(UNLIKELY_CANDIDATES_WHITELIST), re.IGNORECASE)

# --- Paragraph conversion ---

DIV_TO_P_BLOCK_TAGS = ["a", "blockquote", "dl", "div", "img", "p", "pre", "table"]
DIV_TO_P_BLOCK_SELECTOR = ",".join(DIV_TO_P_BLOCK_TAGS)

BLOCK_LEVEL_TAGS = frozenset(
    {
        "article",
        "aside",
        "blockquote",
        "body",
        "br",
        "button",
        "canvas",
        "caption",
        "col",
        "colgroup",
        "dd",
        "div",
        "dl",
        "dt",
        "embed",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "li",
        "map",
        "object",
        "ol",
        "output",
        "p",
        "pre",
        "progress",
        "section",
        "table",
        "tbody",
        "textarea",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
        "video",
    }
)

# --- Scoring ---

POSITIVE_SCORE_HINTS = [
    "article",
    "articlecontent",
    "instapaper_body",
    "blog",
    "body",
    "content",
    "entry-content-asset",
    "entry",
    "hentry",
    "main",
    "Normal",
    "page",
    "pagination",
    "permalink",
    "post",
    "story",
    "text",
    "[-_]copy",
    r"\Bcopy",
]

NEGATIVE_SCORE_HINTS = [
    "adbox",
    "advert",
    "author",
    "bio",
    "bookmark",
    "bottom",
    "byline",
    "clear",
    "com-",
    "combx",
    "comment",
    r"comment\B",
    "contact",
    "copy",
    "credit",
    "crumb",
    "date",
    "deck",
    "excerpt",
    "featured",
    "foot",
    "footer",
    "footnote",
    "graf",
    "head",
    "info",
    "infotext",
    "instapaper_ignore",
    "jump",
    "linebreak",
    "link",
    "masthead",
    "media",
    "meta",
    "modal",
    "outbrain",
    "promo",
    "pr_",
    "related",
    "respond",
    "roundcontent",
    "scroll",
    "secondary",
    "share",
    "shopping",
    "shoutbox",
    "side",
    "sidebar",
    "sponsor",
    "stamp",
    "sub",
    "summary",
    "tags",
    "tools",
    "widget",
]

POSITIVE_SCORE_RE = re.compile("|".join(POSITIVE_SCORE_HINTS), re.IGNORECASE)
NEGATIVE_SCORE_RE = re.compile("|".join(NEGATIVE_SCORE_HINTS), re.IGNORECASE)
PHOTO_HINTS_RE = re.compile(r"figure|photo|image|caption", re.IGNORECASE)
READABILITY_ASSET_RE = re.compile(r"entry-content-asset", re.IGNORECASE)

PARAGRAPH_SCORE_TAGS = frozenset({"p", "li", "span", "pre"})
CHILD_CONTENT_TAGS = frozenset({"td", "blockquote", "ol", "ul", "dl"})
BAD_TAGS = frozenset({"address", "form"})

# (parent selector, child selector) pairs used by hNews-style markup
HNEWS_CONTENT_SELECTORS = [
    (".hentry", ".entry-content"),
    ("entry", ".entry-content"),
    (".entry", ".entry_content"),
    (".post", ".postbody"),
    (".post", ".post_body"),
    (".post", ".post-body"),
]

NON_TOP_CANDIDATE_TAGS = frozenset(
    {"br", "b", "i", "label", "hr", "area", "base", "basefont", "input", "img", "link", "meta"}
)

# --- Cleaning ---

SPACER_RE = re.compile(r"transparent|spacer|blank", re.IGNORECASE)

STRIP_OUTPUT_TAGS = ["title", "script", "noscript", "link", "style", "hr", "embed", "iframe", "object"]

CLEAN_CONDITIONALLY_TAGS = ["ul", "ol", "table", "div", "button", "form"]

HEADER_TAG_LIST = ["h2", "h3", "h4", "h5", "h6"]

WHITELIST_ATTRS = frozenset(
    {"src", "srcset", "sizes", "type", "href", "class", "id", "alt", "xlink:href", "width", "height"}
)

REMOVE_EMPTY_TAGS = ["p"]

SENTENCE_END_RE = re.compile(r"[.!?:;]$")

# --- Titles ---

TITLE_SPLITTERS_RE = re.compile(r"(: | - | \| | >> | » | – | — )")
DOMAIN_ENDINGS_RE = re.compile(r"\.com$|\.net$|\.org$|\.co\.uk$")

# --- Authors ---

CLEAN_AUTHOR_RE = re.compile(r"^\s*(posted |written )?by\b\s*:?\s*([^\r\n]*)", re.IGNORECASE)
BYLINE_SELECTORS_RE = [
    ("#byline", re.compile(r"^[\n\s]*By", re.IGNORECASE)),
    (".byline", re.compile(r"^[\n\s]*By", re.IGNORECASE)),
]

# --- Comments ---

COMMENT_HINTS_RE = re.compile(r"comment|disqus|respond", re.IGNORECASE)

# --- Links ---

TEXT_LINK_RE = re.compile(r"https?://")
