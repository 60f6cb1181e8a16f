"""
Output formatting for extracted content: sanitization, Markdown and plain text.
"""

from __future__ import annotations

import re
from typing import Literal

import structlog
from bs4 import BeautifulSoup, Comment
from markdownify import MarkdownConverter

from ..dom.text import collapse_whitespace

logger = structlog.get_logger(__name__)

ContentType = Literal["html", "markdown", "text"]

ALLOWED_TAGS = frozenset(
    {
        "a",
        "abbr",
        "b",
        "blockquote",
        "br",
        "caption",
        "cite",
        "code",
        "dd",
        "del",
        "div",
        "dl",
        "dt",
        "em",
        "figcaption",
        "figure",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
        "i",
        "iframe",
        "img",
        "ins",
        "li",
        "mark",
        "ol",
        "p",
        "picture",
        "pre",
        "q",
        "s",
        "section",
        "small",
        "source",
        "span",
        "strong",
        "sub",
        "sup",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "time",
        "tr",
        "u",
        "ul",
        "video",
    }
)

# Dropped together with everything inside them
DANGEROUS_TAGS = frozenset({"script", "style", "object", "embed", "form", "input", "button", "textarea", "select"})

ALLOWED_ATTRS = frozenset(
    {"href", "src", "srcset", "sizes", "alt", "title", "width", "height", "class", "id", "datetime", "colspan", "rowspan"}
)
URL_ATTRS = frozenset({"href", "src"})
UNSAFE_URL_RE = re.compile(r"^\s*(javascript|vbscript|data:text/html)", re.IGNORECASE)


def sanitize_html(html: str) -> str:
    """
    Reduce an HTML fragment to an allowlist of tags and attributes.

    Scripts and other active content are removed with their children, unknown
    tags are unwrapped, event handlers and ``javascript:`` URLs are dropped.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "lxml")
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for node in soup.find_all(DANGEROUS_TAGS):
        node.decompose()

    root = soup.body or soup
    for node in root.find_all(True):
        if node.name not in ALLOWED_TAGS:
            node.unwrap()
            continue

        attrs = {}
        for key, value in node.attrs.items():
            key = key.lower()
            if key not in ALLOWED_ATTRS:
                continue
            if key in URL_ATTRS and UNSAFE_URL_RE.match(str(value)):
                continue
            attrs[key] = value
        node.attrs = attrs

    return root.decode_contents() if root is soup.body else str(root)


class ArticleMarkdownConverter(MarkdownConverter):
    """Markdown converter that drops anchor-only links and keeps code block languages."""

    def convert_a(self, el, text, *args, **kwargs):
        href = el.get("href", "")
        text = (text or "").strip()
        if not href or href == "#":
            return text
        return super().convert_a(el, text, *args, **kwargs)

    def convert_pre(self, el, text, *args, **kwargs):
        code = el.find("code")
        language = ""
        if code is not None:
            for cls in code.get("class", []):
                if cls.startswith("language-"):
                    language = cls[len("language-") :]
                    break
            text = code.get_text()
        else:
            text = el.get_text()
        text = text.strip("\n")
        return f"\n```{language}\n{text}\n```\n"


def convert_to_markdown(html: str) -> str:
    """Convert HTML to Markdown, degrading to plain text when conversion fails."""
    if not html:
        return ""
    try:
        markdown = ArticleMarkdownConverter(heading_style="ATX", bullets="-").convert(html)
    except Exception as e:
        logger.warning("Markdown conversion failed, falling back to text", error=str(e), error_type=type(e).__name__)
        return convert_to_text(html)
    return re.sub(r"\n{3,}", "\n\n", markdown).strip()


def convert_to_text(html: str) -> str:
    """Plain text of an HTML fragment with block boundaries kept as spaces."""
    if not html:
        return ""
    return collapse_whitespace(BeautifulSoup(html, "lxml").get_text(" "))


def render_content(html: str, content_type: ContentType = "html") -> str:
    """Render sanitized content in the requested representation."""
    sanitized = sanitize_html(html)
    if content_type == "markdown":
        return convert_to_markdown(sanitized)
    if content_type == "text":
        return convert_to_text(sanitized)
    return sanitized
