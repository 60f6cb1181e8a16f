"""
ArticleQuarry extraction module.

Generic field extractors, the content heuristics, site metadata extractors,
output formatters and the ``ArticleExtractor`` orchestrator.
"""

from .author import GenericAuthorExtractor
from .content import ContentOptions, GenericContentExtractor
from .date import GenericDateExtractor
from .dek import GenericDekExtractor
from .formatters import convert_to_markdown, convert_to_text, render_content, sanitize_html
from .lead_image import GenericLeadImageExtractor
from .manager import ArticleExtractor
from .models import ArticleResult, ExtractionOptions
from .protocols import CustomExtractorLookup, SiteMetadataExtractor
from .site_metadata import SITE_METADATA_EXTRACTORS
from .title import GenericTitleExtractor

__all__ = [
    "ArticleExtractor",
    "ArticleResult",
    "ContentOptions",
    "CustomExtractorLookup",
    "ExtractionOptions",
    "GenericAuthorExtractor",
    "GenericContentExtractor",
    "GenericDateExtractor",
    "GenericDekExtractor",
    "GenericLeadImageExtractor",
    "GenericTitleExtractor",
    "SITE_METADATA_EXTRACTORS",
    "SiteMetadataExtractor",
    "convert_to_markdown",
    "convert_to_text",
    "render_content",
    "sanitize_html",
]
