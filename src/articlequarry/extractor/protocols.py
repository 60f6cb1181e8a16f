"""
Protocols for the pluggable pieces of the extraction pipeline.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from bs4 import BeautifulSoup

from ..custom.models import CustomExtractorDefinition


@runtime_checkable
class CustomExtractorLookup(Protocol):
    """Read-only domain lookup for custom extractor definitions."""

    def lookup_by_domain(self, domain: str) -> CustomExtractorDefinition | None:
        """Return the definition registered under exactly ``domain``, if any."""
        ...


@runtime_checkable
class SiteMetadataExtractor(Protocol):
    """Extracts one site-level field from a document without modifying it."""

    name: str

    def extract(self, soup: BeautifulSoup, url: str, meta_cache: Sequence[str]) -> Any:
        """Return the field value or None.

        Args:
            soup: Prepared document
            url: Page URL
            meta_cache: Distinct meta names of the document
        """
        ...
