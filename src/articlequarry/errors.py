"""
Exception hierarchy for ArticleQuarry.

Field extractors never raise for a miss; these errors cover bad input,
cancellation and invalid configuration.
"""

from __future__ import annotations


class ArticleQuarryError(Exception):
    """Base class for all ArticleQuarry errors."""

    pass


class InvalidURLError(ArticleQuarryError, ValueError):
    """The target URL has no http(s) scheme or no host."""

    def __init__(self, url: str, reason: str = "URL must have an http or https scheme and a host") -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL '{url}': {reason}")


class ExtractionCancelled(ArticleQuarryError):
    """Extraction stopped at a phase boundary because it was cancelled or timed out."""

    def __init__(self, phase: str, reason: str = "cancelled") -> None:
        self.phase = phase
        self.reason = reason
        super().__init__(f"Extraction {reason} after {phase}")


class RegistryError(ArticleQuarryError):
    """A custom extractor registry operation failed."""

    pass


class InvalidExtractorDefinition(RegistryError):
    """A custom extractor definition did not validate."""

    def __init__(self, source: str, details: str) -> None:
        self.source = source
        self.details = details
        super().__init__(f"Invalid extractor definition in {source}: {details}")


class ConfigurationError(ArticleQuarryError):
    """Configuration could not be loaded or validated."""

    pass
