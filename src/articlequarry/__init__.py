"""
ArticleQuarry - readable article extraction from HTML documents.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .custom import CustomExtractorDefinition, CustomExtractorRegistry, load_builtin_registry
from .errors import (
    ArticleQuarryError,
    ConfigurationError,
    ExtractionCancelled,
    InvalidExtractorDefinition,
    InvalidURLError,
    RegistryError,
)
from .extractor import ArticleExtractor, ArticleResult, ExtractionOptions

__all__ = [
    "__version__",
    "ArticleExtractor",
    "ArticleQuarryError",
    "ArticleResult",
    "Config",
    "ConfigurationError",
    "CustomExtractorDefinition",
    "CustomExtractorRegistry",
    "ExtractionCancelled",
    "ExtractionOptions",
    "InvalidExtractorDefinition",
    "InvalidURLError",
    "RegistryError",
    "load_builtin_registry",
]
