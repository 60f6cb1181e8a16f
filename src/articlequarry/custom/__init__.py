"""
Per-domain custom extractors.

Definitions are pydantic models, usually loaded from YAML. The packaged site
definitions live in ``definitions/``.
"""

from __future__ import annotations

from .models import (
    AttributeSelector,
    ContentRule,
    CustomExtractorDefinition,
    FieldRule,
    MultiMatchSelector,
    Selector,
    TextSelector,
)
from .registry import CustomExtractorRegistry, load_builtin_registry
from .resolver import SelectorResolver
from .transforms import TRANSFORMS, apply_transforms, get_transform

__all__ = [
    "AttributeSelector",
    "ContentRule",
    "CustomExtractorDefinition",
    "CustomExtractorRegistry",
    "FieldRule",
    "MultiMatchSelector",
    "Selector",
    "SelectorResolver",
    "TRANSFORMS",
    "TextSelector",
    "apply_transforms",
    "get_transform",
    "load_builtin_registry",
]
