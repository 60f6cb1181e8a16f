"""Configuration models and the lazily loaded global settings."""

from __future__ import annotations

from .config import Config, ExtractionSettings, LazyConfig, LoggingConfig, find_config_file, settings

__all__ = ["Config", "ExtractionSettings", "LazyConfig", "LoggingConfig", "find_config_file", "settings"]
