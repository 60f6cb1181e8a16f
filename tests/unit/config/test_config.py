"""
Unit tests for configuration loading.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from articlequarry.config.config import Config, ExtractionSettings, LazyConfig, LoggingConfig, find_config_file
from articlequarry.errors import ConfigurationError


class TestConfigModels:
    def test_defaults(self):
        config = Config()
        assert config.project_name == "ArticleQuarry"
        assert config.extraction.default_content_type == "html"
        assert config.extraction.fallback is True
        assert config.extraction.excerpt_length == 160
        assert config.extraction.timeout_seconds is None
        assert config.extraction.include_builtin_extractors is True
        assert config.logging.log_level == "INFO"

    def test_definition_paths_from_string(self):
        settings = ExtractionSettings(definition_paths="sites/a.yaml,sites/extra")
        assert settings.definition_paths == [Path("sites/a.yaml"), Path("sites/extra")]

    def test_excerpt_length_lower_bound(self):
        with pytest.raises(ValidationError):
            ExtractionSettings(excerpt_length=5)

    def test_log_level_is_normalized(self):
        assert LoggingConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            LoggingConfig(log_level="chatty")

    def test_log_file_parent_is_created(self, tmp_path: Path):
        target = tmp_path / "logs" / "nested" / "articlequarry.log"
        config = LoggingConfig(log_file=str(target))
        assert config.log_file == str(target)
        assert target.parent.is_dir()

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ARTICLEQUARRY_EXTRACTION__EXCERPT_LENGTH", "300")
        monkeypatch.setenv("ARTICLEQUARRY_LOGGING__LOG_LEVEL", "warning")
        config = Config()
        assert config.extraction.excerpt_length == 300
        assert config.logging.log_level == "WARNING"


class TestFromYaml:
    """Test cases for ``Config.from_yaml``."""

    def test_loads_values(self, tmp_path: Path):
        path = tmp_path / "articlequarry.yaml"
        path.write_text(
            "extraction:\n"
            "  excerpt_length: 200\n"
            "  default_content_type: markdown\n"
            "  timeout_seconds: 2.5\n"
            "logging:\n"
            "  log_level: debug\n"
        )
        config = Config.from_yaml(path)
        assert config.extraction.excerpt_length == 200
        assert config.extraction.default_content_type == "markdown"
        assert config.extraction.timeout_seconds == 2.5
        assert config.logging.log_level == "DEBUG"

    def test_empty_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Config.from_yaml(path).extraction.excerpt_length == 160

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("extraction: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            Config.from_yaml(path)

    def test_invalid_values(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("extraction:\n  default_content_type: pdf\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            Config.from_yaml(path)


class TestConfigDiscovery:
    def test_no_config_file(self):
        assert find_config_file() is None

    def test_prefers_project_file_over_example(self, tmp_path: Path):
        (tmp_path / "config.example.yaml").write_text("")
        assert find_config_file() == tmp_path / "config.example.yaml"

        (tmp_path / "config.yaml").write_text("")
        assert find_config_file() == tmp_path / "config.yaml"

        (tmp_path / "articlequarry.yaml").write_text("")
        assert find_config_file() == tmp_path / "articlequarry.yaml"


class TestLazyConfig:
    def test_loads_file_on_first_access(self, tmp_path: Path):
        (tmp_path / "articlequarry.yaml").write_text("extraction:\n  excerpt_length: 99\n")
        assert LazyConfig().extraction.excerpt_length == 99

    def test_reset_reloads(self, tmp_path: Path):
        lazy = LazyConfig()
        assert lazy.extraction.excerpt_length == 160

        (tmp_path / "articlequarry.yaml").write_text("extraction:\n  excerpt_length: 120\n")
        assert lazy.extraction.excerpt_length == 160

        LazyConfig.reset()
        assert lazy.extraction.excerpt_length == 120

    def test_invalid_file_falls_back_to_defaults(self, tmp_path: Path):
        (tmp_path / "articlequarry.yaml").write_text("extraction:\n  excerpt_length: 1\n")
        assert LazyConfig().extraction.excerpt_length == 160
