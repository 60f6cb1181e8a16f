"""
Shared test configuration for ArticleQuarry.

Provides HTML documents, prepared soups, settings and registries used across
the unit and integration suites.
"""

# Standard library imports
from pathlib import Path
from typing import Callable

# Third-party imports
import pytest
from bs4 import BeautifulSoup

# Local imports
from articlequarry.config.config import ExtractionSettings, LazyConfig
from articlequarry.custom.models import CustomExtractorDefinition
from articlequarry.custom.registry import CustomExtractorRegistry
from articlequarry.dom.prepare import load_document
from articlequarry.extractor.manager import ArticleExtractor

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep the lazy global settings from reading config files of the working directory."""
    monkeypatch.chdir(tmp_path)
    LazyConfig.reset()
    yield
    LazyConfig.reset()


# ============================================================================
# HTML Documents
# ============================================================================

ARTICLE_PARAGRAPHS = [
    "Community gardens have spread across the city over the past decade, turning vacant lots into "
    "productive green spaces that feed thousands of families every summer.",
    "Organizers say the movement grew out of necessity, as neighborhoods without grocery stores looked "
    "for ways to bring fresh vegetables, herbs, and fruit closer to home.",
    "City officials, once skeptical, now offer water access, soil testing, and small grants to groups "
    "that agree to keep their plots open to the public on weekends.",
]

ARTICLE_HTML = f"""
<!DOCTYPE html>
<html lang="en-US">
<head>
  <title>A Quiet Revolution in Urban Gardening | City Post</title>
  <meta property="og:site_name" content="City Post">
  <meta property="og:title" content="A Quiet Revolution in Urban Gardening">
  <meta property="og:image" content="https://cdn.citypost.example/images/gardens-large.jpg">
  <meta name="byl" content="By Jane Rivera">
  <meta name="description" content="How vacant lots became the greenest blocks in town.">
  <meta property="article:published_time" content="2023-05-14T09:30:00Z">
  <link rel="icon" href="/static/favicon.png">
  <script>var tracking = true;</script>
</head>
<body>
  <div class="navigation-menu"><a href="/">Home</a> <a href="/news">News</a> <a href="/sports">Sports</a></div>
  <article class="post">
    <h1>A Quiet Revolution in Urban Gardening</h1>
    <p>{ARTICLE_PARAGRAPHS[0]}</p>
    <p>{ARTICLE_PARAGRAPHS[1]}</p>
    <figure><img src="/images/garden-plot.jpg" alt="Volunteers planting tomatoes" width="640"></figure>
    <p>{ARTICLE_PARAGRAPHS[2]}</p>
  </article>
  <div class="comments-section"><p>Great story!</p></div>
  <footer class="footer">Copyright City Post</footer>
</body>
</html>
"""

MINIMAL_ARTICLE_HTML = """
<html>
<head><title>Minimal Title</title></head>
<body>
  <article>
    <h1>Minimal Title</h1>
    <p>This paragraph is comfortably longer than eighty characters so that it reads like real prose,
    with a comma or two, and it should survive every cleaning pass of the content extractor.</p>
  </article>
</body>
</html>
"""

CUSTOM_SITE_HTML = """
<html>
<head><title>Example Story</title></head>
<body>
  <h2 class="headline">Example Story Headline</h2>
  <span class="writer">Sam Writer</span>
  <p class="chunk">First chunk of the story, which sets the scene.</p>
  <aside>Unrelated sidebar</aside>
  <p class="chunk">Second chunk of the story, where things happen.</p>
  <p class="chunk">Third chunk of the story, with the ending.</p>
</body>
</html>
"""


@pytest.fixture
def article_html() -> str:
    return ARTICLE_HTML


@pytest.fixture
def minimal_article_html() -> str:
    return MINIMAL_ARTICLE_HTML


@pytest.fixture
def custom_site_html() -> str:
    return CUSTOM_SITE_HTML


@pytest.fixture
def article_soup() -> BeautifulSoup:
    """Prepared version of ``ARTICLE_HTML``."""
    return load_document(ARTICLE_HTML)


@pytest.fixture
def make_soup() -> Callable[[str], BeautifulSoup]:
    """Factory that parses and prepares an HTML string."""
    return load_document


# ============================================================================
# Extractor Fixtures
# ============================================================================


@pytest.fixture
def extraction_settings() -> ExtractionSettings:
    return ExtractionSettings()


@pytest.fixture
def example_definition() -> CustomExtractorDefinition:
    """Custom extractor for example.com matching three content chunks."""
    return CustomExtractorDefinition.model_validate(
        {
            "domain": "example.com",
            "title": [".headline"],
            "author": [".writer"],
            "content": {"selectors": [".chunk"]},
        }
    )


@pytest.fixture
def empty_registry() -> CustomExtractorRegistry:
    return CustomExtractorRegistry()


@pytest.fixture
def example_registry(example_definition: CustomExtractorDefinition) -> CustomExtractorRegistry:
    return CustomExtractorRegistry([example_definition])


@pytest.fixture
def generic_extractor(empty_registry, extraction_settings) -> ArticleExtractor:
    """Extractor without any custom definitions."""
    return ArticleExtractor(registry=empty_registry, settings=extraction_settings)
