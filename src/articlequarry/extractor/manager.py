"""
Field extraction orchestrator for ArticleQuarry.

Chooses between a custom extractor definition and the generic heuristics,
fills gaps with fallbacks and merges the site-level metadata into one
``ArticleResult``.
"""

from __future__ import annotations

import asyncio
import functools
from typing import Any, Callable, Sequence
from urllib.parse import urlparse

import structlog
from bs4 import BeautifulSoup

from ..cleaners.title import clean_title
from ..config.config import ExtractionSettings
from ..config.config import settings as global_settings
from ..custom.models import CustomExtractorDefinition
from ..custom.registry import load_builtin_registry
from ..custom.resolver import SelectorResolver
from ..dom.meta import build_meta_cache
from ..dom.prepare import load_document
from ..dom.text import collapse_whitespace, ellipsize, get_direction
from ..errors import ExtractionCancelled, InvalidURLError
from .author import GenericAuthorExtractor
from .content import GenericContentExtractor
from .date import GenericDateExtractor
from .dek import GenericDekExtractor
from .formatters import convert_to_text, render_content
from .lead_image import GenericLeadImageExtractor
from .models import ArticleResult, ExtractionOptions, FieldValues
from .protocols import CustomExtractorLookup, SiteMetadataExtractor
from .site_metadata import SITE_METADATA_EXTRACTORS
from .title import GenericTitleExtractor

logger = structlog.get_logger(__name__)

CONTENT_FALLBACK_SELECTORS = [
    "article, .article, #article, .content, #content, .entry-content",
    "main",
    "[role=main]",
    "body",
]

WWW_PREFIX = "www."


def validate_url(url: str) -> str:
    """Return the lowercased host of ``url``, raising ``InvalidURLError`` when it is not http(s)."""
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError as e:
        raise InvalidURLError(url, str(e)) from e

    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(url, "URL scheme must be http or https")
    if not host:
        raise InvalidURLError(url, "URL has no host")
    return host.lower()


def lookup_domains(host: str) -> list[str]:
    """Registry keys to try for ``host``: exact, then without ``www.``, then with it."""
    host = host.lower()
    if host.startswith(WWW_PREFIX):
        return [host, host[len(WWW_PREFIX) :]]
    return [host, WWW_PREFIX + host]


class ArticleExtractor:
    """
    Extracts article fields and site metadata from prepared documents.

    Features:
    - Per-domain custom extractors with generic fallback per field
    - Concurrent site metadata and field extraction off the event loop
    - Cooperative cancellation and deadlines at phase boundaries
    - HTML, Markdown or plain text content
    """

    def __init__(
        self,
        registry: CustomExtractorLookup | None = None,
        settings: ExtractionSettings | None = None,
    ) -> None:
        """
        Initialize the ArticleExtractor.

        Args:
            registry: Custom extractor lookup; the packaged definitions are loaded when omitted
            settings: Extraction settings; the global configuration is used when omitted
        """
        self.settings = settings if settings is not None else global_settings.extraction
        if registry is None:
            registry = load_builtin_registry(
                self.settings.definition_paths,
                include_builtin=self.settings.include_builtin_extractors,
            )
        self.registry = registry
        self.logger = logger.bind(component="ArticleExtractor")

        self.site_extractors: list[SiteMetadataExtractor] = [cls() for cls in SITE_METADATA_EXTRACTORS]
        self.title_extractor = GenericTitleExtractor()
        self.author_extractor = GenericAuthorExtractor()
        self.date_extractor = GenericDateExtractor()
        self.dek_extractor = GenericDekExtractor()
        self.lead_image_extractor = GenericLeadImageExtractor()
        self.content_extractor = GenericContentExtractor()

    # --- Entry points ---

    async def parse(
        self,
        html: str,
        url: str,
        options: ExtractionOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ArticleResult:
        """
        Parse raw HTML and extract every field.

        Invalid URLs come back as a failure result instead of raising.
        ``ExtractionCancelled`` still propagates.

        Args:
            html: Raw HTML of the page
            url: URL the page was fetched from
            options: Per-call extraction options
            cancel_event: Set to stop extraction at the next phase boundary

        Returns:
            ArticleResult, never None
        """
        try:
            validate_url(url)
        except InvalidURLError as e:
            self.logger.warning("Rejected document URL", url=url, reason=e.reason)
            return ArticleResult.failure(url, str(e))

        loop = asyncio.get_event_loop()
        soup = await loop.run_in_executor(None, load_document, html or "")
        return await self.extract_all_fields(soup, url, options, cancel_event)

    async def extract_all_fields(
        self,
        soup: BeautifulSoup,
        url: str,
        options: ExtractionOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ArticleResult:
        """
        Extract every field of a prepared document.

        Args:
            soup: Prepared document; it is only read
            url: URL of the document
            options: Per-call extraction options
            cancel_event: Set to stop extraction at the next phase boundary

        Returns:
            ArticleResult with every field that could be extracted

        Raises:
            InvalidURLError: ``url`` has no http(s) scheme or no host
            ExtractionCancelled: ``cancel_event`` was set or the deadline passed
        """
        options = options or ExtractionOptions(
            content_type=self.settings.default_content_type,
            fallback=self.settings.fallback,
        )
        domain = validate_url(url)

        loop = asyncio.get_event_loop()
        timeout = options.timeout_seconds or self.settings.timeout_seconds
        deadline = loop.time() + timeout if timeout else None

        def check_cancelled(phase: str) -> None:
            if cancel_event is not None and cancel_event.is_set():
                raise ExtractionCancelled(phase)
            if deadline is not None and loop.time() >= deadline:
                raise ExtractionCancelled(phase, reason="timed out")

        with structlog.contextvars.bound_contextvars(document_url=url):
            meta_cache = build_meta_cache(soup)
            values = FieldValues()
            lock = asyncio.Lock()

            await self._extract_site_metadata(soup, url, meta_cache, values, lock)
            check_cancelled("site metadata")

            definition = self.resolve_custom_extractor(domain, options)
            extractor_used = None
            if definition is not None:
                extractor_used = f"custom:{definition.domain}"
                await self._extract_custom_fields(definition, soup, url, values)
                if options.fallback:
                    await self._extract_generic_fields(soup, url, meta_cache, values, lock, check_cancelled)
            else:
                await self._extract_generic_fields(soup, url, meta_cache, values, lock, check_cancelled)

            if options.fallback and not values.get("title"):
                values.set_if_empty("title", self._fallback_title(soup, url))

            plain_content = False
            if options.fallback and not values.get("content"):
                check_cancelled("field extraction")
                fallback_content = self._fallback_content(soup)
                if fallback_content:
                    values.set_if_empty("content", fallback_content)
                    plain_content = True

            result = self._build_result(url, domain, values, options, extractor_used, plain_content)

        self.logger.info(
            "Extraction completed",
            url=url,
            extractor=extractor_used or "generic",
            word_count=result.word_count,
            has_title=bool(result.title),
        )
        return result

    # --- Custom extractor resolution ---

    def resolve_custom_extractor(
        self, domain: str, options: ExtractionOptions | None = None
    ) -> CustomExtractorDefinition | None:
        """The explicit override from ``options``, else the registry entry for the host."""
        if options is not None and options.custom_extractor is not None:
            return options.custom_extractor

        for candidate in lookup_domains(domain):
            definition = self.registry.lookup_by_domain(candidate)
            if definition is not None:
                self.logger.debug("Using custom extractor", domain=domain, matched=candidate)
                return definition
        return None

    # --- Phases ---

    async def _run(self, name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run a blocking field extractor in the default executor; a failure counts as a miss."""
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(fn, *args, **kwargs))
        except Exception as e:
            self.logger.warning("Field extractor failed", field=name, error=str(e), error_type=type(e).__name__)
            return None

    async def _extract_site_metadata(
        self,
        soup: BeautifulSoup,
        url: str,
        meta_cache: Sequence[str],
        values: FieldValues,
        lock: asyncio.Lock,
    ) -> None:
        async def run(extractor: SiteMetadataExtractor) -> None:
            value = await self._run(extractor.name, extractor.extract, soup, url, meta_cache)
            async with lock:
                values.set_if_empty(extractor.name, value)

        await asyncio.gather(*(run(extractor) for extractor in self.site_extractors))

    async def _extract_custom_fields(
        self,
        definition: CustomExtractorDefinition,
        soup: BeautifulSoup,
        url: str,
        values: FieldValues,
    ) -> None:
        resolver = SelectorResolver(soup, url)
        resolved = await self._run("custom", resolver.resolve, definition) or {}
        for name, value in resolved.items():
            values.set_if_empty(name, value)

    async def _extract_generic_fields(
        self,
        soup: BeautifulSoup,
        url: str,
        meta_cache: Sequence[str],
        values: FieldValues,
        lock: asyncio.Lock,
        check_cancelled: Callable[[str], None],
    ) -> None:
        """Fill every article field that is still empty from the generic extractors."""

        async def fill(name: str, fn: Callable[..., Any], *args: Any) -> None:
            if values.get(name):
                return
            value = await self._run(name, fn, *args)
            async with lock:
                values.set_if_empty(name, value)

        await asyncio.gather(
            fill("title", self.title_extractor.extract, soup, url, meta_cache),
            fill("author", self.author_extractor.extract, soup, meta_cache),
            fill("date_published", self.date_extractor.extract, soup, url, meta_cache),
            fill("dek", self.dek_extractor.extract, soup, meta_cache),
        )
        check_cancelled("field extraction")

        await fill("lead_image_url", self.lead_image_extractor.extract, soup, url, meta_cache)
        await fill("content", self.content_extractor.extract, str(soup), values.get("title") or "", url)

        content = values.get("content") or ""
        if not content:
            return

        excerpt = values.get("excerpt") or ellipsize(convert_to_text(content), self.settings.excerpt_length)
        await fill("lead_image_url", self.lead_image_extractor.extract, soup, url, meta_cache, content)
        await fill("dek", self.dek_extractor.extract, soup, meta_cache, excerpt)

    # --- Fallbacks ---

    @staticmethod
    def _fallback_title(soup: BeautifulSoup, url: str) -> str | None:
        for node in (soup.title, soup.find("h1")):
            if node is None:
                continue
            title = clean_title(node.get_text(), url, soup)
            if title:
                return title
        return None

    @staticmethod
    def _fallback_content(soup: BeautifulSoup) -> str | None:
        for selector in CONTENT_FALLBACK_SELECTORS:
            node = soup.select_one(selector)
            if node is None:
                continue
            text = node.get_text().strip()
            if text:
                return text
        return None

    # --- Result assembly ---

    def _build_result(
        self,
        url: str,
        domain: str,
        values: FieldValues,
        options: ExtractionOptions,
        extractor_used: str | None,
        plain_content: bool = False,
    ) -> ArticleResult:
        """Assemble the result; ``plain_content`` marks fallback text that is kept verbatim."""
        content = values.get("content")
        rendered = None
        text = ""
        if content and plain_content:
            rendered = content
            text = content
        elif content:
            rendered = render_content(content, options.content_type) or None
            text = convert_to_text(content)

        excerpt = values.get("excerpt") or (ellipsize(text, self.settings.excerpt_length) if text else None)
        title = values.get("title")

        return ArticleResult(
            url=url,
            domain=domain,
            title=title,
            content=rendered,
            author=values.get("author"),
            date_published=values.get("date_published"),
            lead_image_url=values.get("lead_image_url"),
            dek=values.get("dek"),
            excerpt=excerpt,
            word_count=len(text.split()),
            direction=get_direction(collapse_whitespace(title or "")),
            extractor_used=extractor_used,
            site_name=values.get("site_name"),
            site_title=values.get("site_title"),
            site_image=values.get("site_image"),
            favicon=values.get("favicon"),
            description=values.get("description"),
            language=values.get("language"),
        )
