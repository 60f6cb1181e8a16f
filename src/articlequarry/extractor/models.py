"""
Data models for extraction options and results.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..custom.models import CustomExtractorDefinition


class ExtractionOptions(BaseModel):
    """Per-call extraction options."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    fetch_all_pages: bool = Field(default=False, description="Reserved; multi-page merging is not implemented.")
    fallback: bool = Field(default=True, description="Fill fields the custom extractor missed with generic ones.")
    content_type: Literal["html", "markdown", "text"] = Field(default="html", description="Content representation.")
    headers: dict[str, str] = Field(default_factory=dict, description="Passed through untouched.")
    custom_extractor: CustomExtractorDefinition | None = Field(
        default=None, description="Use this definition instead of the registry lookup."
    )
    timeout_seconds: float | None = Field(default=None, gt=0, description="Deadline checked at phase boundaries.")


@dataclass(slots=True, frozen=True)
class ArticleResult:
    """Structured result of one extraction. Every field except ``url`` and ``domain`` is optional."""

    url: str
    domain: str

    title: str | None = None
    content: str | None = None
    author: str | None = None
    date_published: datetime | None = None
    lead_image_url: str | None = None
    dek: str | None = None
    excerpt: str | None = None
    word_count: int = 0
    direction: str = ""

    total_pages: int = 1
    rendered_pages: int = 1
    extractor_used: str | None = None

    site_name: str | None = None
    site_title: str | None = None
    site_image: str | None = None
    favicon: str | None = None
    description: str | None = None
    language: str | None = None

    error: bool = False
    message: str | None = None

    def __post_init__(self) -> None:
        if self.date_published is not None and self.date_published.tzinfo is None:
            raise ValueError("date_published must be timezone-aware")
        if self.word_count < 0:
            raise ValueError("word_count must not be negative")

    @classmethod
    def failure(cls, url: str, message: str, domain: str = "") -> ArticleResult:
        return cls(url=url, domain=domain, error=True, message=message)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; dates become ISO 8601 strings."""
        data = asdict(self)
        if self.date_published is not None:
            data["date_published"] = self.date_published.isoformat()
        return data

    def format_markdown(self) -> str:
        """Readable Markdown report with the site block, the article block and the content."""
        lines = [f"# {self.title or 'Untitled'}", ""]

        site = [
            ("Site", self.site_name),
            ("Site title", self.site_title),
            ("Description", self.description),
            ("Language", self.language),
            ("Favicon", self.favicon),
            ("Site image", self.site_image),
        ]
        article = [
            ("URL", self.url),
            ("Author", self.author),
            ("Published", self.date_published.isoformat() if self.date_published else None),
            ("Lead image", self.lead_image_url),
            ("Dek", self.dek),
            ("Word count", str(self.word_count) if self.word_count else None),
            ("Extractor", self.extractor_used or "generic"),
        ]

        for heading, block in (("Site", site), ("Article", article)):
            entries = [f"- **{label}:** {value}" for label, value in block if value]
            if entries:
                lines.extend([f"## {heading}", "", *entries, ""])

        if self.excerpt:
            lines.extend([f"> {self.excerpt}", ""])

        if self.content:
            lines.extend(["## Content", "", self.content, ""])

        return "\n".join(lines).rstrip() + "\n"


@dataclass(slots=True)
class FieldValues:
    """In-progress field map written by the concurrent extraction tasks."""

    values: dict[str, Any] = field(default_factory=dict)

    def set_if_empty(self, name: str, value: Any) -> None:
        if value and not self.values.get(name):
            self.values[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def __setitem__(self, name: str, value: Any) -> None:
        self.values[name] = value
