"""
Pydantic models for declarative per-domain extractor definitions.

Selectors accept short YAML forms alongside the explicit ones:

    title: ["h1.headline", "h1"]                    # text selectors
    author: [["meta[name=author]", "value"]]        # attribute selector
    content:
      selectors: [{all: [".intro", ".body"]}]       # matches of every member, in document order
      clean: [".ad"]
      transforms: {noscript: noscript_to_span}
"""

from __future__ import annotations

from typing import Annotated, Any, Iterator, Literal, Union

import soupsieve as sv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .transforms import is_valid_transform


def _check_selector(selector: str) -> str:
    selector = selector.strip()
    if not selector:
        raise ValueError("selector must not be empty")
    try:
        sv.compile(selector)
    except sv.SelectorSyntaxError as e:
        raise ValueError(f"invalid CSS selector '{selector}': {e}") from e
    return selector


class TextSelector(BaseModel):
    """Text content of the matched elements."""

    kind: Literal["text"] = "text"
    selector: str

    @field_validator("selector")
    @classmethod
    def validate_selector(cls, v: str) -> str:
        return _check_selector(v)


class AttributeSelector(BaseModel):
    """Value of one attribute of the matched elements."""

    kind: Literal["attribute"] = "attribute"
    selector: str
    attribute: str = Field(min_length=1)

    @field_validator("selector")
    @classmethod
    def validate_selector(cls, v: str) -> str:
        return _check_selector(v)


class MultiMatchSelector(BaseModel):
    """A group of selectors whose matches are combined in document order.

    Members that match nothing are skipped; the group is a miss only when no
    member matches.
    """

    kind: Literal["all"] = "all"
    selectors: list[str] = Field(min_length=1)

    @field_validator("selectors")
    @classmethod
    def validate_selectors(cls, v: list[str]) -> list[str]:
        return [_check_selector(selector) for selector in v]


Selector = Annotated[Union[TextSelector, AttributeSelector, MultiMatchSelector], Field(discriminator="kind")]


def _expand_selector(value: Any) -> Any:
    if isinstance(value, str):
        return {"kind": "text", "selector": value}

    if isinstance(value, (list, tuple)):
        if len(value) == 2 and all(isinstance(item, str) for item in value):
            return {"kind": "attribute", "selector": value[0], "attribute": value[1]}
        raise ValueError(f"a list selector must be [selector, attribute], got {value!r}")

    if isinstance(value, dict) and "kind" not in value:
        if "all" in value:
            return {"kind": "all", "selectors": value["all"]}
        if "attribute" in value:
            return {"kind": "attribute", **value}
        if "selector" in value:
            return {"kind": "text", **value}

    return value


class FieldRule(BaseModel):
    """Ordered selectors for one field; the first one that yields a value wins."""

    model_config = ConfigDict(extra="forbid")

    selectors: list[Selector] = Field(min_length=1)
    allow_multiple: bool = Field(default=False, description="Join every match instead of keeping the first.")
    default_cleaner: bool = Field(default=True, description="Run the field's standard cleaner on the value.")
    timezone: str | None = Field(default=None, description="IANA zone for naive dates.")
    format: str | None = Field(default=None, description="Moment-style date format tried first.")

    @model_validator(mode="before")
    @classmethod
    def expand_shorthand(cls, data: Any) -> Any:
        if isinstance(data, (str, list)):
            return {"selectors": data if isinstance(data, list) else [data]}
        return data

    @field_validator("selectors", mode="before")
    @classmethod
    def expand_selectors(cls, v: Any) -> Any:
        if isinstance(v, (str, dict)):
            v = [v]
        return [_expand_selector(item) for item in v]


class ContentRule(FieldRule):
    """Content selectors plus elements to drop and named transforms to apply."""

    clean: list[str] = Field(default_factory=list)
    transforms: dict[str, str] = Field(default_factory=dict)

    @field_validator("clean")
    @classmethod
    def validate_clean(cls, v: list[str]) -> list[str]:
        return [_check_selector(selector) for selector in v]

    @field_validator("transforms")
    @classmethod
    def validate_transforms(cls, v: dict[str, str]) -> dict[str, str]:
        for selector, name in v.items():
            _check_selector(selector)
            if not is_valid_transform(name):
                raise ValueError(f"unknown transform '{name}' for selector '{selector}'")
        return v


class CustomExtractorDefinition(BaseModel):
    """Extraction rules for one site, registered under its domain and any supported domains."""

    model_config = ConfigDict(extra="forbid")

    domain: str = Field(min_length=1)
    supported_domains: list[str] = Field(default_factory=list)

    title: FieldRule | None = None
    author: FieldRule | None = None
    date_published: FieldRule | None = None
    lead_image_url: FieldRule | None = None
    dek: FieldRule | None = None
    excerpt: FieldRule | None = None
    content: ContentRule | None = None

    @field_validator("domain")
    @classmethod
    def normalize_domain(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("supported_domains")
    @classmethod
    def normalize_supported_domains(cls, v: list[str]) -> list[str]:
        return [domain.strip().lower() for domain in v if domain.strip()]

    def field_rules(self) -> Iterator[tuple[str, FieldRule]]:
        """Configured non-content rules as ``(field name, rule)`` pairs."""
        for name in ("title", "author", "date_published", "lead_image_url", "dek", "excerpt"):
            rule = getattr(self, name)
            if rule is not None:
                yield name, rule

    @property
    def all_domains(self) -> list[str]:
        return [self.domain, *self.supported_domains]
