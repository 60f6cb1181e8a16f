"""
Registry of custom extractor definitions keyed by domain.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Iterator

import structlog
import yaml
from pydantic import ValidationError

from ..errors import InvalidExtractorDefinition, RegistryError
from .models import CustomExtractorDefinition

logger = structlog.get_logger(__name__)

BUILTIN_DEFINITIONS_PACKAGE = "articlequarry.custom"
BUILTIN_DEFINITIONS_DIR = "definitions"


def _validation_details(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def _iter_definition_data(data: Any) -> Iterator[Any]:
    if data is None:
        return
    if isinstance(data, dict) and "extractors" in data:
        data = data["extractors"]
    if isinstance(data, list):
        yield from data
    else:
        yield data


class CustomExtractorRegistry:
    """
    Exact-match lookup from domain to ``CustomExtractorDefinition``.

    A definition is indexed under its domain and each of its supported domains.
    Host normalization such as ``www.`` handling is left to the caller.
    """

    def __init__(self, definitions: Iterable[CustomExtractorDefinition] = ()) -> None:
        self._by_domain: dict[str, CustomExtractorDefinition] = {}
        self.logger = logger.bind(component="CustomExtractorRegistry")
        for definition in definitions:
            self.register(definition)

    def register(self, definition: CustomExtractorDefinition) -> None:
        for domain in definition.all_domains:
            existing = self._by_domain.get(domain)
            if existing is not None and existing is not definition:
                self.logger.warning(
                    "Replacing custom extractor",
                    domain=domain,
                    previous=existing.domain,
                    replacement=definition.domain,
                )
            self._by_domain[domain] = definition

    def lookup_by_domain(self, domain: str) -> CustomExtractorDefinition | None:
        return self._by_domain.get(domain.lower())

    def domains(self) -> list[str]:
        return sorted(self._by_domain)

    def __len__(self) -> int:
        return len(self._by_domain)

    def __contains__(self, domain: object) -> bool:
        return isinstance(domain, str) and domain.lower() in self._by_domain

    # --- Loading ---

    @staticmethod
    def parse_definitions(data: Any, source: str = "<mapping>") -> list[CustomExtractorDefinition]:
        """Validate raw mapping data into definitions, raising ``InvalidExtractorDefinition``."""
        definitions = []
        for index, item in enumerate(_iter_definition_data(data)):
            if not isinstance(item, dict):
                raise InvalidExtractorDefinition(source, f"entry {index} is not a mapping")
            try:
                definitions.append(CustomExtractorDefinition.model_validate(item))
            except ValidationError as e:
                domain = item.get("domain", f"entry {index}")
                raise InvalidExtractorDefinition(f"{source} ({domain})", _validation_details(e)) from e
        return definitions

    @classmethod
    def from_mapping(cls, data: Any, source: str = "<mapping>") -> CustomExtractorRegistry:
        return cls(cls.parse_definitions(data, source))

    def load_yaml(self, path: Path) -> int:
        """Register every definition in a YAML file or a directory of YAML files; returns the count."""
        path = Path(path)
        if path.is_dir():
            files = sorted([*path.glob("*.yaml"), *path.glob("*.yml")])
        elif path.is_file():
            files = [path]
        else:
            raise RegistryError(f"Extractor definition path not found: {path}")

        count = 0
        for file in files:
            with open(file, "r", encoding="utf-8") as f:
                try:
                    data = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise InvalidExtractorDefinition(str(file), f"invalid YAML: {e}") from e
            for definition in self.parse_definitions(data, str(file)):
                self.register(definition)
                count += 1

        self.logger.debug("Loaded extractor definitions", path=str(path), count=count)
        return count

    @classmethod
    def from_yaml(cls, path: Path) -> CustomExtractorRegistry:
        registry = cls()
        registry.load_yaml(path)
        return registry


def _load_builtin_definitions(registry: CustomExtractorRegistry) -> None:
    directory = resources.files(BUILTIN_DEFINITIONS_PACKAGE).joinpath(BUILTIN_DEFINITIONS_DIR)
    for entry in sorted(directory.iterdir(), key=lambda item: item.name):
        if not entry.name.endswith((".yaml", ".yml")):
            continue
        try:
            data = yaml.safe_load(entry.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise InvalidExtractorDefinition(entry.name, f"invalid YAML: {e}") from e
        for definition in registry.parse_definitions(data, entry.name):
            registry.register(definition)


def load_builtin_registry(extra_paths: Iterable[Path] = (), include_builtin: bool = True) -> CustomExtractorRegistry:
    """Registry holding the packaged site definitions plus any from ``extra_paths``."""
    registry = CustomExtractorRegistry()
    if include_builtin:
        _load_builtin_definitions(registry)
    for path in extra_paths:
        registry.load_yaml(Path(path))

    logger.info("Custom extractor registry ready", domains=len(registry))
    return registry
