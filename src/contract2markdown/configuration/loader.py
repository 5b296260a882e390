"""Configuration loader service."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_OUTPUT_DIRECTORY,
    DEFAULT_PARALLELISM,
    Configuration,
    GenerationSettings,
    OutputSettings,
    SchemaPageLayout,
)


class ConfigurationError(Exception):
    """Raised when the configuration file or an override is invalid."""


def default_configuration() -> Configuration:
    """Return the configuration used when no configuration file is given."""
    return Configuration(
        path=None,
        output=OutputSettings(directory=Path.cwd() / DEFAULT_OUTPUT_DIRECTORY),
    )


def load_configuration(config_path: Path | str | None) -> Configuration:
    """Load and validate the configuration file, or return defaults when no path is given."""
    if config_path is None:
        return default_configuration()

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        output=_parse_output_section(parsed.get("output"), path.parent),
        metadata=_parse_metadata_section(parsed.get("metadata")),
        generation=_parse_generation_section(parsed.get("generation")),
    )


def apply_overrides(
    configuration: Configuration,
    *,
    output_dir: Path | str | None = None,
    metadata_entries: Sequence[str] = (),
    schema_pages: str | None = None,
    parallelism: int | None = None,
) -> Configuration:
    """Return a configuration with command line values taking precedence."""
    output = configuration.output
    if output_dir is not None:
        output = dataclasses.replace(output, directory=Path(output_dir).resolve())
    if schema_pages is not None:
        output = dataclasses.replace(
            output, schema_pages=_parse_schema_page_layout(schema_pages, "--schema-pages")
        )

    generation = configuration.generation
    if parallelism is not None:
        generation = GenerationSettings(
            parallelism=_require_positive_int(parallelism, "--parallelism")
        )

    metadata = merge_metadata(configuration.metadata, parse_metadata_entries(metadata_entries))
    return dataclasses.replace(
        configuration, output=output, metadata=metadata, generation=generation
    )


def parse_metadata_entries(entries: Sequence[str]) -> dict[str, str]:
    """Parse ``key:value`` entries into front matter metadata.

    Surrounding single or double quotes are stripped from values. Entries
    without a colon or with an empty key are ignored.
    """
    metadata: dict[str, str] = {}
    for entry in entries:
        key, separator, value = entry.partition(":")
        key = key.strip()
        if not separator or not key:
            continue
        metadata = merge_metadata(metadata, {key: _strip_quotes(value.strip())})
    return metadata


def merge_metadata(base: Mapping[str, str], updates: Mapping[str, str]) -> dict[str, str]:
    """Merge metadata with case-insensitive keys; the first spelling of a key is kept."""
    merged = dict(base)
    spelling = {key.casefold(): key for key in merged}
    for key, value in updates.items():
        existing = spelling.setdefault(key.casefold(), key)
        merged[existing] = value
    return merged


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _optional_mapping(value, "output")
    directory_value = section.get("directory", DEFAULT_OUTPUT_DIRECTORY)
    directory = _require_non_empty_string(directory_value, "output.directory")
    schema_pages = _parse_schema_page_layout(
        section.get("schema_pages", SchemaPageLayout.NONE.value), "output.schema_pages"
    )
    return OutputSettings(
        directory=_resolve_path(base_path, directory), schema_pages=schema_pages
    )


def _parse_metadata_section(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError("Configuration section 'metadata' must be a mapping.")
    metadata: dict[str, str] = {}
    for key, item in value.items():
        if not isinstance(key, str) or not key.strip():
            raise ConfigurationError("metadata keys must be non-empty strings.")
        if isinstance(item, (Mapping, list)):
            raise ConfigurationError(f"metadata.{key} must be a scalar value.")
        metadata = merge_metadata(metadata, {key.strip(): "" if item is None else str(item)})
    return metadata


def _parse_generation_section(value: Any) -> GenerationSettings:
    section = _optional_mapping(value, "generation")
    parallelism = _require_positive_int(
        section.get("parallelism", DEFAULT_PARALLELISM), "generation.parallelism"
    )
    return GenerationSettings(parallelism=parallelism)


def _parse_schema_page_layout(value: Any, field_name: str) -> SchemaPageLayout:
    raw = _require_non_empty_string(value, field_name).lower()
    try:
        return SchemaPageLayout(raw)
    except ValueError as exc:
        allowed = ", ".join(layout.value for layout in SchemaPageLayout)
        raise ConfigurationError(f"{field_name} must be one of: {allowed}.") from exc


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
