"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

DEFAULT_OUTPUT_DIRECTORY = "output_md"
DEFAULT_PARALLELISM = 4


class SchemaPageLayout(str, Enum):
    """How standalone schema pages are written next to the operation pages."""

    NONE = "none"
    SINGLE = "single"
    INDEPENDENT = "independent"


@dataclass(frozen=True)
class OutputSettings:
    """Destination folder and optional schema page layout."""

    directory: Path
    schema_pages: SchemaPageLayout = SchemaPageLayout.NONE


@dataclass(frozen=True)
class GenerationSettings:
    """Rendering concurrency settings."""

    parallelism: int = DEFAULT_PARALLELISM


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    output: OutputSettings
    metadata: Mapping[str, str] = field(default_factory=dict)
    generation: GenerationSettings = field(default_factory=GenerationSettings)
