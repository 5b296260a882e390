"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from contract2markdown.configuration.runtime_settings import Configuration


@dataclass(frozen=True)
class GenerationRequest:
    """Input contract for one generation run."""

    contract_path: str
    configuration: Configuration


@dataclass(frozen=True)
class GenerationOutcome:
    """Output contract for one completed generation run."""

    output_directory: Path
    written_paths: tuple[Path, ...]
    operation_count: int

    @property
    def written_count(self) -> int:
        return len(self.written_paths)


class GenerationProgress(Protocol):
    """Receives progress notifications while a run renders and writes pages."""

    def started(self, total_files: int) -> None: ...

    def file_written(self, file_name: str) -> None: ...
