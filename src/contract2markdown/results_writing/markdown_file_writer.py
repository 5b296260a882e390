"""Markdown file writer service."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from contract2markdown.document_generation import GeneratedFile


def write_generated_files(
    files: Iterable[GeneratedFile],
    output_dir: Path | str,
    *,
    on_file_written: Callable[[Path], None] | None = None,
) -> list[Path]:
    """Write every generated page below ``output_dir`` and return the written paths.

    Raises:
      OSError: If a folder cannot be created or a file cannot be written.
    """
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for generated in files:
        target = destination.joinpath(*generated.file_name.split("/"))
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.content, encoding="utf-8")
        written.append(target)
        if on_file_written is not None:
            on_file_written(target)
    return written
