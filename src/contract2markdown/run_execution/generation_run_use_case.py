"""Run execution use-case service."""

from __future__ import annotations

import logging
from pathlib import Path

from contract2markdown.contract_loading import (
    ContractError,
    ContractNotFoundError,
    load_contract_document,
)
from contract2markdown.document_generation import (
    expected_file_count,
    generate_documents,
    list_operations,
)
from contract2markdown.results_writing import write_generated_files
from contract2markdown.schema_rendering import ExpansionCache

from .run_contracts import GenerationOutcome, GenerationProgress, GenerationRequest

logger = logging.getLogger(__name__)


class GenerationRunError(Exception):
    """Raised when a generation run cannot be completed."""


def execute_markdown_generation_run(
    request: GenerationRequest,
    *,
    progress: GenerationProgress | None = None,
) -> GenerationOutcome:
    """Load the contract, render every page and write it to the output folder.

    Raises:
      ContractNotFoundError: If the contract file does not exist.
      ContractError: If the contract cannot be parsed.
      GenerationRunError: If the pages cannot be written.
    """
    contract = load_contract_document(request.contract_path)
    configuration = request.configuration
    output_directory = configuration.output.directory.resolve()
    operation_count = len(list_operations(contract))
    if operation_count == 0:
        logger.warning("No operations found in %s", request.contract_path)

    if progress is not None:
        progress.started(expected_file_count(contract, configuration))

    files = generate_documents(contract, configuration, cache=ExpansionCache())

    def report_written(path: Path) -> None:
        if progress is not None:
            progress.file_written(path.name)

    try:
        written_paths = write_generated_files(
            files, output_directory, on_file_written=report_written
        )
    except OSError as exc:
        raise GenerationRunError(f"Failed to write markdown: {exc}") from exc

    for path in written_paths:
        logger.debug("Wrote %s", path)
    return GenerationOutcome(
        output_directory=output_directory,
        written_paths=tuple(written_paths),
        operation_count=operation_count,
    )


__all__ = [
    "ContractError",
    "ContractNotFoundError",
    "GenerationRunError",
    "execute_markdown_generation_run",
]
