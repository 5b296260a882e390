"""Tests for run execution domain entities."""

from __future__ import annotations

from pathlib import Path

from contract2markdown.configuration import default_configuration
from contract2markdown.run_execution.run_contracts import GenerationOutcome, GenerationRequest


def test_generation_request_keeps_contract_path_and_configuration() -> None:
    configuration = default_configuration()
    request = GenerationRequest(contract_path="api.json", configuration=configuration)

    assert request.contract_path == "api.json"
    assert request.configuration is configuration


def test_generation_outcome_counts_written_files() -> None:
    outcome = GenerationOutcome(
        output_directory=Path("/tmp/out"),
        written_paths=(Path("/tmp/out/a.md"), Path("/tmp/out/Index.md")),
        operation_count=1,
    )

    assert outcome.written_count == 2
    assert outcome.output_directory.name == "out"
