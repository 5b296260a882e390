"""Generation run use-case tests."""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path

import pytest
from contract2markdown.configuration import default_configuration
from contract2markdown.contract_loading import ContractError, ContractNotFoundError
from contract2markdown.run_execution import (
    GenerationRequest,
    GenerationRunError,
    execute_markdown_generation_run,
)


class _RecordingProgress:
    def __init__(self) -> None:
        self.total: int | None = None
        self.written: list[str] = []

    def started(self, total_files: int) -> None:
        self.total = total_files

    def file_written(self, file_name: str) -> None:
        self.written.append(file_name)


def _request(contract_path: Path, output_dir: Path) -> GenerationRequest:
    configuration = default_configuration()
    configuration = dataclasses.replace(
        configuration,
        output=dataclasses.replace(configuration.output, directory=output_dir),
    )
    return GenerationRequest(contract_path=str(contract_path), configuration=configuration)


def _write_contract(tmp_path: Path) -> Path:
    contract_path = tmp_path / "api.json"
    contract_path.write_text(
        json.dumps(
            {
                "info": {"title": "Pets"},
                "paths": {
                    "/pets": {
                        "get": {
                            "operationId": "listPets",
                            "responses": {
                                "200": {
                                    "description": "ok",
                                    "content": {
                                        "application/json": {
                                            "schema": {"$ref": "#/components/schemas/Pet"}
                                        }
                                    },
                                }
                            },
                        }
                    }
                },
                "components": {"schemas": {"Pet": {"type": "object"}}},
            }
        ),
        encoding="utf-8",
    )
    return contract_path


def test_run_writes_pages_and_reports_progress(tmp_path: Path) -> None:
    progress = _RecordingProgress()
    output_dir = tmp_path / "out"

    outcome = execute_markdown_generation_run(
        _request(_write_contract(tmp_path), output_dir), progress=progress
    )

    assert outcome.output_directory == output_dir.resolve()
    assert outcome.operation_count == 1
    assert [path.name for path in outcome.written_paths] == [
        "listPets.md",
        "components.md",
        "Index.md",
    ]
    assert progress.total == 3
    assert progress.written == ["listPets.md", "components.md", "Index.md"]
    assert (output_dir / "listPets.md").read_text(encoding="utf-8").startswith("# Pets listPets")


def test_run_without_operations_logs_warning(tmp_path: Path, caplog) -> None:
    contract_path = tmp_path / "empty.yaml"
    contract_path.write_text("info:\n  title: Empty\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="contract2markdown"):
        outcome = execute_markdown_generation_run(_request(contract_path, tmp_path / "out"))

    assert outcome.operation_count == 0
    assert [path.name for path in outcome.written_paths] == ["Index.md"]
    assert "No operations found" in caplog.text


def test_missing_contract_propagates_not_found(tmp_path: Path) -> None:
    with pytest.raises(ContractNotFoundError):
        execute_markdown_generation_run(_request(tmp_path / "missing.json", tmp_path / "out"))


def test_unparseable_contract_propagates_contract_error(tmp_path: Path) -> None:
    contract_path = tmp_path / "broken.yaml"
    contract_path.write_text("paths: [", encoding="utf-8")

    with pytest.raises(ContractError):
        execute_markdown_generation_run(_request(contract_path, tmp_path / "out"))


def test_write_failure_raises_generation_run_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(GenerationRunError, match="Failed to write markdown"):
        execute_markdown_generation_run(_request(_write_contract(tmp_path), blocker))
