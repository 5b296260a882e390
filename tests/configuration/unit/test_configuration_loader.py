"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from contract2markdown.configuration import SchemaPageLayout
from contract2markdown.configuration.loader import (
    ConfigurationError,
    apply_overrides,
    default_configuration,
    load_configuration,
    merge_metadata,
    parse_metadata_entries,
)


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_configuration(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
output:
  directory: docs/api
  schema_pages: Independent
metadata:
  product: Pet Store
  version: 2
generation:
  parallelism: 8
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.path == config_path
    assert configuration.output.directory == (tmp_path / "docs" / "api").resolve()
    assert configuration.output.schema_pages is SchemaPageLayout.INDEPENDENT
    assert configuration.metadata == {"product": "Pet Store", "version": "2"}
    assert configuration.generation.parallelism == 8


def test_loads_json_configuration_with_defaults(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.json", json.dumps({"metadata": {"team": "docs"}}))

    configuration = load_configuration(config_path)

    assert configuration.output.directory == (tmp_path / "output_md").resolve()
    assert configuration.output.schema_pages is SchemaPageLayout.NONE
    assert configuration.generation.parallelism == 4


def test_empty_configuration_file_uses_defaults(tmp_path: Path) -> None:
    configuration = load_configuration(_write_file(tmp_path / "empty.yaml", ""))

    assert configuration.metadata == {}


def test_no_configuration_path_returns_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    configuration = load_configuration(None)

    assert configuration.path is None
    assert configuration.output.directory == tmp_path / "output_md"


def test_missing_configuration_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_configuration(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("- just\n- a list\n", "root must be a mapping"),
        ("output: nope\n", "'output' must be a mapping"),
        ("output:\n  schema_pages: many\n", "output.schema_pages must be one of"),
        ("generation:\n  parallelism: 0\n", "greater than zero"),
        ("generation:\n  parallelism: true\n", "must be an integer"),
        ("metadata:\n  nested:\n    a: b\n", "must be a scalar"),
        ("output:\n  directory: '  '\n", "must not be empty"),
    ],
)
def test_invalid_configuration_is_rejected(tmp_path: Path, contents: str, message: str) -> None:
    config_path = _write_file(tmp_path / "config.yaml", contents)

    with pytest.raises(ConfigurationError, match=message):
        load_configuration(config_path)


def test_command_line_overrides_take_precedence(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        "output:\n  directory: out\nmetadata:\n  Product: Old\ngeneration:\n  parallelism: 2\n",
    )

    configuration = apply_overrides(
        load_configuration(config_path),
        output_dir=tmp_path / "cli-out",
        metadata_entries=["product:New", "audience:'internal'"],
        schema_pages="single",
        parallelism=6,
    )

    assert configuration.output.directory == (tmp_path / "cli-out").resolve()
    assert configuration.output.schema_pages is SchemaPageLayout.SINGLE
    assert configuration.metadata == {"Product": "New", "audience": "internal"}
    assert configuration.generation.parallelism == 6


def test_overrides_without_values_keep_configuration() -> None:
    configuration = default_configuration()

    assert apply_overrides(configuration) == configuration


def test_invalid_override_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="--schema-pages"):
        apply_overrides(default_configuration(), schema_pages="everything")


def test_metadata_entries_strip_quotes_and_skip_entries_without_key() -> None:
    metadata = parse_metadata_entries(
        ['title:"Pet Store"', "no-separator", ":orphan", "url:https://example.com", "Title:Other"]
    )

    assert metadata == {"title": "Other", "url": "https://example.com"}


def test_merge_metadata_keeps_first_spelling_of_a_key() -> None:
    assert merge_metadata({"Team": "a"}, {"TEAM": "b", "owner": "c"}) == {"Team": "b", "owner": "c"}
