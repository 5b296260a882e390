"""Contract file loading service."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path

import yaml

from .contract_models import ContractDocument

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")

_YAML_BOOL_TAG = "tag:yaml.org,2002:bool"


class _ContractYamlLoader(yaml.SafeLoader):
    """SafeLoader that reads only true/false as booleans, so keys like ``on`` stay strings."""


_ContractYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, pattern) for tag, pattern in resolvers if tag != _YAML_BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_ContractYamlLoader.add_implicit_resolver(
    _YAML_BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class ContractError(Exception):
    """Raised when a contract file cannot be parsed into a document."""


class ContractNotFoundError(ContractError):
    """Raised when the contract file does not exist."""


def load_contract_document(contract_path: Path | str) -> ContractDocument:
    """Read and parse an OpenAPI or Swagger contract file."""
    path = Path(contract_path)
    if not path.is_file():
        raise ContractNotFoundError(f"Input file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContractError(f"Failed to read contract file {path}: {exc}") from exc

    root = parse_contract_text(text, prefer_yaml=path.suffix.lower() in YAML_SUFFIXES)
    logger.debug("Loaded contract %s", path)
    return ContractDocument(root=root, source_path=path.resolve())


def parse_contract_text(text: str, *, prefer_yaml: bool = False) -> Mapping:
    """Parse contract text as JSON, or YAML when requested or when JSON parsing fails."""
    if prefer_yaml:
        parsed = _parse_yaml(text)
    else:
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            parsed = _parse_yaml(text)

    if not isinstance(parsed, Mapping):
        raise ContractError("Contract root must be a mapping.")
    return parsed


def _parse_yaml(text: str) -> object:
    try:
        parsed = yaml.load(text, Loader=_ContractYamlLoader)
    except yaml.YAMLError as exc:
        raise ContractError(f"Failed to parse contract: {exc}") from exc
    return _stringify_keys(parsed)


def _stringify_keys(node: object) -> object:
    # YAML turns unquoted keys such as response codes into ints.
    if isinstance(node, Mapping):
        return {str(key): _stringify_keys(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_stringify_keys(item) for item in node]
    return node
