"""Document generation entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class GeneratedFileType(str, Enum):
    """Kind of Markdown page produced for a contract."""

    OPERATION = "operation"
    COMPONENT = "component"
    SCHEMA = "schema"
    INDEX = "index"


@dataclass(frozen=True)
class GeneratedFile:
    """One rendered Markdown page, addressed relative to the output folder."""

    file_name: str
    content: str
    file_type: GeneratedFileType
    metadata: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class OperationIndexEntry:
    """Row of the operations table in the index page."""

    file_name: str
    method: str
    path: str
    operation_id: str
    friendly_name: str


@dataclass(frozen=True)
class SchemaIndexEntry:
    """Link to a standalone schema page in the index page."""

    name: str
    file_name: str
