"""Index page rendering service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .generated_files import (
    GeneratedFile,
    GeneratedFileType,
    OperationIndexEntry,
    SchemaIndexEntry,
)
from .markdown_blocks import front_matter_lines, join_lines

INDEX_FILE_NAME = "Index.md"


def build_index_page(
    api_title: str,
    operations: Sequence[OperationIndexEntry],
    schemas: Sequence[SchemaIndexEntry] = (),
    *,
    metadata: Mapping[str, str],
) -> GeneratedFile:
    """Render the index linking every operation page and schema page."""
    lines = front_matter_lines(metadata)
    lines.extend(
        [
            f"# {api_title} - Index",
            "",
            "## Operations",
            "",
            "| Operation | OperationId | Method | Path |",
            "|---|---|---|---|",
        ]
    )
    for entry in operations:
        label = entry.friendly_name or entry.operation_id or entry.file_name
        lines.append(
            f"| [{_link_label(label)}](./{entry.file_name}) | {_table_cell(entry.operation_id)} "
            f"| {entry.method} | `{_table_cell(entry.path)}` |"
        )

    if schemas:
        lines.extend(["", "## Schemas", ""])
        lines.extend(f"- [{_link_label(entry.name)}](./{entry.file_name})" for entry in schemas)

    return GeneratedFile(
        file_name=INDEX_FILE_NAME,
        content=join_lines(lines),
        file_type=GeneratedFileType.INDEX,
    )


def _table_cell(text: str) -> str:
    return text.replace("|", "\\|")


def _link_label(text: str) -> str:
    return _table_cell(text).replace("[", "\\[").replace("]", "\\]")
