"""Component and schema page rendering service."""

from __future__ import annotations

from collections.abc import Mapping

from contract2markdown.configuration import SchemaPageLayout
from contract2markdown.contract_loading import ContractDocument
from contract2markdown.schema_rendering import ExpansionCache

from .generated_files import GeneratedFile, GeneratedFileType, SchemaIndexEntry
from .markdown_blocks import front_matter_lines, join_lines, safe_file_name, schema_block_lines

COMPONENTS_FILE_NAME = "components.md"
SCHEMAS_FILE_NAME = "Schemas.md"
SCHEMAS_FOLDER = "schemas"


def build_components_page(
    contract: ContractDocument,
    *,
    metadata: Mapping[str, str],
    cache: ExpansionCache | None,
) -> GeneratedFile | None:
    """Render ``components.md`` with every named schema expanded inline.

    Returns None when the contract declares no schemas.
    """
    named_schemas = contract.named_schemas()
    if not named_schemas:
        return None

    lines = front_matter_lines(metadata)
    lines.extend(["# Components", ""])
    for name, reference, schema in named_schemas:
        lines.extend([f"## {name}", ""])
        lines.extend(_inline_block(contract, reference, schema, cache))
        lines.append("")
    return GeneratedFile(
        file_name=COMPONENTS_FILE_NAME,
        content=join_lines(lines),
        file_type=GeneratedFileType.COMPONENT,
    )


def build_schema_pages(
    contract: ContractDocument,
    layout: SchemaPageLayout,
    *,
    metadata: Mapping[str, str],
    cache: ExpansionCache | None,
) -> tuple[list[GeneratedFile], list[SchemaIndexEntry]]:
    """Render standalone schema pages for the requested layout."""
    named_schemas = contract.named_schemas()
    if layout is SchemaPageLayout.NONE or not named_schemas:
        return [], []

    if layout is SchemaPageLayout.SINGLE:
        lines = front_matter_lines(metadata)
        lines.extend(["# Schemas", ""])
        for name, reference, schema in named_schemas:
            lines.extend([f"## {name}", ""])
            lines.extend(_inline_block(contract, reference, schema, cache))
            lines.append("")
        page = GeneratedFile(
            file_name=SCHEMAS_FILE_NAME,
            content=join_lines(lines),
            file_type=GeneratedFileType.SCHEMA,
        )
        return [page], [SchemaIndexEntry(name="Schemas", file_name=SCHEMAS_FILE_NAME)]

    pages: list[GeneratedFile] = []
    entries: list[SchemaIndexEntry] = []
    for name, reference, schema in named_schemas:
        file_name = f"{SCHEMAS_FOLDER}/{safe_file_name(name)}.md"
        lines = front_matter_lines(metadata)
        lines.extend([f"# {name}", ""])
        lines.extend(_inline_block(contract, reference, schema, cache))
        pages.append(
            GeneratedFile(
                file_name=file_name,
                content=join_lines(lines),
                file_type=GeneratedFileType.SCHEMA,
                metadata={"Name": name},
            )
        )
        entries.append(SchemaIndexEntry(name=name, file_name=file_name))
    return pages, entries


def _inline_block(
    contract: ContractDocument, reference: str, schema: object, cache: ExpansionCache | None
) -> list[str]:
    return schema_block_lines(
        schema,
        contract.root,
        cache,
        expand_refs_inline=True,
        enclosing_reference=reference,
    )
