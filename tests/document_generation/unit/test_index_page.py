"""Index page tests."""

from __future__ import annotations

from contract2markdown.document_generation import (
    GeneratedFileType,
    OperationIndexEntry,
    SchemaIndexEntry,
    build_index_page,
)


def test_index_lists_operations_and_schemas() -> None:
    page = build_index_page(
        "Pets",
        [
            OperationIndexEntry(
                file_name="listPets.md",
                method="GET",
                path="/pets",
                operation_id="listPets",
                friendly_name="List pets",
            ),
            OperationIndexEntry(
                file_name="GET__a_b.md",
                method="GET",
                path="/a|b",
                operation_id="",
                friendly_name="GET /a|b",
            ),
        ],
        [SchemaIndexEntry(name="Pet", file_name="schemas/Pet.md")],
        metadata={},
    )

    assert page.file_name == "Index.md"
    assert page.file_type is GeneratedFileType.INDEX
    assert page.content == "\n".join(
        [
            "# Pets - Index",
            "",
            "## Operations",
            "",
            "| Operation | OperationId | Method | Path |",
            "|---|---|---|---|",
            "| [List pets](./listPets.md) | listPets | GET | `/pets` |",
            "| [GET /a\\|b](./GET__a_b.md) |  | GET | `/a\\|b` |",
            "",
            "## Schemas",
            "",
            "- [Pet](./schemas/Pet.md)",
        ]
    ) + "\n"


def test_index_without_schemas_omits_schema_section() -> None:
    page = build_index_page("Pets", [], metadata={"product": "Pets"})

    assert page.content.startswith('---\nproduct: "Pets"\n---\n\n# Pets - Index\n')
    assert "## Schemas" not in page.content


def test_index_escapes_pipes_and_brackets_in_labels_and_operation_ids() -> None:
    entry = OperationIndexEntry(
        file_name="find_pets.md",
        method="GET",
        path="/pets",
        operation_id="find|pets",
        friendly_name="Find [cats|dogs]",
    )

    page = build_index_page("Pets", [entry], metadata={})

    assert (
        "| [Find \\[cats\\|dogs\\]](./find_pets.md) | find\\|pets | GET | `/pets` |"
        in page.content.splitlines()
    )
