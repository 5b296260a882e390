"""Document assembly tests."""

from __future__ import annotations

from pathlib import Path

from contract2markdown.configuration import (
    Configuration,
    GenerationSettings,
    OutputSettings,
    SchemaPageLayout,
)
from contract2markdown.contract_loading import ContractDocument
from contract2markdown.document_generation import (
    GeneratedFileType,
    assign_operation_file_names,
    expected_file_count,
    generate_documents,
    list_operations,
)


def _configuration(
    parallelism: int = 4, schema_pages: SchemaPageLayout = SchemaPageLayout.NONE
) -> Configuration:
    return Configuration(
        path=None,
        output=OutputSettings(directory=Path("out"), schema_pages=schema_pages),
        metadata={"product": "Pets"},
        generation=GenerationSettings(parallelism=parallelism),
    )


def _contract(operation_count: int = 12) -> ContractDocument:
    paths = {
        f"/items/{position}": {
            "get": {
                "operationId": f"getItem{position}",
                "responses": {
                    "200": {
                        "description": "ok",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Item"}}
                        },
                    }
                },
            }
        }
        for position in range(operation_count)
    }
    return ContractDocument(
        root={
            "info": {"title": "Items"},
            "paths": paths,
            "components": {
                "schemas": {
                    "Item": {
                        "type": "object",
                        "properties": {
                            "children": {
                                "type": "array",
                                "items": {"$ref": "#/components/schemas/Item"},
                            }
                        },
                    }
                }
            },
        }
    )


def test_files_follow_declaration_order_then_components_then_index() -> None:
    files = generate_documents(_contract(3), _configuration())

    assert [generated.file_name for generated in files] == [
        "getItem0.md",
        "getItem1.md",
        "getItem2.md",
        "components.md",
        "Index.md",
    ]
    assert [generated.file_type for generated in files][-2:] == [
        GeneratedFileType.COMPONENT,
        GeneratedFileType.INDEX,
    ]


def test_parallel_rendering_matches_sequential_rendering() -> None:
    contract = _contract()

    sequential = generate_documents(contract, _configuration(parallelism=1))
    parallel = generate_documents(contract, _configuration(parallelism=8))

    assert parallel == sequential


def test_every_generated_file_is_reported_once() -> None:
    reported: list[str] = []
    configuration = _configuration(schema_pages=SchemaPageLayout.INDEPENDENT)

    files = generate_documents(
        _contract(5), configuration, on_file_generated=lambda page: reported.append(page.file_name)
    )

    assert sorted(reported) == sorted(generated.file_name for generated in files)
    assert len(files) == expected_file_count(_contract(5), configuration)
    assert "schemas/Item.md" in reported
    assert reported[-1] == "Index.md"


def test_expected_file_count_per_layout() -> None:
    contract = _contract(2)

    assert expected_file_count(contract, _configuration()) == 4
    assert expected_file_count(contract, _configuration(schema_pages=SchemaPageLayout.SINGLE)) == 5
    independent = _configuration(schema_pages=SchemaPageLayout.INDEPENDENT)
    assert expected_file_count(contract, independent) == 5
    assert expected_file_count(ContractDocument(root={}), _configuration()) == 1


def test_index_links_schema_pages_when_generated() -> None:
    files = generate_documents(_contract(1), _configuration(schema_pages=SchemaPageLayout.SINGLE))
    index = files[-1]

    assert "- [Schemas](./Schemas.md)" in index.content
    assert "| [getItem0](./getItem0.md) | getItem0 | GET | `/items/0` |" in index.content


def test_duplicate_operation_file_names_get_suffixes() -> None:
    contract = ContractDocument(
        root={
            "paths": {
                "/a": {"get": {"operationId": "fetch"}, "post": {"operationId": "Fetch"}},
                "/b": {"get": {"operationId": "fetch"}},
            }
        }
    )

    assert assign_operation_file_names(list_operations(contract)) == [
        "fetch.md",
        "Fetch_2.md",
        "fetch_3.md",
    ]
