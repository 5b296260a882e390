"""Reference closure tests."""

from __future__ import annotations

from contract2markdown.schema_rendering import collect_model_references, compute_reference_closure


def _ref(name: str) -> dict:
    return {"$ref": f"#/components/schemas/{name}"}


def test_three_node_cycle_yields_each_model_once() -> None:
    root = {
        "components": {
            "schemas": {
                "A": {"type": "object", "properties": {"b": _ref("B")}},
                "B": {"type": "object", "properties": {"c": _ref("C")}},
                "C": {"type": "object", "properties": {"a": _ref("A")}},
            }
        }
    }

    closure = compute_reference_closure(root, ["#/components/schemas/A"])

    assert closure == (
        "#/components/schemas/A",
        "#/components/schemas/B",
        "#/components/schemas/C",
    )


def test_closure_follows_first_discovery_order() -> None:
    root = {
        "components": {
            "schemas": {
                "Order": {
                    "type": "object",
                    "properties": {
                        "lines": {"type": "array", "items": _ref("Line")},
                        "customer": _ref("Customer"),
                    },
                },
                "Line": {"type": "object", "properties": {"product": _ref("Product")}},
                "Customer": {"type": "object"},
                "Product": {"type": "object"},
                "Unused": {"type": "object"},
            }
        }
    }

    closure = compute_reference_closure(
        root, ["#/components/schemas/Order", "#/components/schemas/Customer"]
    )

    assert [reference.rsplit("/", 1)[-1] for reference in closure] == [
        "Order",
        "Customer",
        "Line",
        "Product",
    ]


def test_unresolvable_references_are_skipped_without_stopping_traversal() -> None:
    root = {
        "components": {
            "schemas": {
                "Pet": {
                    "type": "object",
                    "properties": {"ghost": _ref("Ghost"), "tag": _ref("Tag")},
                },
                "Tag": {"type": "string"},
            }
        }
    }

    closure = compute_reference_closure(root, ["#/components/schemas/Pet"])

    assert closure == ("#/components/schemas/Pet", "#/components/schemas/Tag")


def test_duplicates_compare_case_insensitively_and_non_models_are_ignored() -> None:
    root = {"definitions": {"Pet": {"type": "object"}}}

    closure = compute_reference_closure(
        root, ["#/definitions/Pet", "#/Definitions/pet", "#/parameters/Limit"]
    )

    assert closure == ("#/definitions/Pet",)


def test_collect_model_references_scans_the_whole_tree_without_following_refs() -> None:
    body = {
        "oneOf": [
            _ref("Cat"),
            {"type": "array", "items": _ref("Dog")},
            {"type": "object", "properties": {"owner": _ref("Owner"), "again": _ref("cat")}},
        ],
        "x-link": {"$ref": "#/components/parameters/Id"},
    }

    assert collect_model_references(body) == [
        "#/components/schemas/Cat",
        "#/components/schemas/Dog",
        "#/components/schemas/Owner",
    ]


def test_a_spelling_that_does_not_resolve_falls_back_to_one_that_does() -> None:
    root = {"definitions": {"Pet": {"type": "object"}}}

    closure = compute_reference_closure(root, ["#/definitions/pet", "#/definitions/Pet"])

    assert closure == ("#/definitions/Pet",)


def test_nested_spellings_are_tried_until_one_resolves() -> None:
    root = {
        "definitions": {
            "Owner": {
                "type": "object",
                "properties": {
                    "first": {"$ref": "#/definitions/pet"},
                    "second": {"$ref": "#/definitions/Pet"},
                },
            },
            "Pet": {"type": "object"},
        }
    }

    closure = compute_reference_closure(root, ["#/definitions/Owner"])

    assert closure == ("#/definitions/Owner", "#/definitions/Pet")


def test_collect_model_references_can_keep_every_spelling() -> None:
    body = {"allOf": [_ref("pet"), _ref("Pet"), _ref("Pet")]}

    assert collect_model_references(body, every_spelling=True) == [
        "#/components/schemas/pet",
        "#/components/schemas/Pet",
    ]
