"""Shape classification for schema nodes.

A parsed schema node is an untyped mapping. Rendering works on one of the
closed set of shapes below, chosen by :func:`classify_schema_node` in a fixed
priority order: reference, object, array, primitive, combinator, unknown.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

COMBINATOR_KEYWORDS = ("oneOf", "anyOf", "allOf")


@dataclass(frozen=True)
class ReferenceShape:
    """Node that points at another schema through ``$ref``."""

    target: str


@dataclass(frozen=True)
class ObjectShape:
    """Object schema with optional description and declared properties."""

    description: str | None
    properties: tuple[tuple[str, Any], ...] | None


@dataclass(frozen=True)
class ArrayShape:
    """Array schema; ``items`` is only meaningful when ``has_items`` is set."""

    items: Any
    has_items: bool


@dataclass(frozen=True)
class PrimitiveShape:
    """Scalar schema such as string, integer, number or boolean."""

    type_name: str
    format: str | None
    enum: tuple[Any, ...] | None


@dataclass(frozen=True)
class CombinatorShape:
    """``oneOf``/``anyOf``/``allOf`` composition over sub-schemas."""

    keyword: str
    branches: tuple[Any, ...]

    @property
    def branch_label(self) -> str:
        return "part" if self.keyword == "allOf" else "option"


@dataclass(frozen=True)
class UnknownShape:
    """Fragment that matches no other shape; rendered as a stub."""

    annotations: tuple[tuple[str, str], ...]
    literal: str | None = None
    is_mapping: bool = True


SchemaShape = (
    ReferenceShape | ObjectShape | ArrayShape | PrimitiveShape | CombinatorShape | UnknownShape
)


def classify_schema_node(node: Any) -> SchemaShape:
    """Return the shape used to render ``node``."""
    if not isinstance(node, Mapping):
        literal = node if isinstance(node, str) else None
        return UnknownShape(annotations=(), literal=literal, is_mapping=False)

    target = node.get("$ref")
    if isinstance(target, str):
        return ReferenceShape(target=target)

    type_name = _schema_type_name(node)
    if type_name == "object" or (type_name is None and isinstance(node.get("properties"), Mapping)):
        properties = node.get("properties")
        description = node.get("description")
        return ObjectShape(
            description=description if isinstance(description, str) else None,
            properties=tuple(properties.items()) if isinstance(properties, Mapping) else None,
        )
    if type_name == "array":
        return ArrayShape(items=node.get("items"), has_items="items" in node)
    if type_name is not None:
        schema_format = node.get("format")
        enum_values = node.get("enum")
        return PrimitiveShape(
            type_name=type_name,
            format=schema_format if isinstance(schema_format, str) else None,
            enum=tuple(enum_values) if _is_sequence(enum_values) else None,
        )

    for keyword in COMBINATOR_KEYWORDS:
        branches = node.get(keyword)
        if _is_sequence(branches):
            return CombinatorShape(keyword=keyword, branches=tuple(branches))

    annotations = tuple(
        (key, _annotation_text(value))
        for key, value in node.items()
        if key in ("description", "title")
    )
    return UnknownShape(annotations=annotations)


def _annotation_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, (bool, int, float, Mapping, list, tuple)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def _schema_type_name(node: Mapping[str, Any]) -> str | None:
    node_type = node.get("type")
    if isinstance(node_type, str):
        return node_type
    if isinstance(node_type, list):
        # OpenAPI 3.1 style ["string", "null"]
        filtered = [value for value in node_type if isinstance(value, str) and value != "null"]
        if len(filtered) == 1:
            return filtered[0]
        if filtered:
            return " | ".join(filtered)
        return "null" if node_type else None
    return None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))
