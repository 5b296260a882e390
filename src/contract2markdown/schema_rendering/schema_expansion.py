"""Recursive schema expansion into indented descriptive text.

Two pieces of state travel with an expansion:

* the branch guard, an immutable set of the references being expanded on the
  current path from the top-level call; meeting one of them again renders a
  ``(recursive)`` marker and ends that branch. Siblings never see each other's
  guard entries.
* the :class:`ExpansionCache`, shared by a whole run, holding the canonical
  (indent zero) rendering of each reference already expanded.

A rendering that was cut short on a reference belonging to an enclosing branch
depends on where it was reached from, so it is returned but never cached. A
cached rendering is only reused when none of the references it met is on the
current guard; otherwise the guard would have cut it differently and the
reference is expanded again. Output therefore never depends on what other
branches or workers happened to cache first.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, assert_never

from .expansion_cache import ExpansionCache
from .reference_pointers import (
    ReferenceResolutionError,
    is_model_reference,
    reference_key,
    resolve_reference,
)
from .schema_shapes import (
    ArrayShape,
    CombinatorShape,
    ObjectShape,
    PrimitiveShape,
    ReferenceShape,
    UnknownShape,
    classify_schema_node,
)

logger = logging.getLogger(__name__)

INDENT_UNIT = "  "


@dataclass(frozen=True)
class _Rendering:
    """Rendered lines plus the references they met and the guard references they were cut on."""

    lines: tuple[str, ...]
    open_cuts: frozenset[str] = frozenset()
    references: frozenset[str] = frozenset()


@dataclass(frozen=True)
class _ExpansionContext:
    root: Any
    cache: ExpansionCache | None
    expand_refs_inline: bool


def expand_schema(
    node: Any,
    root: Any,
    cache: ExpansionCache | None = None,
    *,
    expand_refs_inline: bool = True,
    enclosing_reference: str | None = None,
) -> str:
    """Render ``node`` as nested text, two spaces per nesting level.

    Args:
      node: Schema node (or reference node) to render.
      root: Contract document used to resolve local references.
      cache: Run-wide cache of canonical reference renderings.
      expand_refs_inline: When False, references to named models are rendered
        as a ``$ref`` line only, because the model is documented elsewhere.
      enclosing_reference: Reference that ``node`` was resolved from, if any.
        A self-reference inside the node is then reported as recursive
        instead of being expanded one extra level.

    Returns:
      The rendering without trailing whitespace; empty when the node has no
      renderable content. Reference failures degrade to a bare ``$ref`` line.
    """
    guard = frozenset({reference_key(enclosing_reference)}) if enclosing_reference else frozenset()
    context = _ExpansionContext(root=root, cache=cache, expand_refs_inline=expand_refs_inline)
    rendering = _expand(node, context, guard, 0)
    return "\n".join(rendering.lines).rstrip()


def normalize_and_indent(lines: Iterable[str], prefix: str) -> list[str]:
    """Strip blank edges and the common leading indentation, then prefix every line."""
    block = [line.replace("\r", "") for line in lines]
    while block and not block[0].strip():
        block.pop(0)
    while block and not block[-1].strip():
        block.pop()

    leads = [len(line) - len(line.lstrip(" ")) for line in block if line.strip()]
    common = min(leads) if leads else 0
    return [prefix + line[common:].rstrip() for line in block]


def _expand(node: Any, context: _ExpansionContext, guard: frozenset[str], level: int) -> _Rendering:
    shape = classify_schema_node(node)
    indent = INDENT_UNIT * level
    if isinstance(shape, ReferenceShape):
        return _expand_reference(shape, context, guard, level)
    if isinstance(shape, ObjectShape):
        return _expand_object(shape, context, guard, level)
    if isinstance(shape, ArrayShape):
        return _expand_array(shape, context, guard, level)
    if isinstance(shape, PrimitiveShape):
        return _Rendering((indent + _primitive_line(shape),))
    if isinstance(shape, CombinatorShape):
        return _expand_combinator(shape, context, guard, level)
    if isinstance(shape, UnknownShape):
        return _Rendering(tuple(_unknown_lines(shape, indent)))
    assert_never(shape)


def _expand_reference(
    shape: ReferenceShape, context: _ExpansionContext, guard: frozenset[str], level: int
) -> _Rendering:
    indent = INDENT_UNIT * level
    target = shape.target
    key = reference_key(target)
    header = f"{indent}$ref: {target}"
    met = frozenset({key})

    if key in guard:
        return _Rendering((f"{header} (recursive)",), met, met)

    if not context.expand_refs_inline and is_model_reference(target):
        return _Rendering((header,), references=met)

    cache = context.cache
    if cache is not None:
        cached = cache.lookup(target, expand_refs_inline=context.expand_refs_inline)
        if cached is not None and not cached.references & guard:
            body = normalize_and_indent(cached.text.split("\n"), indent + INDENT_UNIT)
            return _Rendering((header, *body), references=met | cached.references)

    try:
        resolved = resolve_reference(context.root, target)
    except ReferenceResolutionError as exc:
        logger.debug("Leaving reference unexpanded: %s", exc)
        return _Rendering((header,), references=met)

    canonical = _expand(resolved, context, guard | met, 0)
    open_cuts = canonical.open_cuts - met
    references = canonical.references | met
    if cache is not None and not open_cuts:
        cache.store(
            target,
            "\n".join(canonical.lines),
            expand_refs_inline=context.expand_refs_inline,
            references=references,
        )

    body = normalize_and_indent(canonical.lines, indent + INDENT_UNIT)
    return _Rendering((header, *body), open_cuts, references)


def _expand_object(
    shape: ObjectShape, context: _ExpansionContext, guard: frozenset[str], level: int
) -> _Rendering:
    indent = INDENT_UNIT * level
    lines = [f"{indent}type: object"]
    children: list[_Rendering] = []
    if shape.description:
        lines.append(f"{indent}{INDENT_UNIT}description: {_single_line(shape.description)}")
    if shape.properties is None:
        return _Rendering(tuple(lines))

    lines.append(f"{indent}properties:")
    for name, child in shape.properties:
        child_rendering = _expand(child, context, guard, level + 2)
        children.append(child_rendering)
        normalized = normalize_and_indent(child_rendering.lines, indent + INDENT_UNIT * 2)
        if not normalized:
            lines.append(f"{indent}{INDENT_UNIT}- {name}: (unknown)")
            continue
        lines.append(f"{indent}{INDENT_UNIT}- {name}: {normalized[0].lstrip()}")
        lines.extend(normalized[1:])
    return _combined(lines, children)


def _expand_array(
    shape: ArrayShape, context: _ExpansionContext, guard: frozenset[str], level: int
) -> _Rendering:
    indent = INDENT_UNIT * level
    lines = [f"{indent}type: array"]
    if not shape.has_items:
        return _Rendering(tuple(lines))

    lines.append(f"{indent}items:")
    items_rendering = _expand(shape.items, context, guard, level + 1)
    lines.extend(normalize_and_indent(items_rendering.lines, indent + INDENT_UNIT))
    return _combined(lines, [items_rendering])


def _expand_combinator(
    shape: CombinatorShape, context: _ExpansionContext, guard: frozenset[str], level: int
) -> _Rendering:
    indent = INDENT_UNIT * level
    lines = [f"{indent}{shape.keyword}:"]
    branches: list[_Rendering] = []
    for position, branch in enumerate(shape.branches):
        lines.append(f"{indent}{INDENT_UNIT}- {shape.branch_label}{position}:")
        branch_rendering = _expand(branch, context, guard, level + 2)
        branches.append(branch_rendering)
        lines.extend(normalize_and_indent(branch_rendering.lines, indent + INDENT_UNIT * 2))
    return _combined(lines, branches)


def _combined(lines: list[str], parts: Iterable[_Rendering]) -> _Rendering:
    open_cuts: frozenset[str] = frozenset()
    references: frozenset[str] = frozenset()
    for part in parts:
        open_cuts |= part.open_cuts
        references |= part.references
    return _Rendering(tuple(lines), open_cuts, references)


def _primitive_line(shape: PrimitiveShape) -> str:
    line = f"type: {shape.type_name}"
    if shape.format:
        line += f" (format: {shape.format})"
    if shape.enum is not None:
        line += " enum: [" + ", ".join(_enum_literal(value) for value in shape.enum) + "]"
    return line


def _unknown_lines(shape: UnknownShape, indent: str) -> list[str]:
    if not shape.is_mapping:
        return [indent + shape.literal] if shape.literal else []
    lines = [f"{indent}<schema>"]
    lines.extend(
        f"{indent}{INDENT_UNIT}{key}: {_single_line(value)}" for key, value in shape.annotations
    )
    return lines


def _enum_literal(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if not isinstance(value, (Mapping, list, tuple)):
        # Scalars YAML can produce besides JSON ones, such as dates, print as written.
        return str(value)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def _single_line(text: str) -> str:
    return " ".join(text.split())
