"""Markdown fragments shared by every page type."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from contract2markdown.schema_rendering import ExpansionCache, expand_schema

logger = logging.getLogger(__name__)

_INVALID_FILE_NAME_CHARACTERS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def front_matter_lines(metadata: Mapping[str, str]) -> list[str]:
    """Return YAML front matter for ``metadata``, or nothing when it is empty."""
    if not metadata:
        return []
    lines = ["---"]
    lines.extend(
        f"{key}: {json.dumps(value, ensure_ascii=False)}" for key, value in metadata.items()
    )
    lines.extend(["---", ""])
    return lines


def schema_block_lines(
    schema: Any,
    root: Any,
    cache: ExpansionCache | None,
    *,
    expand_refs_inline: bool,
    enclosing_reference: str | None = None,
) -> list[str]:
    """Render a schema as a fenced text block, falling back to its raw JSON."""
    expanded = expand_schema(
        schema,
        root,
        cache,
        expand_refs_inline=expand_refs_inline,
        enclosing_reference=enclosing_reference,
    )
    if expanded.strip():
        return ["```", expanded, "```"]

    logger.debug("Schema has no renderable shape, emitting raw JSON")
    raw = json.dumps(schema, indent=2, ensure_ascii=False, default=str)
    return ["```json", raw, "```"]


def safe_file_name(raw_name: str) -> str:
    """Replace characters that are not allowed in file names with underscores."""
    return _INVALID_FILE_NAME_CHARACTERS.sub("_", raw_name)


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines).rstrip("\n") + "\n"
