"""Contract loading entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_API_TITLE = "API"


@dataclass(frozen=True)
class ContractDocument:
    """Parsed API contract as a generic nested mapping tree."""

    root: Mapping[str, Any]
    source_path: Path | None = None

    @property
    def title(self) -> str:
        info = self.root.get("info")
        if isinstance(info, Mapping):
            title = info.get("title")
            if isinstance(title, str) and title.strip():
                return title.strip()
        return DEFAULT_API_TITLE

    @property
    def version(self) -> str | None:
        info = self.root.get("info")
        if isinstance(info, Mapping) and info.get("version") is not None:
            return str(info["version"])
        return None

    @property
    def paths(self) -> Mapping[str, Any]:
        paths = self.root.get("paths")
        return paths if isinstance(paths, Mapping) else {}

    def named_schemas(self) -> list[tuple[str, str, Any]]:
        """Return ``(name, reference, schema)`` for every top-level schema definition.

        OpenAPI 3 ``components.schemas`` come first, then Swagger 2 ``definitions``.
        """
        entries: list[tuple[str, str, Any]] = []
        components = self.root.get("components")
        if isinstance(components, Mapping) and isinstance(components.get("schemas"), Mapping):
            for name, schema in components["schemas"].items():
                entries.append((str(name), f"#/components/schemas/{_escape(name)}", schema))
        definitions = self.root.get("definitions")
        if isinstance(definitions, Mapping):
            for name, schema in definitions.items():
                entries.append((str(name), f"#/definitions/{_escape(name)}", schema))
        return entries


def _escape(name: Any) -> str:
    return str(name).replace("~", "~0").replace("/", "~1")
