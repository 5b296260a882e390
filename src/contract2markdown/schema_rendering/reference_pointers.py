"""Local reference pointer resolution."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

LOCAL_REFERENCE_PREFIX = "#/"
MODEL_REFERENCE_PREFIXES = ("#/components/schemas/", "#/definitions/")


class ReferenceResolutionError(Exception):
    """Raised when a reference pointer cannot be turned into a schema node."""

    def __init__(self, reference: str, message: str) -> None:
        super().__init__(message)
        self.reference = reference


class ReferenceNotFoundError(ReferenceResolutionError):
    """Raised when a pointer segment is missing or crosses a non-object node."""


class UnsupportedReferenceError(ReferenceResolutionError):
    """Raised for pointers that do not target the same document."""


def resolve_reference(root: Any, reference: str) -> Any:
    """Resolve a same-document pointer such as ``#/components/schemas/Pet``.

    Args:
      root: Parsed contract document.
      reference: Pointer string; must start with ``#/``.

    Returns:
      The node the pointer designates, unchanged.

    Raises:
      UnsupportedReferenceError: If the pointer is not local.
      ReferenceNotFoundError: If any segment cannot be followed.
    """
    if not isinstance(reference, str) or not reference.startswith(LOCAL_REFERENCE_PREFIX):
        raise UnsupportedReferenceError(
            str(reference), f"Only local references are supported: {reference}"
        )

    current = root
    for segment in reference[len(LOCAL_REFERENCE_PREFIX) :].split("/"):
        key = _unescape_segment(segment)
        if not isinstance(current, Mapping) or key not in current:
            raise ReferenceNotFoundError(reference, f"Reference path not found: {reference}")
        current = current[key]
    return current


def is_model_reference(reference: Any) -> bool:
    """Return True when the pointer names a top-level schema definition."""
    if not isinstance(reference, str):
        return False
    lowered = reference.lower()
    return any(lowered.startswith(prefix) for prefix in MODEL_REFERENCE_PREFIXES)


def reference_display_name(reference: str) -> str:
    """Return the trailing pointer segment used as a model's display name."""
    return _unescape_segment(reference.rsplit("/", 1)[-1])


def reference_key(reference: str) -> str:
    """Return the comparison key for a reference (pointers compare case-insensitively)."""
    return reference.casefold()


def reference_target(node: Any) -> str | None:
    """Return the ``$ref`` string of a node, or None when the node is not a reference."""
    if isinstance(node, Mapping):
        target = node.get("$ref")
        if isinstance(target, str):
            return target
    return None


def _unescape_segment(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")
