"""Schema rendering exports."""

import logging

from .expansion_cache import CachedExpansion, ExpansionCache
from .reference_closure import collect_model_references, compute_reference_closure
from .reference_pointers import (
    ReferenceNotFoundError,
    ReferenceResolutionError,
    UnsupportedReferenceError,
    is_model_reference,
    reference_display_name,
    reference_target,
    resolve_reference,
)
from .schema_expansion import expand_schema, normalize_and_indent
from .schema_shapes import SchemaShape, classify_schema_node

logging.getLogger("contract2markdown").addHandler(logging.NullHandler())

__all__ = [
    "CachedExpansion",
    "ExpansionCache",
    "ReferenceNotFoundError",
    "ReferenceResolutionError",
    "SchemaShape",
    "UnsupportedReferenceError",
    "classify_schema_node",
    "collect_model_references",
    "compute_reference_closure",
    "expand_schema",
    "is_model_reference",
    "normalize_and_indent",
    "reference_display_name",
    "reference_target",
    "resolve_reference",
]
