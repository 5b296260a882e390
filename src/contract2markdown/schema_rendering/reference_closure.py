"""Transitive model reference collection for one operation."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .reference_pointers import (
    ReferenceResolutionError,
    is_model_reference,
    reference_key,
    reference_target,
    resolve_reference,
)

logger = logging.getLogger(__name__)


def collect_model_references(node: Any, *, every_spelling: bool = False) -> list[str]:
    """Return model references named anywhere in ``node``, in depth-first declaration order.

    A node that is itself a model reference is recorded and not descended into.
    Duplicates (compared case-insensitively) keep their first spelling unless
    ``every_spelling`` is set, in which case only exact repeats are dropped.
    """
    found: dict[str, str] = {}
    _scan(node, found, str if every_spelling else reference_key)
    return list(found.values())


def compute_reference_closure(root: Any, seeds: Iterable[str]) -> tuple[str, ...]:
    """Return every model reachable from ``seeds``, each exactly once.

    Members are ordered by first discovery: seeds in the order given, then
    references found breadth-first. Models are matched case-insensitively and
    keep the first spelling that resolves. A reference that cannot be resolved
    is left out and does not stop the traversal.
    """
    queued: set[str] = set()
    queue: deque[str] = deque()

    def enqueue(reference: str) -> None:
        if reference not in queued:
            queued.add(reference)
            queue.append(reference)

    for seed in seeds:
        if is_model_reference(seed):
            enqueue(seed)

    closure: dict[str, str] = {}
    while queue:
        reference = queue.popleft()
        if reference_key(reference) in closure:
            continue
        try:
            resolved = resolve_reference(root, reference)
        except ReferenceResolutionError as exc:
            logger.debug("Skipping model outside closure: %s", exc)
            continue
        closure[reference_key(reference)] = reference

        for nested in collect_model_references(resolved, every_spelling=True):
            if reference_key(nested) not in closure:
                enqueue(nested)

    return tuple(closure.values())


def _scan(node: Any, found: dict[str, str], key: Callable[[str], str]) -> None:
    if isinstance(node, Mapping):
        target = reference_target(node)
        if target and is_model_reference(target):
            found.setdefault(key(target), target)
            return
        for value in node.values():
            _scan(value, found, key)
    elif isinstance(node, (list, tuple)):
        for item in node:
            _scan(item, found, key)
