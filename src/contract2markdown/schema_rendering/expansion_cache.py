"""Run-wide memo of canonical reference renderings."""

from __future__ import annotations

from dataclasses import dataclass

from .reference_pointers import reference_key

CacheKey = tuple[str, bool]


@dataclass(frozen=True)
class CachedExpansion:
    """Canonical rendering of one reference and every reference met while rendering it."""

    text: str
    references: frozenset[str] = frozenset()


class ExpansionCache:
    """Canonical renderings keyed by reference and inline-expansion mode.

    One instance lives for a whole generation run and may be shared by every
    worker thread rendering operation pages. Renderings are stored at
    indentation level zero so a caller can re-indent them for any call site.

    There is deliberately no lock. A stored rendering is a pure function of
    the contract, so two workers that miss on the same key compute the same
    text and the later ``store`` replaces it with an equal value. A miss race
    only costs a duplicate computation.
    """

    def __init__(self) -> None:
        self._renderings: dict[CacheKey, CachedExpansion] = {}

    def lookup(self, reference: str, *, expand_refs_inline: bool) -> CachedExpansion | None:
        return self._renderings.get(_cache_key(reference, expand_refs_inline))

    def store(
        self,
        reference: str,
        rendering: str,
        *,
        expand_refs_inline: bool,
        references: frozenset[str] = frozenset(),
    ) -> None:
        self._renderings[_cache_key(reference, expand_refs_inline)] = CachedExpansion(
            text=rendering, references=references
        )

    def __len__(self) -> int:
        return len(self._renderings)

    def __contains__(self, reference: object) -> bool:
        if not isinstance(reference, str):
            return False
        key = reference_key(reference)
        return (key, True) in self._renderings or (key, False) in self._renderings


def _cache_key(reference: str, expand_refs_inline: bool) -> CacheKey:
    return reference_key(reference), expand_refs_inline
