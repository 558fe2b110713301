"""Fuzzy name matching over the app catalog.

The cache only talks to a ``Matcher``: ``build`` turns a catalog snapshot into
an index, ``query`` returns ``(app, distance)`` pairs where distance is in
[0, 1] and 0 is a perfect match. ``FuzzyMatcher`` is the rapidfuzz-backed
implementation.

Scoring for one candidate name:

    errors    = 1 - partial_ratio(query, name) / 100   (best aligned window)
              + (len(query) - len(name)) / len(query)   (only when the name is shorter)
    proximity = match_start / distance                 (how far into the name)
    raw       = errors + proximity                     (rejected if > threshold)
    distance  = max(raw, EPSILON) ** (1 / sqrt(tokens(name)))

The exponent is a field-length norm: with equal alignment, "Dota 2" ranks above
"Dota 2 Workshop Tools".
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from rapidfuzz import fuzz, process
from rapidfuzz.utils import default_process

if TYPE_CHECKING:
    from collections.abc import Sequence

    from steam_mcp.models.steam import SteamApp

EPSILON = sys.float_info.epsilon


@dataclass(frozen=True)
class CatalogIndex:
    """Read-only lookup structure built from exactly one catalog snapshot."""

    entries: tuple[SteamApp, ...]
    keys: tuple[str, ...]  # default_process(name), parallel to entries
    norms: tuple[float, ...]  # field-length norm exponent per entry

    def __len__(self) -> int:
        return len(self.entries)


class Matcher(Protocol):
    def build(self, entries: Sequence[SteamApp]) -> CatalogIndex: ...

    def query(self, index: CatalogIndex, text: str, limit: int) -> list[tuple[SteamApp, float]]: ...


def _field_norm(name: str) -> float:
    tokens = len(name.split()) or 1
    return round(1 / math.sqrt(tokens), 3)


class FuzzyMatcher:
    """Typo-tolerant substring matcher with a dissimilarity cut-off.

    ``threshold`` bounds the raw distance a candidate may have before it is
    dropped; ``distance`` sets how quickly a match loses relevance the further
    into the name it starts; queries with fewer than ``min_match_char_length``
    significant characters match nothing.
    """

    def __init__(
        self,
        threshold: float = 0.3,
        distance: int = 200,
        min_match_char_length: int = 2,
    ) -> None:
        self.threshold = threshold
        self.distance = distance
        self.min_match_char_length = min_match_char_length

    def build(self, entries: Sequence[SteamApp]) -> CatalogIndex:
        entries = tuple(entries)
        return CatalogIndex(
            entries=entries,
            keys=tuple(default_process(app.name) for app in entries),
            norms=tuple(_field_norm(app.name) for app in entries),
        )

    def query(self, index: CatalogIndex, text: str, limit: int) -> list[tuple[SteamApp, float]]:
        needle = default_process(text)
        if len(needle.replace(" ", "")) < self.min_match_char_length:
            return []

        # Bulk pre-filter in C; proximity can only make a candidate worse.
        candidates = process.extract(
            needle,
            index.keys,
            scorer=fuzz.partial_ratio,
            processor=None,
            score_cutoff=(1 - self.threshold) * 100,
            limit=None,
        )

        scored: list[tuple[float, int]] = []
        for key, _ratio, i in candidates:
            # The matched span can be no longer than the name itself.
            if len(key.replace(" ", "")) < self.min_match_char_length:
                continue
            alignment = fuzz.partial_ratio_alignment(needle, key, processor=None)
            if alignment is None:
                continue
            errors = 1 - alignment.score / 100
            # A name shorter than the query covers only part of it; the rest are errors.
            if len(key) < len(needle):
                errors += (len(needle) - len(key)) / len(needle)
            raw = errors + alignment.dest_start / self.distance
            if raw > self.threshold:
                continue
            scored.append((min(max(raw, EPSILON) ** index.norms[i], 1.0), i))

        scored.sort()
        return [(index.entries[i], dist) for dist, i in scored[:limit]]
