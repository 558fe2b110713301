"""In-memory Steam app catalog with lazy refresh and fuzzy search.

The catalog and its search index live in one immutable ``_CatalogSnapshot`` that
is replaced with a single assignment, so a reader never sees a catalog paired
with an index built from a different fetch. Refreshes are lazy (checked on each
search, no timers) and single-flight: concurrent callers that find the catalog
stale queue on one lock and reuse whatever the first of them loaded.

A failed refresh leaves the previous snapshot in place. ``ensure_fresh`` always
reports the failure; ``search`` answers from the previous snapshot when an
upstream failure hits a catalog that was loaded before. On first load there is
nothing to fall back to and the error propagates to the caller.

Only ``UpstreamError`` falls back, and only after a successful load; the failure
is still logged as ``catalog_refresh_failed`` and ``catalog_serving_stale``.
"""

from __future__ import annotations

import asyncio
import math
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from steam_mcp.errors import InternalError, SteamMCPError, UpstreamError, missing_api_key_error
from steam_mcp.matching import FuzzyMatcher
from steam_mcp.models.catalog import SearchResult

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from steam_mcp.config import CatalogSettings
    from steam_mcp.matching import CatalogIndex, Matcher
    from steam_mcp.models.steam import SteamApp

    FetchCatalog = Callable[[str], Awaitable[Sequence[SteamApp]]]

log = structlog.get_logger()

DEFAULT_REFRESH_INTERVAL_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class _CatalogSnapshot:
    catalog: tuple[SteamApp, ...]
    index: CatalogIndex | None  # None iff catalog is empty
    refreshed_at: float


def to_score(distance: float) -> float:
    """Convert a matcher distance (0 = perfect) to a 2-decimal similarity in [0, 1]."""
    return math.floor((1 - distance) * 100 + 0.5) / 100


class SearchCache:
    """Owns the catalog snapshot, its refresh policy and the search entry point."""

    def __init__(
        self,
        fetch_catalog: FetchCatalog,
        credential: Callable[[], str | None],
        matcher: Matcher | None = None,
        refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch_catalog = fetch_catalog
        self._credential = credential
        self._matcher = matcher or FuzzyMatcher()
        self._refresh_interval = refresh_interval_seconds
        self._clock = clock
        self._snapshot: _CatalogSnapshot | None = None
        self._refresh_lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: CatalogSettings,
        fetch_catalog: FetchCatalog,
        credential: Callable[[], str | None],
    ) -> SearchCache:
        matcher = FuzzyMatcher(
            threshold=settings.threshold,
            distance=settings.distance,
            min_match_char_length=settings.min_match_char_length,
        )
        return cls(
            fetch_catalog,
            credential,
            matcher=matcher,
            refresh_interval_seconds=settings.refresh_interval_hours * 3600,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def catalog(self) -> tuple[SteamApp, ...]:
        return self._snapshot.catalog if self._snapshot else ()

    @property
    def last_refreshed_at(self) -> float | None:
        return self._snapshot.refreshed_at if self._snapshot else None

    def _is_fresh(self) -> bool:
        snapshot = self._snapshot
        if snapshot is None or not snapshot.catalog:
            return False
        return self._clock() - snapshot.refreshed_at < self._refresh_interval

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def ensure_fresh(self) -> None:
        """Load the catalog if it is empty or older than the refresh interval."""
        if self._is_fresh():
            return

        async with self._refresh_lock:
            # Another caller may have refreshed while we waited for the lock.
            if self._is_fresh():
                return
            await self._refresh()

    async def _refresh(self) -> None:
        api_key = self._credential()
        if not api_key:
            raise missing_api_key_error("search-apps")

        log.info("catalog_refresh_started")
        started = time.perf_counter()
        try:
            fetched = await self._fetch_catalog(api_key)
        except SteamMCPError as exc:
            log.warning(
                "catalog_refresh_failed",
                code=exc.code.value,
                message=exc.message,
                has_previous=self._snapshot is not None,
            )
            raise

        catalog = tuple(app for app in fetched if app.name.strip())
        index = self._matcher.build(catalog) if catalog else None
        self._snapshot = _CatalogSnapshot(catalog=catalog, index=index, refreshed_at=self._clock())
        log.info(
            "catalog_refresh_complete",
            entries=len(catalog),
            dropped=len(fetched) - len(catalog),
            duration_ms=round((time.perf_counter() - started) * 1000),
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(self, query: str, limit: int) -> list[SearchResult]:
        """Return up to ``limit`` catalog entries matching ``query``, best first."""
        if limit < 1:
            raise ValueError("limit must be >= 1")

        try:
            await self.ensure_fresh()
        except UpstreamError:
            if not self.catalog:
                raise
            log.warning("catalog_serving_stale", entries=len(self.catalog))

        snapshot = self._snapshot
        if snapshot is None:
            raise InternalError("Search index not initialized after catalog refresh")
        if not snapshot.catalog:
            return []
        if snapshot.index is None:
            raise InternalError("Search index missing for a non-empty catalog")

        matches = self._matcher.query(snapshot.index, query, limit)
        return [SearchResult(app=app, score=to_score(distance)) for app, distance in matches]
