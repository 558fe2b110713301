"""Unit-specific fixtures (no network: fetches are faked, clocks are manual)."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import pytest

from steam_mcp.catalog import SearchCache
from steam_mcp.models.steam import SteamApp


class ManualClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCatalogFetch:
    """Stands in for SteamClient.fetch_app_list.

    Each call consumes the next queued outcome (the last one repeats). An outcome
    is either a list of apps or an exception to raise.
    """

    def __init__(self, *outcomes: Sequence[SteamApp] | Exception, delay: float = 0.0) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[str] = []
        self.delay = delay

    async def __call__(self, api_key: str) -> Sequence[SteamApp]:
        self.calls.append(api_key)
        if self.delay:
            await asyncio.sleep(self.delay)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def make_cache(clock: ManualClock):
    """Factory: ``make_cache(fetch, api_key="test-key")`` → SearchCache on the manual clock."""

    def _make(fetch: FakeCatalogFetch, api_key: str | None = "test-key") -> SearchCache:
        return SearchCache(fetch, credential=lambda: api_key, clock=clock)

    return _make


@pytest.fixture()
def catalog_fetch() -> type[FakeCatalogFetch]:
    """The FakeCatalogFetch class, so tests can queue their own outcomes."""
    return FakeCatalogFetch
