"""Process-wide application state handed to every tool handler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from steam_mcp.catalog import SearchCache
from steam_mcp.steam_api import SteamClient

if TYPE_CHECKING:
    import httpx

    from steam_mcp.config import Settings


@dataclass
class AppState:
    settings: Settings
    http_client: httpx.AsyncClient
    steam: SteamClient
    search_cache: SearchCache

    @classmethod
    def build(cls, settings: Settings, http_client: httpx.AsyncClient) -> AppState:
        steam = SteamClient(http_client, settings.steam)
        search_cache = SearchCache.from_settings(
            settings.catalog,
            fetch_catalog=steam.fetch_app_list,
            credential=settings.api_key,
        )
        return cls(
            settings=settings,
            http_client=http_client,
            steam=steam,
            search_cache=search_cache,
        )
