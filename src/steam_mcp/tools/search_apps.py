"""search-apps: fuzzy lookup of Steam app IDs by name."""

from __future__ import annotations

from typing import TYPE_CHECKING

from steam_mcp.models.tools import SearchAppsInput

if TYPE_CHECKING:
    from steam_mcp.state import AppState

NAME = "search-apps"
DESCRIPTION = (
    "Search for Steam games by name using fuzzy matching. Handles typos, partial names, "
    "and variations. Returns top matching games with app IDs and similarity scores. "
    "Uses a cached list of ~240k Steam apps."
)
INPUT = SearchAppsInput


async def handle(args: SearchAppsInput, state: AppState) -> str:
    results = await state.search_cache.search(args.query, args.limit)
    if not results:
        return f'No apps found matching "{args.query}".'

    lines = [f"{r.app.name} (appid: {r.app.appid}) - match: {r.score}" for r in results]
    return f'Found {len(results)} result(s) for "{args.query}":\n\n' + "\n".join(lines)
