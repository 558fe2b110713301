"""get-games and get-recent-games: a user's library and recent playtime."""

from __future__ import annotations

from typing import TYPE_CHECKING

from steam_mcp.models.tools import GetGamesInput, GetRecentGamesInput
from steam_mcp.tools._common import minutes_to_hours, require_api_key, resolve_steam_id

if TYPE_CHECKING:
    from steam_mcp.state import AppState

OWNED_NAME = "get-games"
OWNED_DESCRIPTION = (
    "Retrieve all games owned by a Steam user. Returns game names, App IDs, and total "
    "playtime in hours. Requires STEAM_API_KEY environment variable."
)

RECENT_NAME = "get-recent-games"
RECENT_DESCRIPTION = (
    "Retrieve games played by a Steam user in the last 2 weeks. Returns game names, "
    "App IDs, recent playtime, and total playtime in hours. Requires STEAM_API_KEY "
    "environment variable."
)


async def handle_owned(args: GetGamesInput, state: AppState) -> str:
    api_key = require_api_key(state, OWNED_NAME)
    user_id = resolve_steam_id(state, args.steamid)

    games = await state.steam.fetch_owned_games(api_key, user_id)
    if not games:
        return f"No games found for Steam ID {user_id}. The profile may be private."

    games.sort(key=lambda g: g.playtime_forever, reverse=True)
    lines = [
        f"{g.name} (appid: {g.appid}) - {minutes_to_hours(g.playtime_forever)} hours"
        for g in games
    ]
    return f"{len(games)} games owned by Steam ID {user_id}:\n\n" + "\n".join(lines)


async def handle_recent(args: GetRecentGamesInput, state: AppState) -> str:
    api_key = require_api_key(state, RECENT_NAME)
    user_id = resolve_steam_id(state, args.steamid)

    games = await state.steam.fetch_recent_games(api_key, user_id)
    if not games:
        return (
            f"No recently played games found for Steam ID {user_id}. The profile may be "
            "private or no games were played in the last 2 weeks."
        )

    games.sort(key=lambda g: g.playtime_2weeks, reverse=True)
    lines = [
        f"{g.name} (appid: {g.appid}) - {minutes_to_hours(g.playtime_2weeks)} hours "
        f"(last 2 weeks) / {minutes_to_hours(g.playtime_forever)} hours (total)"
        for g in games
    ]
    return f"{len(games)} game(s) played recently by Steam ID {user_id}:\n\n" + "\n".join(lines)
