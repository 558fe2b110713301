from __future__ import annotations

from typing import TYPE_CHECKING

from steam_mcp.models.tools import GetCurrentPlayersInput

if TYPE_CHECKING:
    from steam_mcp.state import AppState

NAME = "get-current-players"
DESCRIPTION = (
    "Get the current number of players in a Steam game. Does not require an API key."
)
INPUT = GetCurrentPlayersInput


async def handle(args: GetCurrentPlayersInput, state: AppState) -> str:
    count = await state.steam.fetch_current_players(args.appid)
    return f"App {args.appid} currently has {count:,} players in-game on Steam."
