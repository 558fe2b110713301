"""get-player-achievements: unlock progress enriched with global unlock rates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from steam_mcp.errors import SteamMCPError
from steam_mcp.models.tools import GetPlayerAchievementsInput
from steam_mcp.tools._common import format_date, require_api_key, resolve_steam_id

if TYPE_CHECKING:
    from steam_mcp.models.steam import PlayerAchievement
    from steam_mcp.state import AppState

log = structlog.get_logger()

NAME = "get-player-achievements"
DESCRIPTION = (
    "Get a player's achievements for a specific game. Shows which achievements are "
    "unlocked, unlock times, and global unlock percentages. Requires STEAM_API_KEY."
)
INPUT = GetPlayerAchievementsInput


def format_achievement(a: PlayerAchievement, global_pct: dict[str, float]) -> str:
    unlocked = a.achieved == 1
    status = "UNLOCKED" if unlocked else "LOCKED"
    name = a.name or a.apiname
    desc = f" - {a.description}" if a.description else ""
    pct = global_pct.get(a.apiname)
    pct_str = f" ({pct:.1f}% of players)" if pct is not None else ""
    unlock_time = f" [{format_date(a.unlocktime)}]" if unlocked and a.unlocktime > 0 else ""
    return f"[{status}] {name}{desc}{pct_str}{unlock_time}"


async def _global_percentages(state: AppState, app_id: int) -> dict[str, float]:
    try:
        globals_ = await state.steam.fetch_global_achievement_percentages(app_id)
    except SteamMCPError as exc:
        log.warning("global_achievements_unavailable", app_id=app_id, code=exc.code.value)
        return {}
    return {g.name: g.percent for g in globals_}


async def handle(args: GetPlayerAchievementsInput, state: AppState) -> str:
    api_key = require_api_key(state, NAME)
    user_id = resolve_steam_id(state, args.steamid)

    achievements = await state.steam.fetch_player_achievements(
        api_key, user_id, args.appid, args.language
    )
    if not achievements:
        return f"No achievements found for app {args.appid}. The game may have no achievements."

    global_pct = await _global_percentages(state, args.appid)

    unlocked = sorted(
        (a for a in achievements if a.achieved == 1),
        key=lambda a: a.unlocktime,
        reverse=True,
    )
    # Easiest first: highest global unlock rate
    locked = sorted(
        (a for a in achievements if a.achieved != 1),
        key=lambda a: global_pct.get(a.apiname, 0.0),
        reverse=True,
    )

    progress = len(unlocked) / len(achievements) * 100
    lines = [
        f"Achievements for app {args.appid} (Steam ID: {user_id})",
        f"Progress: {len(unlocked)}/{len(achievements)} ({progress:.1f}%)",
        "",
    ]
    if unlocked:
        lines.append(f"--- Unlocked ({len(unlocked)}) ---")
        lines.extend(format_achievement(a, global_pct) for a in unlocked)
    if locked:
        lines.extend(["", f"--- Locked ({len(locked)}) ---"])
        lines.extend(format_achievement(a, global_pct) for a in locked)

    return "\n".join(lines)
