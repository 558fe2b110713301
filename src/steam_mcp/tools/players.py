"""get-player-summaries and get-friend-list."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from steam_mcp.errors import SteamMCPError
from steam_mcp.models.tools import MAX_STEAM_IDS, GetFriendListInput, GetPlayerSummariesInput
from steam_mcp.tools._common import (
    format_date,
    format_datetime,
    require_api_key,
    resolve_steam_id,
)

if TYPE_CHECKING:
    from steam_mcp.models.steam import PlayerSummary
    from steam_mcp.state import AppState

log = structlog.get_logger()

SUMMARIES_NAME = "get-player-summaries"
SUMMARIES_DESCRIPTION = (
    "Get Steam profile information for one or more users. Returns display name, avatar, "
    "online status, currently playing game, and more. Accepts up to 100 Steam IDs."
)

FRIENDS_NAME = "get-friend-list"
FRIENDS_DESCRIPTION = (
    "Get the friend list for a Steam user. Returns friend display names, Steam IDs, and "
    "when they became friends. Only works if the user's profile is public."
)

PERSONA_STATES = {
    0: "Offline",
    1: "Online",
    2: "Busy",
    3: "Away",
    4: "Snooze",
    5: "Looking to Trade",
    6: "Looking to Play",
}

VISIBILITY_PUBLIC = 3


def render_summary(p: PlayerSummary) -> str:
    lines = [
        f"**{p.personaname}** ({p.steamid})",
        f"  Status: {PERSONA_STATES.get(p.personastate, 'Unknown')}",
        f"  Profile: {p.profileurl}",
        f"  Avatar: {p.avatarfull}",
    ]

    if p.communityvisibilitystate == VISIBILITY_PUBLIC:
        if p.realname:
            lines.append(f"  Real Name: {p.realname}")
        if p.gameextrainfo:
            lines.append(f"  Currently Playing: {p.gameextrainfo}")
        if p.timecreated:
            lines.append(f"  Account Created: {format_date(p.timecreated)}")
        if p.loccountrycode:
            lines.append(f"  Country: {p.loccountrycode}")
    else:
        lines.append("  Profile Visibility: Private")

    if p.lastlogoff:
        lines.append(f"  Last Online: {format_datetime(p.lastlogoff)}")

    return "\n".join(lines)


async def handle_summaries(args: GetPlayerSummariesInput, state: AppState) -> str:
    api_key = require_api_key(state, SUMMARIES_NAME)
    ids = resolve_steam_id(state, args.steamids, argument="steamids")

    id_list = [part.strip() for part in ids.split(",") if part.strip()]
    players = await state.steam.fetch_player_summaries(api_key, id_list)
    if not players:
        return "No player profiles found for the provided Steam IDs."

    return "\n\n".join(render_summary(p) for p in players)


async def _persona_names(state: AppState, api_key: str, steam_ids: list[str]) -> dict[str, str]:
    """Best-effort lookup of display names, batched at the summaries endpoint's cap."""
    names: dict[str, str] = {}
    for start in range(0, len(steam_ids), MAX_STEAM_IDS):
        batch = steam_ids[start : start + MAX_STEAM_IDS]
        try:
            summaries = await state.steam.fetch_player_summaries(api_key, batch)
        except SteamMCPError as exc:
            log.warning("friend_names_unavailable", code=exc.code.value, batch_size=len(batch))
            continue
        names.update({s.steamid: s.personaname for s in summaries})
    return names


async def handle_friends(args: GetFriendListInput, state: AppState) -> str:
    api_key = require_api_key(state, FRIENDS_NAME)
    user_id = resolve_steam_id(state, args.steamid)

    friends = await state.steam.fetch_friend_list(api_key, user_id, args.relationship)
    if not friends:
        return (
            f"No friends found for Steam ID {user_id}. The profile may be private or the "
            "friend list may be empty."
        )

    names = await _persona_names(state, api_key, [f.steamid for f in friends])
    lines = [
        f"{names.get(f.steamid, 'Unknown')} ({f.steamid}) - Friends since "
        f"{format_date(f.friend_since)}"
        for f in friends
    ]
    return f"{len(friends)} friends for Steam ID {user_id}:\n\n" + "\n".join(lines)
