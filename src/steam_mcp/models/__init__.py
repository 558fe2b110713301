from __future__ import annotations

from steam_mcp.models.catalog import SearchResult
from steam_mcp.models.steam import (
    AppListPage,
    Friend,
    GlobalAchievementPercentage,
    NewsItem,
    OwnedGame,
    PlayerAchievement,
    PlayerSummary,
    RecentGame,
    SteamApp,
    StoreData,
)
from steam_mcp.models.tools import (
    GetCurrentPlayersInput,
    GetFriendListInput,
    GetGamesInput,
    GetNewsInput,
    GetPlayerAchievementsInput,
    GetPlayerSummariesInput,
    GetRecentGamesInput,
    GetStoreDetailsInput,
    SearchAppsInput,
)

__all__ = [
    # steam payloads
    "SteamApp",
    "AppListPage",
    "StoreData",
    "OwnedGame",
    "RecentGame",
    "PlayerSummary",
    "Friend",
    "PlayerAchievement",
    "GlobalAchievementPercentage",
    "NewsItem",
    # catalog
    "SearchResult",
    # tools
    "SearchAppsInput",
    "GetStoreDetailsInput",
    "GetGamesInput",
    "GetRecentGamesInput",
    "GetPlayerSummariesInput",
    "GetFriendListInput",
    "GetPlayerAchievementsInput",
    "GetCurrentPlayersInput",
    "GetNewsInput",
]
