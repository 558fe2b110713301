"""Tool registry.

Each ``ToolSpec`` pairs an MCP tool name with its input model and handler. The
server prefixes names with ``Settings.tool_prefix`` when listing and strips it
again when dispatching.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from steam_mcp.models.tools import (
    GetFriendListInput,
    GetGamesInput,
    GetPlayerSummariesInput,
    GetRecentGamesInput,
)
from steam_mcp.tools import (
    achievements,
    current_players,
    games,
    news,
    players,
    search_apps,
    store_details,
)

if TYPE_CHECKING:
    from steam_mcp.state import AppState


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: Callable[[Any, AppState], Awaitable[str]]

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(search_apps.NAME, search_apps.DESCRIPTION, search_apps.INPUT, search_apps.handle),
    ToolSpec(
        store_details.NAME, store_details.DESCRIPTION, store_details.INPUT, store_details.handle
    ),
    ToolSpec(games.OWNED_NAME, games.OWNED_DESCRIPTION, GetGamesInput, games.handle_owned),
    ToolSpec(
        games.RECENT_NAME, games.RECENT_DESCRIPTION, GetRecentGamesInput, games.handle_recent
    ),
    ToolSpec(
        players.SUMMARIES_NAME,
        players.SUMMARIES_DESCRIPTION,
        GetPlayerSummariesInput,
        players.handle_summaries,
    ),
    ToolSpec(
        players.FRIENDS_NAME,
        players.FRIENDS_DESCRIPTION,
        GetFriendListInput,
        players.handle_friends,
    ),
    ToolSpec(achievements.NAME, achievements.DESCRIPTION, achievements.INPUT, achievements.handle),
    ToolSpec(
        current_players.NAME,
        current_players.DESCRIPTION,
        current_players.INPUT,
        current_players.handle,
    ),
    ToolSpec(news.NAME, news.DESCRIPTION, news.INPUT, news.handle),
)

TOOLS_BY_NAME: dict[str, ToolSpec] = {tool.name: tool for tool in TOOLS}
