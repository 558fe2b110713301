"""Unit tests for tool dispatch and the MCP server wiring."""

from __future__ import annotations

import json

import httpx
import pytest
import respx
from mcp import types

from steam_mcp.config import Settings
from steam_mcp.errors import ErrorCode, SteamMCPError, UpstreamError
from steam_mcp.server import ToolErrorEnvelope, create_server, dispatch, main
from steam_mcp.state import AppState

API = "https://api.steampowered.com"


class TestDispatch:
    async def test_runs_tool(self, app_state: AppState) -> None:
        with respx.mock:
            respx.get(f"{API}/ISteamUserStats/GetNumberOfCurrentPlayers/v0001/").mock(
                return_value=httpx.Response(200, json={"response": {"player_count": 7}})
            )
            text = await dispatch(app_state, "get-current-players", {"appid": 570})

        assert text == "App 570 currently has 7 players in-game on Steam."

    async def test_strips_prefix(self, app_state: AppState) -> None:
        with respx.mock:
            respx.get(f"{API}/ISteamUserStats/GetNumberOfCurrentPlayers/v0001/").mock(
                return_value=httpx.Response(200, json={"response": {"player_count": 7}})
            )
            text = await dispatch(
                app_state, "steam_get-current-players", {"appid": 570}, prefix="steam_"
            )

        assert "7 players" in text

    async def test_unknown_tool(self, app_state: AppState) -> None:
        with pytest.raises(SteamMCPError) as exc_info:
            await dispatch(app_state, "get-weather", {})

        assert exc_info.value.code == ErrorCode.INVALID_INPUT
        assert "Unknown tool: get-weather" in exc_info.value.message

    async def test_unprefixed_name_rejected_when_prefix_differs(self, app_state: AppState) -> None:
        with pytest.raises(SteamMCPError) as exc_info:
            await dispatch(app_state, "other_get-news", {"appid": 1}, prefix="steam_")

        assert exc_info.value.code == ErrorCode.INVALID_INPUT

    @pytest.mark.parametrize(
        ("name", "arguments", "fragment"),
        [
            ("search-apps", {}, "query"),
            ("search-apps", {"query": "dota", "limit": 0}, "limit"),
            ("search-apps", {"query": "dota", "limit": 51}, "limit"),
            ("search-apps", {"query": "x" * 501}, "500 characters"),
            ("get-store-details", {"appid": "abc"}, "appid"),
            ("get-games", {"steamid": "not-an-id"}, "Invalid Steam ID"),
            ("get-news", {"appid": 570, "count": 100}, "count"),
            ("get-current-players", {"appid": 570, "extra": True}, "extra"),
        ],
    )
    async def test_invalid_arguments(
        self, app_state: AppState, name: str, arguments: dict, fragment: str
    ) -> None:
        with pytest.raises(SteamMCPError) as exc_info:
            await dispatch(app_state, name, arguments)

        assert exc_info.value.code == ErrorCode.INVALID_INPUT
        assert fragment in exc_info.value.message
        assert exc_info.value.recoverable is False

    async def test_none_arguments_treated_as_empty(self, app_state: AppState) -> None:
        with pytest.raises(SteamMCPError) as exc_info:
            await dispatch(app_state, "search-apps", None)

        assert exc_info.value.code == ErrorCode.INVALID_INPUT

    async def test_too_many_steam_ids(self, app_state: AppState) -> None:
        ids = ",".join(str(i) for i in range(101))
        with pytest.raises(SteamMCPError, match="at most 100"):
            await dispatch(app_state, "get-player-summaries", {"steamids": ids})


class TestToolErrorEnvelope:
    def test_message_is_json_payload(self) -> None:
        error = UpstreamError("Failed to fetch news: HTTP 502", status_code=502)

        envelope = ToolErrorEnvelope(error)

        parsed = json.loads(str(envelope))
        assert parsed == {
            "error": {
                "code": "UPSTREAM_FAILED",
                "message": "Failed to fetch news: HTTP 502",
                "suggestion": "Steam may be temporarily unavailable. Retry in a moment.",
                "recoverable": True,
            }
        }
        assert envelope.error is error


class TestCreateServer:
    async def test_lists_all_tools_with_prefix(self) -> None:
        server = create_server(Settings(tool_prefix="steam_"))

        handler = server.request_handlers[types.ListToolsRequest]
        result = await handler(types.ListToolsRequest(method="tools/list"))

        names = [tool.name for tool in result.root.tools]
        assert len(names) == 9
        assert all(name.startswith("steam_") for name in names)
        assert "steam_search-apps" in names

    async def test_tools_carry_input_schema(self) -> None:
        server = create_server(Settings(tool_prefix=""))

        handler = server.request_handlers[types.ListToolsRequest]
        result = await handler(types.ListToolsRequest(method="tools/list"))

        search = next(tool for tool in result.root.tools if tool.name == "search-apps")
        assert "query" in search.inputSchema["properties"]


class TestMain:
    def test_invalid_configuration_exits_nonzero(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("STEAM_MCP__CATALOG__DISTANCE", "not-a-number")

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        assert "Invalid steam-mcp configuration" in capsys.readouterr().err
