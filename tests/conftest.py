"""Shared fixtures: sample catalog, settings and a fully wired AppState."""

from __future__ import annotations

import httpx
import pytest

from steam_mcp.config import Settings
from steam_mcp.models.steam import SteamApp
from steam_mcp.state import AppState

TEST_API_KEY = "test-key"
TEST_STEAM_ID = "76561197960435530"


@pytest.fixture()
def sample_apps() -> list[SteamApp]:
    return [
        SteamApp(appid=570, name="Dota 2"),
        SteamApp(appid=730, name="Counter-Strike 2"),
        SteamApp(appid=440, name="Team Fortress 2"),
        SteamApp(appid=550, name="Left 4 Dead 2"),
    ]


@pytest.fixture()
def settings() -> Settings:
    """Settings with an API key and default user, independent of the caller's environment."""
    return Settings(steam_api_key=TEST_API_KEY, steam_user_id=TEST_STEAM_ID, tool_prefix="")


@pytest.fixture()
def settings_without_key() -> Settings:
    return Settings(steam_api_key=None, steam_user_id=None, tool_prefix="")


@pytest.fixture()
async def app_state(settings: Settings) -> AppState:
    async with httpx.AsyncClient() as client:
        yield AppState.build(settings, client)


@pytest.fixture()
async def app_state_without_key(settings_without_key: Settings) -> AppState:
    async with httpx.AsyncClient() as client:
        yield AppState.build(settings_without_key, client)
