"""Async client for the Steam Web API and the storefront API.

All requests go through one shared ``httpx.AsyncClient``. Transport failures,
non-2xx responses and undecodable bodies all surface as ``UpstreamError``; the
endpoint-specific conditions (private friend list, hidden achievements, unknown
store app) get their own error codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from steam_mcp import __version__
from steam_mcp.config import SteamSettings
from steam_mcp.errors import ErrorCode, SteamMCPError, UpstreamError
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

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()

_M = TypeVar("_M", bound=BaseModel)


def build_http_client(settings: SteamSettings | None = None) -> httpx.AsyncClient:
    """Create the shared AsyncClient used for every Steam request."""
    settings = settings or SteamSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        follow_redirects=True,
        headers={
            "Accept": "application/json",
            "User-Agent": f"steam-mcp/{__version__}",
        },
    )


class SteamClient:
    """Thin wrapper mapping each Steam endpoint to a typed coroutine."""

    def __init__(self, client: httpx.AsyncClient, settings: SteamSettings | None = None) -> None:
        self._client = client
        self._settings = settings or SteamSettings()

    def _api_url(self, path: str) -> str:
        return f"{self._settings.api_base_url.rstrip('/')}/{path}"

    @staticmethod
    def _parse(model: type[_M], payload: Any, what: str) -> _M:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            log.warning("steam_response_invalid", what=what, errors=exc.error_count())
            raise UpstreamError(f"Failed to fetch {what}: unexpected response shape") from exc

    async def _get_json(self, url: str, params: dict[str, str], what: str) -> dict[str, Any]:
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            log.warning("steam_request_failed", what=what, url=url, error=str(exc))
            raise UpstreamError(f"Failed to fetch {what}: {exc}") from exc

        if not response.is_success:
            log.warning("steam_request_failed", what=what, url=url, status=response.status_code)
            raise UpstreamError(
                f"Failed to fetch {what}: HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(f"Failed to fetch {what}: response was not valid JSON") from exc
        if not isinstance(payload, dict):
            raise UpstreamError(f"Failed to fetch {what}: unexpected response shape")
        return payload

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def fetch_app_list(self, api_key: str) -> list[SteamApp]:
        """Walk IStoreService/GetAppList page by page and return every named app."""
        all_apps: list[SteamApp] = []
        last_appid = 0
        url = self._api_url("IStoreService/GetAppList/v1/")

        while True:
            params = {
                "key": api_key,
                "max_results": str(self._settings.app_list_page_size),
                "include_games": "true",
                "include_dlc": "true",
                "include_software": "true",
                "include_videos": "true",
                "include_hardware": "true",
            }
            if last_appid > 0:
                params["last_appid"] = str(last_appid)

            data = await self._get_json(url, params, "app list")
            page = self._parse(AppListPage, data.get("response") or {}, "app list")
            if not page.apps:
                break

            all_apps.extend(page.apps)
            last_appid = page.last_appid or page.apps[-1].appid
            log.debug("app_list_page_fetched", count=len(page.apps), last_appid=last_appid)

            if not page.have_more_results:
                break

        return [app for app in all_apps if app.name.strip()]

    # ------------------------------------------------------------------
    # Storefront
    # ------------------------------------------------------------------

    async def fetch_store_details(
        self,
        app_id: int,
        cc: str | None = None,
        language: str | None = None,
    ) -> StoreData | None:
        """Return store data for ``app_id``, or None when Steam has no store page for it."""
        params = {"appids": str(app_id)}
        if cc:
            params["cc"] = cc
        if language:
            params["l"] = language

        url = f"{self._settings.store_base_url.rstrip('/')}/api/appdetails/"
        data = await self._get_json(url, params, "store details")
        entry = data.get(str(app_id))
        if not entry or not entry.get("success") or not entry.get("data"):
            return None
        return self._parse(StoreData, entry["data"], "store details")

    # ------------------------------------------------------------------
    # Player service
    # ------------------------------------------------------------------

    async def fetch_owned_games(self, api_key: str, steam_id: str) -> list[OwnedGame]:
        params = {
            "key": api_key,
            "steamid": steam_id,
            "include_appinfo": "1",
            "include_played_free_games": "1",
            "format": "json",
        }
        data = await self._get_json(
            self._api_url("IPlayerService/GetOwnedGames/v0001/"), params, "owned games"
        )
        games = (data.get("response") or {}).get("games") or []
        return [self._parse(OwnedGame, g, "owned games") for g in games]

    async def fetch_recent_games(self, api_key: str, steam_id: str) -> list[RecentGame]:
        params = {"key": api_key, "steamid": steam_id, "format": "json"}
        data = await self._get_json(
            self._api_url("IPlayerService/GetRecentlyPlayedGames/v0001/"), params, "recent games"
        )
        games = (data.get("response") or {}).get("games") or []
        return [self._parse(RecentGame, g, "recent games") for g in games]

    # ------------------------------------------------------------------
    # User
    # ------------------------------------------------------------------

    async def fetch_player_summaries(
        self, api_key: str, steam_ids: Sequence[str]
    ) -> list[PlayerSummary]:
        params = {"key": api_key, "steamids": ",".join(steam_ids), "format": "json"}
        data = await self._get_json(
            self._api_url("ISteamUser/GetPlayerSummaries/v0002/"), params, "player summaries"
        )
        players = (data.get("response") or {}).get("players") or []
        return [self._parse(PlayerSummary, p, "player summaries") for p in players]

    async def fetch_friend_list(
        self,
        api_key: str,
        steam_id: str,
        relationship: str | None = None,
    ) -> list[Friend]:
        params = {
            "key": api_key,
            "steamid": steam_id,
            "relationship": relationship or "friend",
            "format": "json",
        }
        try:
            data = await self._get_json(
                self._api_url("ISteamUser/GetFriendList/v0001/"), params, "friend list"
            )
        except UpstreamError as exc:
            if exc.status_code == 401:
                raise SteamMCPError(
                    ErrorCode.PROFILE_PRIVATE,
                    "This user's friend list is not public. Friend lists are only "
                    "visible for profiles with public visibility.",
                    suggestion="Ask the user to make their friend list public.",
                ) from exc
            raise
        friends = (data.get("friendslist") or {}).get("friends") or []
        return [self._parse(Friend, f, "friend list") for f in friends]

    # ------------------------------------------------------------------
    # User stats
    # ------------------------------------------------------------------

    async def fetch_player_achievements(
        self,
        api_key: str,
        steam_id: str,
        app_id: int,
        language: str | None = None,
    ) -> list[PlayerAchievement]:
        params = {
            "key": api_key,
            "steamid": steam_id,
            "appid": str(app_id),
            "format": "json",
        }
        if language:
            params["l"] = language

        data = await self._get_json(
            self._api_url("ISteamUserStats/GetPlayerAchievements/v0001/"),
            params,
            "player achievements",
        )
        stats = data.get("playerstats") or {}
        if not stats.get("success"):
            raise SteamMCPError(
                ErrorCode.ACHIEVEMENTS_UNAVAILABLE,
                "Could not retrieve achievements. The game may have no achievements, "
                "or the user's profile may be private.",
            )
        return [
            self._parse(PlayerAchievement, a, "player achievements")
            for a in stats.get("achievements") or []
        ]

    async def fetch_global_achievement_percentages(
        self, app_id: int
    ) -> list[GlobalAchievementPercentage]:
        params = {"gameid": str(app_id), "format": "json"}
        data = await self._get_json(
            self._api_url("ISteamUserStats/GetGlobalAchievementPercentagesForApp/v0002/"),
            params,
            "global achievement percentages",
        )
        achievements = (data.get("achievementpercentages") or {}).get("achievements") or []
        return [
            self._parse(GlobalAchievementPercentage, a, "global achievement percentages")
            for a in achievements
        ]

    async def fetch_current_players(self, app_id: int) -> int:
        params = {"appid": str(app_id), "format": "json"}
        data = await self._get_json(
            self._api_url("ISteamUserStats/GetNumberOfCurrentPlayers/v0001/"),
            params,
            "current players",
        )
        count = (data.get("response") or {}).get("player_count")
        if count is None:
            raise UpstreamError("Failed to fetch current players: no player count in response")
        return int(count)

    # ------------------------------------------------------------------
    # News
    # ------------------------------------------------------------------

    async def fetch_news(self, app_id: int, count: int = 5, maxlength: int = 500) -> list[NewsItem]:
        params = {
            "appid": str(app_id),
            "count": str(count),
            "maxlength": str(maxlength),
            "format": "json",
        }
        data = await self._get_json(
            self._api_url("ISteamNews/GetNewsForApp/v0002/"), params, "news"
        )
        items = (data.get("appnews") or {}).get("newsitems") or []
        return [self._parse(NewsItem, i, "news") for i in items]
