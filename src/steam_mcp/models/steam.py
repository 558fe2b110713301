"""Payload models for the Steam Web API and storefront endpoints.

Only the fields the tools render are declared; Steam adds fields freely and
unknown keys are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SteamApp(BaseModel):
    """Single catalog entry from IStoreService/GetAppList."""

    model_config = {"frozen": True}

    appid: int = Field(ge=0)
    name: str


class AppListPage(BaseModel):
    apps: list[SteamApp] = []
    have_more_results: bool = False
    last_appid: int | None = None


class PriceOverview(BaseModel):
    currency: str = ""
    initial: int = 0
    final: int = 0
    discount_percent: int = 0
    initial_formatted: str = ""
    final_formatted: str = ""


class Platforms(BaseModel):
    windows: bool = False
    mac: bool = False
    linux: bool = False


class Metacritic(BaseModel):
    score: int
    url: str = ""


class Description(BaseModel):
    id: int | str
    description: str


class Screenshot(BaseModel):
    id: int
    path_thumbnail: str = ""
    path_full: str = ""


class Movie(BaseModel):
    id: int
    name: str = ""
    thumbnail: str = ""
    webm: dict[str, str] | None = None
    mp4: dict[str, str] | None = None


class Recommendations(BaseModel):
    total: int = 0


class ReleaseDate(BaseModel):
    coming_soon: bool = False
    date: str = ""


class Requirements(BaseModel):
    minimum: str | None = None
    recommended: str | None = None


class StoreData(BaseModel):
    """``data`` block of store.steampowered.com/api/appdetails."""

    type: str = ""
    name: str
    steam_appid: int
    required_age: int | str = 0
    is_free: bool = False
    controller_support: str | None = None
    short_description: str = ""
    supported_languages: str | None = None
    header_image: str = ""
    website: str | None = None
    developers: list[str] = []
    publishers: list[str] = []
    price_overview: PriceOverview | None = None
    platforms: Platforms = Platforms()
    metacritic: Metacritic | None = None
    categories: list[Description] = []
    genres: list[Description] = []
    screenshots: list[Screenshot] = []
    movies: list[Movie] = []
    recommendations: Recommendations | None = None
    release_date: ReleaseDate | None = None
    # Steam sends [] instead of an object when a platform has no requirements
    pc_requirements: Requirements | list[Any] | None = None
    mac_requirements: Requirements | list[Any] | None = None
    linux_requirements: Requirements | list[Any] | None = None


class OwnedGame(BaseModel):
    appid: int
    name: str = ""
    playtime_forever: int = 0
    playtime_2weeks: int | None = None
    img_icon_url: str | None = None
    rtime_last_played: int | None = None


class RecentGame(BaseModel):
    appid: int
    name: str = ""
    playtime_forever: int = 0
    playtime_2weeks: int = 0
    img_icon_url: str | None = None


class PlayerSummary(BaseModel):
    steamid: str
    personaname: str = ""
    profileurl: str = ""
    avatar: str = ""
    avatarmedium: str = ""
    avatarfull: str = ""
    personastate: int = 0
    communityvisibilitystate: int = 1
    profilestate: int | None = None
    lastlogoff: int | None = None
    realname: str | None = None
    timecreated: int | None = None
    gameid: str | None = None
    gameextrainfo: str | None = None
    loccountrycode: str | None = None


class Friend(BaseModel):
    steamid: str
    relationship: str = "friend"
    friend_since: int = 0


class PlayerAchievement(BaseModel):
    apiname: str
    achieved: int = 0
    unlocktime: int = 0
    name: str | None = None
    description: str | None = None


class GlobalAchievementPercentage(BaseModel):
    name: str
    percent: float


class NewsItem(BaseModel):
    gid: str = ""
    title: str = ""
    url: str = ""
    is_external_url: bool = False
    author: str = ""
    contents: str = ""
    feedlabel: str = ""
    date: int = 0
    feedname: str = ""
    appid: int | None = None
