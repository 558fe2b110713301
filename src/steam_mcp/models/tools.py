"""Tool input models.

Each model doubles as the tool's JSON schema (``model_json_schema``) and as its
argument validator. Field descriptions are what the agent sees.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

_STEAM_ID_DESCRIPTION = (
    "64-bit Steam ID of the user. Defaults to STEAM_USER_ID environment variable "
    "if not provided."
)
_STEAM_ID_RE = re.compile(r"^\d{1,20}$")

MAX_STEAM_IDS = 100


def _check_steam_id(v: str) -> str:
    v = v.strip()
    if not _STEAM_ID_RE.match(v):
        raise ValueError(f"Invalid Steam ID: {v!r}")
    return v


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SearchAppsInput(ToolInput):
    query: str = Field(description="Search query to find Steam apps by name")
    limit: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum number of results to return (1-50, default 10)",
    )

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        if len(v) > 500:
            raise ValueError("query must not exceed 500 characters")
        return v


class GetStoreDetailsInput(ToolInput):
    appid: int = Field(ge=0, description="Steam application ID")
    cc: str | None = Field(
        default=None,
        min_length=2,
        max_length=2,
        description="Two-letter country code for regional pricing (e.g., 'us', 'gb', 'de')",
    )
    language: str | None = Field(
        default=None,
        description="Language for descriptions (e.g., 'english', 'french', 'german')",
    )


class SteamIdInput(ToolInput):
    steamid: str | None = Field(default=None, description=_STEAM_ID_DESCRIPTION)

    @field_validator("steamid")
    @classmethod
    def validate_steamid(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return _check_steam_id(v)


class GetGamesInput(SteamIdInput):
    pass


class GetRecentGamesInput(SteamIdInput):
    pass


class GetFriendListInput(SteamIdInput):
    relationship: Literal["all", "friend"] | None = Field(
        default=None,
        description=(
            'Relationship filter. "friend" (default) returns only friends, '
            '"all" returns all relationships.'
        ),
    )


class GetPlayerAchievementsInput(SteamIdInput):
    appid: int = Field(ge=0, description="Steam application ID of the game.")
    language: str | None = Field(
        default=None,
        description=(
            "Language code for localized achievement names and descriptions "
            "(e.g., 'english', 'french', 'german')."
        ),
    )


class GetPlayerSummariesInput(ToolInput):
    steamids: str | None = Field(
        default=None,
        description=(
            "Comma-delimited list of 64-bit Steam IDs (up to 100). Defaults to "
            "STEAM_USER_ID environment variable if not provided."
        ),
    )

    @field_validator("steamids")
    @classmethod
    def validate_steamids(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        ids = [_check_steam_id(part) for part in v.split(",") if part.strip()]
        if len(ids) > MAX_STEAM_IDS:
            raise ValueError(f"at most {MAX_STEAM_IDS} Steam IDs may be requested at once")
        return ",".join(ids)


class GetCurrentPlayersInput(ToolInput):
    appid: int = Field(ge=0, description="Steam application ID of the game.")


class GetNewsInput(ToolInput):
    appid: int = Field(ge=0, description="Steam application ID of the game.")
    count: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Number of news entries to return (1-50, default 5).",
    )
    maxlength: int = Field(
        default=500,
        ge=0,
        description=(
            "Maximum length of each news entry's content. 0 returns full content. "
            "Default 500."
        ),
    )
