"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (STEAM_MCP__LOGGING__LEVEL=DEBUG, STEAM_API_KEY=...)
  2. steam-mcp.yaml         (searched in cwd, then the platform user config dir)
  3. Hardcoded defaults

The config file is optional. Only the Steam API key is needed for the tools that
call keyed endpoints; everything else has a working default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_CONFIG_FILENAME = "steam-mcp.yaml"
_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("steam-mcp")


def _find_config_file() -> str | None:
    """Return the path of the first steam-mcp.yaml found, or None."""
    candidates = [
        Path(_CONFIG_FILENAME),
        Path(_DEFAULT_CONFIG_DIR) / _CONFIG_FILENAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class SteamSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    api_base_url: str = "https://api.steampowered.com"
    store_base_url: str = "https://store.steampowered.com"
    request_timeout_seconds: float = 30.0
    app_list_page_size: int = Field(default=50000, ge=1, le=50000)


class CatalogSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    refresh_interval_hours: float = Field(default=24, gt=0)
    # Fuzzy matching knobs, see steam_mcp.matching.FuzzyMatcher
    threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    distance: int = Field(default=200, ge=1)
    min_match_char_length: int = Field(default=2, ge=1)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: STEAM_MCP__CATALOG__THRESHOLD=0.4
        env_prefix="STEAM_MCP__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    # Top-level credentials keep the plain variable names Steam users already export.
    steam_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("steam_api_key", "STEAM_MCP__STEAM_API_KEY"),
    )
    steam_user_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("steam_user_id", "STEAM_MCP__STEAM_USER_ID"),
    )
    tool_prefix: str = Field(
        default="",
        validation_alias=AliasChoices("tool_prefix", "STEAM_MCP__TOOL_PREFIX"),
    )

    steam: SteamSettings = SteamSettings()
    catalog: CatalogSettings = CatalogSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )

    def api_key(self) -> str | None:
        """Return the Steam API key as plain text, or None when unset or blank."""
        if self.steam_api_key is None:
            return None
        value = self.steam_api_key.get_secret_value().strip()
        return value or None
