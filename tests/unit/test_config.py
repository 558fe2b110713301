"""Unit tests for settings loading and validation."""

from __future__ import annotations

import os

import platformdirs
import pytest
from pydantic import ValidationError

from steam_mcp.config import (
    _CONFIG_FILENAME,
    _DEFAULT_CONFIG_DIR,
    CatalogSettings,
    LoggingSettings,
    Settings,
    SteamSettings,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("STEAM_API_KEY", "STEAM_USER_ID", "TOOL_PREFIX"):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.upper().startswith("STEAM_MCP__"):
            monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_config_dir_matches_platformdirs(self) -> None:
        assert platformdirs.user_config_dir("steam-mcp") == _DEFAULT_CONFIG_DIR
        assert _CONFIG_FILENAME == "steam-mcp.yaml"

    def test_catalog_defaults(self) -> None:
        settings = CatalogSettings()
        assert settings.refresh_interval_hours == 24
        assert settings.threshold == 0.3
        assert settings.distance == 200
        assert settings.min_match_char_length == 2

    def test_steam_defaults(self) -> None:
        settings = SteamSettings()
        assert settings.api_base_url == "https://api.steampowered.com"
        assert settings.store_base_url == "https://store.steampowered.com"
        assert settings.app_list_page_size == 50000

    def test_no_credentials_by_default(self) -> None:
        settings = Settings()
        assert settings.api_key() is None
        assert settings.steam_user_id is None
        assert settings.tool_prefix == ""
        assert settings.logging == LoggingSettings()


class TestEnvironment:
    def test_plain_steam_variables_are_read(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STEAM_API_KEY", "abc123")
        monkeypatch.setenv("STEAM_USER_ID", "76561197960435530")

        settings = Settings()

        assert settings.api_key() == "abc123"
        assert settings.steam_user_id == "76561197960435530"

    def test_prefixed_variables_are_read(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STEAM_MCP__STEAM_API_KEY", "prefixed")
        monkeypatch.setenv("STEAM_MCP__TOOL_PREFIX", "steam_")

        settings = Settings()

        assert settings.api_key() == "prefixed"
        assert settings.tool_prefix == "steam_"

    def test_nested_variables_override_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STEAM_MCP__CATALOG__THRESHOLD", "0.4")
        monkeypatch.setenv("STEAM_MCP__LOGGING__LEVEL", "DEBUG")

        settings = Settings()

        assert settings.catalog.threshold == 0.4
        assert settings.logging.level == "DEBUG"

    def test_key_is_not_exposed_in_repr(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STEAM_API_KEY", "super-secret")
        assert "super-secret" not in repr(Settings())


class TestApiKey:
    @pytest.mark.parametrize("raw", ["", "   ", "\n"])
    def test_blank_key_is_treated_as_missing(self, raw: str) -> None:
        assert Settings(steam_api_key=raw).api_key() is None

    def test_key_is_stripped(self) -> None:
        assert Settings(steam_api_key="  abc  ").api_key() == "abc"


class TestConfigValidation:
    def test_wrong_type_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(catalog={"distance": "not-a-number"})  # type: ignore[arg-type]

    def test_unknown_top_level_field_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(completely_unknown_field="oops")  # type: ignore[call-arg]

    def test_unknown_nested_field_raises_validation_error(self) -> None:
        # A YAML typo such as 'treshold' must not silently fall back to the default
        with pytest.raises(ValidationError):
            CatalogSettings(treshold=0.5)  # type: ignore[call-arg]

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range(self, threshold: float) -> None:
        with pytest.raises(ValidationError):
            CatalogSettings(threshold=threshold)

    def test_refresh_interval_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CatalogSettings(refresh_interval_hours=0)

    def test_page_size_capped(self) -> None:
        with pytest.raises(ValidationError):
            SteamSettings(app_list_page_size=50001)

    def test_unknown_log_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(format="xml")  # type: ignore[arg-type]
