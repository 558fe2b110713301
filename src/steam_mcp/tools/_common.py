"""Helpers shared by the tool handlers: credentials, Steam ID fallback, text cleanup."""

from __future__ import annotations

import html
import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from steam_mcp.errors import invalid_input_error, missing_api_key_error

if TYPE_CHECKING:
    from steam_mcp.state import AppState

_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")


def require_api_key(state: AppState, feature: str) -> str:
    api_key = state.settings.api_key()
    if api_key is None:
        raise missing_api_key_error(feature)
    return api_key


def resolve_steam_id(state: AppState, steamid: str | None, argument: str = "steamid") -> str:
    """Return the explicit Steam ID, else STEAM_USER_ID, else raise INVALID_INPUT."""
    user_id = steamid or state.settings.steam_user_id
    if not user_id:
        raise invalid_input_error(
            f"No Steam ID provided. Pass a {argument} argument or set the "
            "STEAM_USER_ID environment variable."
        )
    return user_id


def strip_html(text: str) -> str:
    text = _BR_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    return html.unescape(text).strip()


def format_date(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, UTC).date().isoformat()


def format_datetime(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, UTC).strftime("%Y-%m-%d %H:%M UTC")


def minutes_to_hours(minutes: int) -> str:
    return f"{minutes / 60:.1f}"
