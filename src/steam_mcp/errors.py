"""Error taxonomy shared by the Steam client, the search cache and the tools.

Every failure that reaches an MCP client is a ``SteamMCPError``. The server
turns it into a structured envelope (see ``SteamMCPError.to_payload``) so the
agent can branch on ``code`` and ``recoverable`` instead of parsing prose.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

API_KEY_URL = "https://steamcommunity.com/dev/apikey"


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    STEAM_API_KEY_MISSING = "STEAM_API_KEY_MISSING"
    UPSTREAM_FAILED = "UPSTREAM_FAILED"
    APP_NOT_FOUND = "APP_NOT_FOUND"
    PROFILE_PRIVATE = "PROFILE_PRIVATE"
    ACHIEVEMENTS_UNAVAILABLE = "ACHIEVEMENTS_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SteamMCPError(Exception):
    """Base error carrying a machine-readable code and a remediation hint."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_payload(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }


class ConfigurationError(SteamMCPError):
    """Required configuration (the Steam API key) is missing."""

    def __init__(self, message: str, suggestion: str = "") -> None:
        super().__init__(
            ErrorCode.STEAM_API_KEY_MISSING,
            message,
            suggestion=suggestion,
            recoverable=False,
        )


class UpstreamError(SteamMCPError):
    """A Steam endpoint could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(
            ErrorCode.UPSTREAM_FAILED,
            message,
            suggestion="Steam may be temporarily unavailable. Retry in a moment.",
            recoverable=True,
        )
        self.status_code = status_code


class InternalError(SteamMCPError):
    """An internal invariant was violated. Indicates a bug, never user error."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INTERNAL_ERROR, message, recoverable=False)


def missing_api_key_error(feature: str) -> ConfigurationError:
    return ConfigurationError(
        f"STEAM_API_KEY environment variable is required for {feature}.",
        suggestion=f"Get your key at {API_KEY_URL} and export it as STEAM_API_KEY.",
    )


def invalid_input_error(message: str) -> SteamMCPError:
    return SteamMCPError(ErrorCode.INVALID_INPUT, message, recoverable=False)
