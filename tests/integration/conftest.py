"""Integration test fixtures.

The integration tests start ``python -m steam_mcp.server`` as a subprocess and
talk JSON-RPC to it over stdio, so the environment they pass must not leak the
developer's own Steam credentials or overrides.
"""

from __future__ import annotations

import os

import pytest


@pytest.fixture()
def subprocess_env(tmp_path) -> dict[str, str]:
    """Copy of os.environ without Steam credentials, run from an empty directory."""
    env = {
        key: value
        for key, value in os.environ.items()
        if key.upper() not in {"STEAM_API_KEY", "STEAM_USER_ID", "TOOL_PREFIX"}
        and not key.upper().startswith("STEAM_MCP__")
    }
    # Point the user config dir somewhere empty so a local steam-mcp.yaml is never read
    env["XDG_CONFIG_HOME"] = str(tmp_path / "config")
    return env
