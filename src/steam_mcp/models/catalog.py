from __future__ import annotations

from pydantic import BaseModel, Field

from steam_mcp.models.steam import SteamApp


class SearchResult(BaseModel):
    """Single ranked hit returned by SearchCache.search."""

    app: SteamApp
    score: float = Field(ge=0.0, le=1.0)  # 1.0 = perfect match, 2 decimals
