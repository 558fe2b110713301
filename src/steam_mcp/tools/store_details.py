"""get-store-details: storefront page for one app, rendered as markdown."""

from __future__ import annotations

from typing import TYPE_CHECKING

from steam_mcp.errors import ErrorCode, SteamMCPError
from steam_mcp.models.steam import Requirements, StoreData
from steam_mcp.models.tools import GetStoreDetailsInput
from steam_mcp.tools._common import strip_html

if TYPE_CHECKING:
    from steam_mcp.state import AppState

NAME = "get-store-details"
DESCRIPTION = (
    "Fetch comprehensive store information for a Steam game including pricing, "
    "descriptions, screenshots, videos, system requirements, and reviews. Supports "
    "region-specific pricing. No Steam API key required."
)
INPUT = GetStoreDetailsInput

MAX_SCREENSHOTS = 5
MAX_MOVIES = 3


def format_price(data: StoreData) -> str:
    if data.is_free:
        return "Free to Play"
    p = data.price_overview
    if p is None:
        return "Price not available"
    if p.discount_percent > 0:
        return f"{p.final_formatted} ({p.discount_percent}% off, was {p.initial_formatted})"
    return p.final_formatted


def format_requirements(reqs: Requirements | list | None) -> str | None:
    if not isinstance(reqs, Requirements):
        return None
    parts = []
    if reqs.minimum:
        parts.append(f"Minimum: {strip_html(reqs.minimum)}")
    if reqs.recommended:
        parts.append(f"Recommended: {strip_html(reqs.recommended)}")
    return "\n".join(parts) or None


def render(data: StoreData) -> str:
    platforms = ", ".join(
        label
        for label, supported in (
            ("Windows", data.platforms.windows),
            ("macOS", data.platforms.mac),
            ("Linux", data.platforms.linux),
        )
        if supported
    )

    sections = [
        f"# {data.name}",
        f"**Type:** {data.type}",
        f"**App ID:** {data.steam_appid}",
        f"**Price:** {format_price(data)}",
        f"**Platforms:** {platforms}",
        f"**Store Page:** https://store.steampowered.com/app/{data.steam_appid}",
    ]

    if data.short_description:
        sections.append(f"\n**Description:** {strip_html(data.short_description)}")
    if data.developers:
        sections.append(f"**Developers:** {', '.join(data.developers)}")
    if data.publishers:
        sections.append(f"**Publishers:** {', '.join(data.publishers)}")
    if data.genres:
        sections.append(f"**Genres:** {', '.join(g.description for g in data.genres)}")
    if data.categories:
        sections.append(f"**Categories:** {', '.join(c.description for c in data.categories)}")
    if data.metacritic:
        sections.append(f"**Metacritic:** {data.metacritic.score}/100")
    if data.recommendations:
        sections.append(f"**Recommendations:** {data.recommendations.total:,}")
    if data.release_date:
        status = " (Coming Soon)" if data.release_date.coming_soon else ""
        sections.append(f"**Release Date:** {data.release_date.date}{status}")
    if data.supported_languages:
        sections.append(f"**Languages:** {strip_html(data.supported_languages)}")
    if data.controller_support:
        sections.append(f"**Controller Support:** {data.controller_support}")

    # Steam reports required_age as either an int or a numeric string
    required_age = int(data.required_age) if str(data.required_age).isdigit() else 0
    if required_age > 0:
        sections.append(f"**Required Age:** {required_age}+")

    for label, reqs in (
        ("PC", data.pc_requirements),
        ("Mac", data.mac_requirements),
        ("Linux", data.linux_requirements),
    ):
        formatted = format_requirements(reqs)
        if formatted:
            sections.append(f"\n**{label} Requirements:**\n{formatted}")

    if data.website:
        sections.append(f"**Website:** {data.website}")
    if data.header_image:
        sections.append(f"**Header Image:** {data.header_image}")

    if data.screenshots:
        shots = "\n".join(s.path_full for s in data.screenshots[:MAX_SCREENSHOTS])
        sections.append(f"\n**Screenshots:**\n{shots}")

    if data.movies:
        videos = "\n".join(
            f"{m.name}: {(m.mp4 or {}).get('max') or (m.webm or {}).get('max') or m.thumbnail}"
            for m in data.movies[:MAX_MOVIES]
        )
        sections.append(f"\n**Videos:**\n{videos}")

    return "\n".join(sections)


async def handle(args: GetStoreDetailsInput, state: AppState) -> str:
    data = await state.steam.fetch_store_details(args.appid, args.cc, args.language)
    if data is None:
        raise SteamMCPError(
            ErrorCode.APP_NOT_FOUND,
            f"App {args.appid} not found or store page unavailable.",
            suggestion="Use search-apps to look up the correct app ID.",
        )
    return render(data)
