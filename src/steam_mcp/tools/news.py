"""get-news: latest announcements for an app, HTML stripped."""

from __future__ import annotations

from typing import TYPE_CHECKING

from steam_mcp.models.tools import GetNewsInput
from steam_mcp.tools._common import format_date, strip_html

if TYPE_CHECKING:
    from steam_mcp.models.steam import NewsItem
    from steam_mcp.state import AppState

NAME = "get-news"
DESCRIPTION = (
    "Get the latest news articles for a Steam game. Returns titles, URLs, content "
    "snippets, and dates. Does not require an API key."
)
INPUT = GetNewsInput


def render_item(item: NewsItem) -> str:
    author = f" by {item.author}" if item.author else ""
    lines = [
        f"**{item.title}**{author}",
        f"  Date: {format_date(item.date)} | Feed: {item.feedlabel}",
        f"  URL: {item.url}",
    ]
    content = strip_html(item.contents) if item.contents else ""
    if content:
        lines.append(f"  {content}")
    return "\n".join(lines)


async def handle(args: GetNewsInput, state: AppState) -> str:
    items = await state.steam.fetch_news(args.appid, args.count, args.maxlength)
    if not items:
        return f"No news found for app {args.appid}."
    articles = "\n\n".join(render_item(item) for item in items)
    return f"Latest news for app {args.appid}:\n\n{articles}"
