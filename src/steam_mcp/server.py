"""MCP server entry point.

Run with ``python -m steam_mcp.server`` or the ``steam-mcp`` console script.
Serves JSON-RPC over stdio; all logging goes to stderr.

Tool failures are returned as ``isError`` results whose text is a JSON envelope
(``{"error": {"code", "message", "suggestion", "recoverable"}}``) rather than a
free-form message, so clients can tell a failure apart from an empty result.
"""

from __future__ import annotations

import asyncio
import json
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from steam_mcp import __version__
from steam_mcp.config import Settings
from steam_mcp.errors import InternalError, SteamMCPError, invalid_input_error
from steam_mcp.logging_config import configure_logging
from steam_mcp.state import AppState
from steam_mcp.steam_api import build_http_client
from steam_mcp.tools import TOOLS, TOOLS_BY_NAME

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

log = structlog.get_logger()

SERVER_NAME = "steam-mcp"


class ToolErrorEnvelope(Exception):
    """Raised out of the call_tool handler; the MCP server reports ``str(exc)`` with isError."""

    def __init__(self, error: SteamMCPError) -> None:
        super().__init__(json.dumps(error.to_payload()))
        self.error = error


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


async def dispatch(
    state: AppState,
    name: str,
    arguments: dict[str, Any] | None,
    prefix: str = "",
) -> str:
    """Validate ``arguments`` against the named tool's input model and run it."""
    tool_name = name[len(prefix) :] if prefix and name.startswith(prefix) else name
    spec = TOOLS_BY_NAME.get(tool_name)
    if spec is None:
        raise invalid_input_error(f"Unknown tool: {name}")

    try:
        args = spec.input_model.model_validate(arguments or {})
    except ValidationError as exc:
        raise invalid_input_error(_format_validation_error(exc)) from exc

    return await spec.handler(args, state)


def create_server(settings: Settings) -> Server:
    prefix = settings.tool_prefix

    @asynccontextmanager
    async def lifespan(_server: Server) -> AsyncIterator[AppState]:
        async with build_http_client(settings.steam) as client:
            yield AppState.build(settings, client)

    server = Server(SERVER_NAME, version=__version__, lifespan=lifespan)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=f"{prefix}{tool.name}",
                description=tool.description,
                inputSchema=tool.input_schema(),
            )
            for tool in TOOLS
        ]

    # Arguments are validated by the pydantic input models so that failures
    # come back in the same envelope as every other tool error.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        state: AppState = server.request_context.lifespan_context
        try:
            text = await dispatch(state, name, arguments, prefix)
        except SteamMCPError as exc:
            log.warning("tool_error", tool=name, code=exc.code.value, message=exc.message)
            raise ToolErrorEnvelope(exc) from exc
        except Exception as exc:
            log.error("tool_unexpected_error", tool=name, exc_info=True)
            raise ToolErrorEnvelope(InternalError(f"Unexpected error: {exc}")) from exc
        return [types.TextContent(type="text", text=text)]

    return server


async def serve(settings: Settings) -> None:
    server = create_server(settings)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Invalid steam-mcp configuration:\n{exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.logging)
    log.info(
        "server_starting",
        version=__version__,
        tools=len(TOOLS),
        tool_prefix=settings.tool_prefix or None,
        api_key_configured=settings.api_key() is not None,
    )
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        log.info("server_stopped")


if __name__ == "__main__":
    main()
