"""MCP server exposing read-only Notion tools.

Every tool call is resolved against the registry, validated, and then
handed to exactly one handler. Handlers absorb Notion failures into the
response text; only an unknown tool name or invalid arguments escape to
the transport as a failed call.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from notion_mcp import __version__
from notion_mcp.core.client import NotionClient, get_client
from notion_mcp.core.exceptions import UnknownToolError, ValidationException
from notion_mcp.core.health import cli_health_check, startup_checks
from notion_mcp.core.logging import CallState, ToolCallTrace, call_context, configure_logging

from .handlers._utils import ToolOutcome, text_envelope
from .handlers.databases import query_database, retrieve_database
from .handlers.pages import read_page
from .handlers.search import search_pages
from .tools import NOTION_TOOLS, ToolName
from .validation import resolve_tool, validate_arguments

logger = logging.getLogger(__name__)

server = Server("notion-server", version=__version__)


# ============================================================================
# Tool Handler Registry
# ============================================================================

ToolHandler = Callable[[NotionClient, Any], Awaitable[ToolOutcome]]

TOOL_HANDLERS: dict[ToolName, ToolHandler] = {
    ToolName.SEARCH_PAGES: search_pages,
    ToolName.READ_PAGE: read_page,
    ToolName.QUERY_DATABASE: query_database,
    ToolName.RETRIEVE_DATABASE: retrieve_database,
}


# ============================================================================
# MCP Server Protocol Implementation
# ============================================================================


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    logger.info("Tools requested by client")
    return NOTION_TOOLS


@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
    """Route a tool call to its handler.

    Arguments are checked here rather than by the SDK so that every
    rejection carries the same field-level message.

    Raises:
        UnknownToolError: If ``name`` is not a registered tool
        ValidationException: If the arguments do not satisfy the tool's contract
    """
    with call_context():
        trace = ToolCallTrace(name, arguments)

        try:
            tool = resolve_tool(name)
            args = validate_arguments(tool, arguments)
        except (UnknownToolError, ValidationException) as e:
            trace.advance(CallState.FAILED, e.message)
            raise

        trace.advance(CallState.VALIDATED)
        trace.advance(CallState.EXECUTING)
        outcome = await TOOL_HANDLERS[tool](get_client(), args)

        if outcome.failed:
            trace.advance(CallState.FAILED, outcome.text)
        else:
            trace.advance(CallState.SUCCEEDED)
        return text_envelope(outcome.text)


# ============================================================================
# Server Entry Point
# ============================================================================


def run() -> None:
    """Run the Notion MCP server over stdio."""
    parser = argparse.ArgumentParser(description="Notion MCP Server")
    parser.add_argument("--health-check", action="store_true", help="Verify the Notion credential and exit")
    parser.add_argument("--log-level", default=None, help="Override NOTION_MCP_LOG_LEVEL")
    args = parser.parse_args()

    configure_logging(level=args.log_level)

    if args.health_check:
        sys.exit(cli_health_check())

    startup_checks(fail_fast=True)

    async def main():
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Notion MCP Server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())

    try:
        asyncio.run(main())
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    run()
