# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Tool definitions for the Notion MCP server.

Contains NOTION_TOOLS, the catalog returned by list_tools. The input
schemas double as the contracts the argument validator reports against.

Tool list:
    search_pages       Search pages shared with the integration
    read_page          Render a page's content as text
    query_database     Query a database with optional filter / sort
    retrieve_database  Get a database's metadata and property schema
"""

from __future__ import annotations

from enum import StrEnum

from mcp.types import Tool


class ToolName(StrEnum):
    SEARCH_PAGES = "search_pages"
    READ_PAGE = "read_page"
    QUERY_DATABASE = "query_database"
    RETRIEVE_DATABASE = "retrieve_database"


NOTION_TOOLS = [
    Tool(
        name=ToolName.SEARCH_PAGES.value,
        description="Search through Notion pages",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query",
                },
            },
            "required": ["query"],
        },
    ),
    Tool(
        name=ToolName.READ_PAGE.value,
        description=(
            "Read a regular page's content (not for databases - use retrieve_database for databases). "
            "Lists child pages and child databases with their IDs."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "pageId": {
                    "type": "string",
                    "description": "ID of the page to read",
                },
            },
            "required": ["pageId"],
        },
    ),
    Tool(
        name=ToolName.QUERY_DATABASE.value,
        description="Query a database",
        inputSchema={
            "type": "object",
            "properties": {
                "databaseId": {
                    "type": "string",
                    "description": "ID of the database",
                },
                "filter": {
                    "type": "object",
                    "description": "Filter conditions",
                },
                "sort": {
                    "type": "object",
                    "description": "Sort conditions",
                },
            },
            "required": ["databaseId"],
        },
    ),
    Tool(
        name=ToolName.RETRIEVE_DATABASE.value,
        description="Retrieve a database's metadata",
        inputSchema={
            "type": "object",
            "properties": {
                "databaseId": {
                    "type": "string",
                    "description": "ID of the database to retrieve",
                },
            },
            "required": ["databaseId"],
        },
    ),
]

TOOLS_BY_NAME: dict[str, Tool] = {tool.name: tool for tool in NOTION_TOOLS}
