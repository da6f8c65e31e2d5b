# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Database tool handlers."""

from __future__ import annotations

import logging

from notion_mcp.core.client import NotionClient
from notion_mcp.core.errors import format_error

from ..validation import QueryDatabaseArgs, RetrieveDatabaseArgs
from ._utils import ToolOutcome, to_pretty_json

logger = logging.getLogger(__name__)


async def query_database(client: NotionClient, args: QueryDatabaseArgs) -> ToolOutcome:
    """Query a database and return the matching rows as JSON."""
    try:
        response = await client.query_database(
            args.database_id,
            filter=args.filter,
            sorts=[args.sort] if args.sort else None,
        )
    except Exception as e:  # Intentionally broad: upstream failures become response text
        logger.warning(f"Error querying database {args.database_id}: {e}")
        return ToolOutcome.failure(f"Error querying database: {format_error(e)}")

    return ToolOutcome(to_pretty_json(response.get("results", [])))


async def retrieve_database(client: NotionClient, args: RetrieveDatabaseArgs) -> ToolOutcome:
    """Return a database's metadata and property schema as JSON."""
    try:
        response = await client.retrieve_database(args.database_id)
    except Exception as e:  # Intentionally broad: upstream failures become response text
        logger.warning(f"Error retrieving database {args.database_id}: {e}")
        return ToolOutcome.failure(format_error(e))

    return ToolOutcome(to_pretty_json(response))
