# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Search tool handler."""

from __future__ import annotations

import logging

from notion_mcp.core.client import NotionClient
from notion_mcp.core.errors import format_error
from notion_mcp.core.search import summarize_search_results

from ..validation import SearchPagesArgs
from ._utils import ToolOutcome

logger = logging.getLogger(__name__)


async def search_pages(client: NotionClient, args: SearchPagesArgs) -> ToolOutcome:
    """Search pages and summarize the matches as a bulleted list."""
    logger.info(f"Searching for: {args.query}")

    try:
        response = await client.search(args.query)
    except Exception as e:  # Intentionally broad: upstream failures become response text
        logger.warning(f"Error searching pages: {e}")
        return ToolOutcome.failure(format_error(e))

    results = response.get("results") or []
    return ToolOutcome(summarize_search_results(args.query, results))
