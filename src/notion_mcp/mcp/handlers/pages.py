# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Page tool handlers."""

from __future__ import annotations

import asyncio
import logging

from notion_mcp.core.client import NotionClient
from notion_mcp.core.errors import format_error
from notion_mcp.core.renderer import render_page

from ..validation import ReadPageArgs
from ._utils import ToolOutcome

logger = logging.getLogger(__name__)


async def read_page(client: NotionClient, args: ReadPageArgs) -> ToolOutcome:
    """Fetch a page and its top-level blocks and render them as text.

    Block listing and page metadata are requested concurrently; when one
    request fails the other is cancelled. Any remote or rendering failure
    is returned as readable text.
    """
    try:
        try:
            async with asyncio.TaskGroup() as tg:
                blocks_task = tg.create_task(client.list_block_children(args.page_id))
                page_task = tg.create_task(client.retrieve_page(args.page_id))
        except ExceptionGroup as eg:
            # Report the first failing request, not the group wrapper
            raise eg.exceptions[0] from eg

        blocks_response = blocks_task.result()
        return ToolOutcome(render_page(page_task.result(), blocks_response.get("results") or []))
    except Exception as e:  # Intentionally broad: upstream failures become response text
        logger.warning(f"Error reading page {args.page_id}: {e}")
        return ToolOutcome.failure(format_error(e))
