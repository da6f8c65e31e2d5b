# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Notion MCP server package."""

from .server import TOOL_HANDLERS, run
from .tools import NOTION_TOOLS

__all__ = ["NOTION_TOOLS", "TOOL_HANDLERS", "run"]
