# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Notion MCP server: read-only Notion tools over the Model Context Protocol."""

__version__ = "1.0.0"
