# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Shared helpers for MCP tool handlers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from mcp.types import TextContent


@dataclass(frozen=True)
class ToolOutcome:
    """Text a handler produced, and whether it describes a failure.

    Absorbed Notion failures still reach the caller as ordinary text; the
    flag only lets the gateway record the call as failed.
    """

    text: str
    failed: bool = False

    @classmethod
    def failure(cls, text: str) -> ToolOutcome:
        return cls(text=text, failed=True)


def text_envelope(text: str) -> list[TextContent]:
    """Wrap handler output in the single-segment response envelope."""
    return [TextContent(type="text", text=text)]


def to_pretty_json(data: Any) -> str:
    """Serialize an API response for display."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)
