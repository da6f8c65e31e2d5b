# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Custom exception hierarchy for the Notion MCP server.

Two families matter to callers:

- Request errors (``ValidationException``, ``UnknownToolError``) are raised
  before any Notion call and propagate to the MCP transport.
- Remote errors (``NotionAPIError``, ``RenderError``) are absorbed by tool
  handlers and turned into readable text.
"""

from __future__ import annotations

from typing import Any


class NotionMCPException(Exception):  # noqa: N818
    """Base exception for all notion_mcp errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(NotionMCPException):
    """Exception for tool argument validation errors.

    Raised when:
    - A required argument is missing
    - An argument has the wrong primitive type
    - The arguments payload is not an object
    """

    def __init__(self, message: str, field: str | None = None, expected: str | None = None):
        details = {}
        if field:
            details["field"] = field
        if expected:
            details["expected"] = expected
        super().__init__(message, details)
        self.field = field
        self.expected = expected


class UnknownToolError(NotionMCPException):
    """Exception for a tool name that is not in the registry."""

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", {"tool_name": tool_name})
        self.tool_name = tool_name


class ConfigException(NotionMCPException):
    """Exception for configuration errors.

    Raised when:
    - Required environment variables are missing
    - Configuration values are invalid
    """

    def __init__(self, message: str, missing_vars: list[str] | None = None):
        details = {}
        if missing_vars:
            details["missing_vars"] = missing_vars
        super().__init__(message, details)
        self.missing_vars = missing_vars or []


class NotionAPIError(NotionMCPException):
    """Non-2xx response from the Notion API.

    ``body`` holds the decoded error object, normally
    ``{"object": "error", "status": 404, "code": "object_not_found", "message": ...}``.
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        body: dict[str, Any] | None = None,
    ):
        details: dict[str, Any] = {}
        if status is not None:
            details["status"] = status
        if code:
            details["code"] = code
        super().__init__(message, details)
        self.status = status
        self.code = code
        self.body = body or {}

    @classmethod
    def from_response(cls, status: int, body: Any) -> NotionAPIError:
        """Build an error from an HTTP status and a decoded response body."""
        if not isinstance(body, dict):
            body = {"message": str(body)} if body else {}
        message = body.get("message") or f"HTTP {status}"
        return cls(message, status=status, code=body.get("code"), body=body)


class RenderError(NotionMCPException):
    """Page metadata could not be parsed into the shape the renderer needs."""

    pass
