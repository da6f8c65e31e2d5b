# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Argument contracts for each tool.

Arguments are checked before any Notion request is made. Required fields
must be present with the declared primitive type; unknown extra fields are
ignored. The first violation is reported as a ``ValidationException`` that
names the field and the type declared for it in the tool's input schema.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from notion_mcp.core.exceptions import UnknownToolError, ValidationException

from .tools import TOOLS_BY_NAME, ToolName


class ToolArguments(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class SearchPagesArgs(ToolArguments):
    query: str


class ReadPageArgs(ToolArguments):
    page_id: str = Field(alias="pageId")


class QueryDatabaseArgs(ToolArguments):
    database_id: str = Field(alias="databaseId")
    filter: dict[str, Any] | None = None
    sort: dict[str, Any] | None = None


class RetrieveDatabaseArgs(ToolArguments):
    database_id: str = Field(alias="databaseId")


TOOL_ARGUMENTS: dict[ToolName, type[ToolArguments]] = {
    ToolName.SEARCH_PAGES: SearchPagesArgs,
    ToolName.READ_PAGE: ReadPageArgs,
    ToolName.QUERY_DATABASE: QueryDatabaseArgs,
    ToolName.RETRIEVE_DATABASE: RetrieveDatabaseArgs,
}


def resolve_tool(name: str) -> ToolName:
    """Map a requested tool name onto the registry.

    Raises:
        UnknownToolError: If no tool has that name
    """
    try:
        return ToolName(name)
    except ValueError:
        raise UnknownToolError(name) from None


def _expected_type(tool: ToolName, field: str) -> str:
    properties = TOOLS_BY_NAME[tool.value].inputSchema.get("properties", {})
    return properties.get(field, {}).get("type", "object")


def validate_arguments(tool: ToolName, arguments: Any) -> ToolArguments:
    """Narrow raw arguments to the tool's argument model.

    Args:
        tool: Registered tool
        arguments: Arguments as received; None is treated as an empty object

    Returns:
        The validated, immutable argument model

    Raises:
        ValidationException: On the first missing or mistyped field
    """
    model = TOOL_ARGUMENTS[tool]
    try:
        return model.model_validate({} if arguments is None else arguments)
    except PydanticValidationError as e:
        first = e.errors()[0]
        if not first["loc"]:
            raise ValidationException(
                f"Invalid arguments for {tool}: arguments must be an object",
                field="arguments",
                expected="object",
            ) from None

        field = str(first["loc"][0])
        expected = _expected_type(tool, field)
        if first["type"] == "missing":
            message = f"Invalid arguments for {tool}: missing required field '{field}' (expected {expected})"
        else:
            message = f"Invalid arguments for {tool}: field '{field}' must be of type {expected}"
        raise ValidationException(message, field=field, expected=expected) from None
