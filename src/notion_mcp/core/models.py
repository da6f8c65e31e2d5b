# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Typed views over the Notion objects the server reads.

Only the title property has a shape the server depends on; every other
property value is carried through untouched. Blocks are wrapped, never
validated, so that an unexpected payload can degrade to empty output
instead of failing a whole page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .exceptions import RenderError


class RichText(BaseModel):
    """One run of rich text; only the plain projection is kept."""

    model_config = ConfigDict(extra="ignore")

    plain_text: str


class TitleProperty(BaseModel):
    """The ``title`` property variant."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["title"]
    title: list[RichText]


class NotionPage(BaseModel):
    """Minimal page shape: identity, link and raw properties."""

    model_config = ConfigDict(extra="ignore")

    id: str
    url: str
    properties: dict[str, Any]

    @classmethod
    def parse(cls, raw: Any) -> NotionPage:
        """Validate a page object from the API.

        Raises:
            RenderError: If the page or its title property does not have the expected shape
        """
        try:
            page = cls.model_validate(raw)
            for value in page.properties.values():
                if isinstance(value, dict) and value.get("type") == "title":
                    TitleProperty.model_validate(value)
        except PydanticValidationError as e:
            raise RenderError(f"Unexpected page shape: {e.errors()[0]['msg']}", {"errors": e.errors()}) from e
        return page

    @property
    def title(self) -> str | None:
        """Plain text of the first run of the first title-typed property."""
        for value in self.properties.values():
            if isinstance(value, dict) and value.get("type") == "title":
                runs = TitleProperty.model_validate(value).title
                return runs[0].plain_text if runs else None
        return None


class BlockType(StrEnum):
    """Block discriminants the renderer formats explicitly."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    CODE = "code"
    CHILD_PAGE = "child_page"
    CHILD_DATABASE = "child_database"


@dataclass(frozen=True)
class Block:
    """A single content block.

    ``payload`` is the object stored under the block's own ``type`` key.
    ``kind`` is None for discriminants outside ``BlockType``; such blocks
    keep their raw payload for generic text extraction.
    """

    id: str
    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Any) -> Block:
        """Wrap a raw block object. Never raises."""
        if not isinstance(raw, dict):
            return cls(id="", type="")
        block_type = raw.get("type")
        block_type = block_type if isinstance(block_type, str) else ""
        payload = raw.get(block_type) if block_type else None
        block_id = raw.get("id")
        return cls(
            id=block_id if isinstance(block_id, str) else "",
            type=block_type,
            payload=payload if isinstance(payload, dict) else {},
        )

    @property
    def kind(self) -> BlockType | None:
        try:
            return BlockType(self.type)
        except ValueError:
            return None

    @property
    def plain_text(self) -> str:
        """Concatenated plain text of the payload's ``rich_text`` runs."""
        runs = self.payload.get("rich_text")
        if not isinstance(runs, list):
            return ""
        return "".join(
            run["plain_text"] for run in runs if isinstance(run, dict) and isinstance(run.get("plain_text"), str)
        )
