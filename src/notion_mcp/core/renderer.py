# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Render a Notion page and its top-level blocks as plain text.

The projection is lossy by intent: rich formatting is dropped, child pages
and databases are listed rather than expanded, and blocks without any text
contribute nothing.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .models import Block, BlockType, NotionPage

UNTITLED = "Untitled"

_PLAIN_TYPES = {
    BlockType.PARAGRAPH,
    BlockType.HEADING_1,
    BlockType.HEADING_2,
    BlockType.HEADING_3,
}
_LIST_TYPES = {BlockType.BULLETED_LIST_ITEM, BlockType.NUMBERED_LIST_ITEM}


def compact_id(block_id: str) -> str:
    """Notion ID without its dash separators."""
    return block_id.replace("-", "")


def _child_title(block: Block, default: str) -> str:
    title = block.payload.get("title")
    return title if isinstance(title, str) and title else default


def format_block(block: Block) -> str:
    """Text for one body block, or "" when it has nothing to show."""
    kind = block.kind
    text = block.plain_text

    if kind in _PLAIN_TYPES:
        return text
    if kind in _LIST_TYPES:
        return f"• {text}"
    if kind is BlockType.TO_DO:
        mark = "[x]" if block.payload.get("checked") else "[ ]"
        return f"{mark} {text}"
    if kind is BlockType.CODE:
        return f"```\n{text}\n```"
    # Unrecognized discriminant: keep whatever text it carries
    return text


@dataclass
class PageRenderer:
    """Single-pass fold of a block sequence into text sections."""

    title: str = UNTITLED
    content: list[str] = field(default_factory=list)
    child_pages: list[str] = field(default_factory=list)
    child_databases: list[str] = field(default_factory=list)

    def add(self, block: Block) -> None:
        if block.kind is BlockType.CHILD_PAGE:
            self.child_pages.append(f"📄 {_child_title(block, 'Untitled Page')} (ID: {compact_id(block.id)})")
            return
        if block.kind is BlockType.CHILD_DATABASE:
            self.child_databases.append(
                f"📊 {_child_title(block, 'Untitled Database')} (ID: {compact_id(block.id)})"
            )
            return

        line = format_block(block)
        if line:
            self.content.append(line)

    def render(self) -> str:
        output = f"# {self.title}\n\n"

        if self.content:
            output += "\n".join(self.content) + "\n\n"

        if self.child_pages:
            output += "## Child Pages\n" + "\n".join(self.child_pages) + "\n\n"

        if self.child_databases:
            output += "## Child Databases\n" + "\n".join(self.child_databases) + "\n"

        return output.strip()


def render_page(page: Any, blocks: Iterable[Any]) -> str:
    """Render a page object and its raw block list as one document.

    Args:
        page: Page object from the API (or an already parsed ``NotionPage``)
        blocks: Raw block objects, in page order

    Raises:
        RenderError: If the page metadata does not have the expected shape
    """
    if not isinstance(page, NotionPage):
        page = NotionPage.parse(page)

    renderer = PageRenderer(title=page.title or UNTITLED)
    for raw in blocks:
        renderer.add(raw if isinstance(raw, Block) else Block.from_raw(raw))
    return renderer.render()
