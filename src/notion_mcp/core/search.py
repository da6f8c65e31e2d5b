# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Summaries of page search results."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any
from urllib.parse import unquote

from .renderer import UNTITLED

logger = logging.getLogger(__name__)

# ".../<Slug-Words>-<id>" -> "Slug-Words"
_URL_SLUG = re.compile(r"/([^/]+)-[^/]+$")

_CONVENTIONAL_TITLE_KEYS = ("title", "Name")


def title_from_url(url: Any) -> str | None:
    """Decode the human-readable slug of a Notion page URL."""
    if not isinstance(url, str):
        return None
    match = _URL_SLUG.search(url)
    if not match:
        return None
    title = unquote(match.group(1).replace("-", " ")).strip()
    return title or None


def _first_run(prop: Any) -> str | None:
    if not isinstance(prop, dict):
        return None
    runs = prop.get("title")
    if not isinstance(runs, list) or not runs or not isinstance(runs[0], dict):
        return None
    text = runs[0].get("plain_text")
    return text if isinstance(text, str) and text else None


def title_from_properties(properties: Any) -> str | None:
    """Title from a conventionally named property, else any title-typed one."""
    if not isinstance(properties, dict):
        return None
    for key in _CONVENTIONAL_TITLE_KEYS:
        title = _first_run(properties.get(key))
        if title:
            return title
    for prop in properties.values():
        if isinstance(prop, dict) and prop.get("type") == "title":
            title = _first_run(prop)
            if title:
                return title
    return None


def page_display_title(page: Any) -> str:
    """Best-effort title: URL slug first, then properties, then "Untitled"."""
    if not isinstance(page, dict):
        return UNTITLED
    return title_from_url(page.get("url")) or title_from_properties(page.get("properties")) or UNTITLED


def summarize_search_results(query: str, pages: Sequence[Any]) -> str:
    """Format matched pages as a bulleted list headed by the count and query."""
    if not pages:
        return f'No pages found matching "{query}"'

    entries = []
    for page in pages:
        url = page.get("url") if isinstance(page, dict) else None
        entries.append(f"• {page_display_title(page)}\n  Link: {url or ''}")

    logger.debug(f"Summarized {len(entries)} search results for {query!r}")
    return f'Found {len(pages)} pages matching "{query}":\n\n' + "\n\n".join(entries)
