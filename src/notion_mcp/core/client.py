# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Async client for the read-only subset of the Notion REST API.

Each request opens its own ``aiohttp.ClientSession``; there is no state
shared between calls. Non-2xx responses raise ``NotionAPIError``; network
failures surface as the underlying ``aiohttp.ClientError``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from .config import NotionSettings, get_config
from .exceptions import NotionAPIError

logger = logging.getLogger(__name__)


class NotionClient:
    """Thin async wrapper over the Notion endpoints the tools need."""

    def __init__(self, settings: NotionSettings | None = None):
        self.settings = settings or get_config()
        self.base_url = self.settings.notion_api_base_url.rstrip("/")

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        timeout = aiohttp.ClientTimeout(total=self.settings.request_timeout)
        logger.debug(f"{method} {url}")

        async with aiohttp.ClientSession(headers=self.settings.request_headers, timeout=timeout) as session:
            async with session.request(method, url, json=payload, params=params) as response:
                text = await response.text()
                try:
                    body = json.loads(text) if text else {}
                except json.JSONDecodeError:
                    body = {"message": text}

                if response.status >= 400:
                    raise NotionAPIError.from_response(response.status, body)
                return body

    async def search(self, query: str, page_size: int | None = None) -> dict[str, Any]:
        """Search pages shared with the integration (single bounded page)."""
        return await self._request(
            "POST",
            "/search",
            payload={
                "query": query,
                "filter": {"property": "object", "value": "page"},
                "page_size": page_size or self.settings.search_page_size,
            },
        )

    async def retrieve_page(self, page_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/pages/{page_id}")

    async def list_block_children(self, block_id: str, page_size: int | None = None) -> dict[str, Any]:
        return await self._request(
            "GET",
            f"/blocks/{block_id}/children",
            params={"page_size": page_size or self.settings.block_page_size},
        )

    async def query_database(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Query a database; absent filter/sorts are omitted from the request."""
        payload: dict[str, Any] = {}
        if filter is not None:
            payload["filter"] = filter
        if sorts is not None:
            payload["sorts"] = sorts
        return await self._request("POST", f"/databases/{database_id}/query", payload=payload)

    async def retrieve_database(self, database_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/databases/{database_id}")

    async def retrieve_bot_user(self) -> dict[str, Any]:
        """Return the bot user behind the configured token (credential check)."""
        return await self._request("GET", "/users/me")


_client: NotionClient | None = None


def get_client() -> NotionClient:
    """Get the process-wide Notion client, creating it on first use."""
    global _client
    if _client is None:
        _client = NotionClient()
    return _client


def reset_client() -> None:
    """Drop the cached client. Useful for testing."""
    global _client
    _client = None
