"""Global test fixtures for the notion_mcp test suite."""

from __future__ import annotations

import os
from typing import Any
from unittest.mock import AsyncMock

import pytest

from notion_mcp.core import client as client_module
from notion_mcp.core.client import NotionClient
from notion_mcp.core.config import NotionSettings, clear_config_cache

# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop cached settings and client around each test."""
    clear_config_cache()
    client_module.reset_client()
    yield
    clear_config_cache()
    client_module.reset_client()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all NOTION_ environment variables and ignore any local .env file."""
    monkeypatch.setitem(NotionSettings.model_config, "env_file", None)
    for key in list(os.environ.keys()):
        if key.startswith("NOTION_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def env_with_api_key(clean_env, monkeypatch):
    """Set up the Notion credential."""
    monkeypatch.setenv("NOTION_API_KEY", "secret_test_token")


# ============================================================================
# Notion Object Fixtures
# ============================================================================


def _rich_text(text: str) -> dict[str, Any]:
    return {"type": "text", "text": {"content": text}, "plain_text": text}


@pytest.fixture
def rich_text():
    """Factory for a single rich text run."""
    return _rich_text


@pytest.fixture
def make_page():
    """Factory for page objects as returned by GET /pages/{id}."""

    def _make(title: str | None = "Notes", page_id: str = "page-1", url: str | None = None) -> dict[str, Any]:
        properties: dict[str, Any] = {
            "Tags": {"id": "tg", "type": "multi_select", "multi_select": []},
        }
        if title is not None:
            properties["Name"] = {"id": "title", "type": "title", "title": [_rich_text(title)]}
        return {
            "object": "page",
            "id": page_id,
            "url": url or f"https://www.notion.so/{page_id.replace('-', '')}",
            "properties": properties,
        }

    return _make


@pytest.fixture
def make_block():
    """Factory for block objects as returned by GET /blocks/{id}/children."""

    def _make(block_type: str, text: str | None = None, block_id: str = "b-1", **payload: Any) -> dict[str, Any]:
        body = dict(payload)
        if text is not None:
            body["rich_text"] = [_rich_text(text)]
        return {"object": "block", "id": block_id, "type": block_type, block_type: body}

    return _make


# ============================================================================
# Notion API Fixtures
# ============================================================================


@pytest.fixture
def mock_client():
    """AsyncMock standing in for NotionClient; no network access."""
    return AsyncMock(spec=NotionClient)
