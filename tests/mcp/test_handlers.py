"""Tests for the Notion tool handlers."""

from __future__ import annotations

import asyncio
import json

import aiohttp
import pytest

from notion_mcp.core.exceptions import NotionAPIError
from notion_mcp.mcp.handlers._utils import ToolOutcome
from notion_mcp.mcp.handlers.databases import query_database, retrieve_database
from notion_mcp.mcp.handlers.pages import read_page
from notion_mcp.mcp.handlers.search import search_pages
from notion_mcp.mcp.validation import QueryDatabaseArgs, ReadPageArgs, RetrieveDatabaseArgs, SearchPagesArgs


class TestSearchPages:
    """Tests for search_pages handler."""

    @pytest.mark.asyncio
    async def test_no_results(self, mock_client):
        mock_client.search.return_value = {"object": "list", "results": []}

        result = await search_pages(mock_client, SearchPagesArgs(query="roadmap"))

        assert result.text == 'No pages found matching "roadmap"'
        assert not result.failed
        mock_client.search.assert_awaited_once_with("roadmap")

    @pytest.mark.asyncio
    async def test_missing_results_key(self, mock_client):
        mock_client.search.return_value = {}

        result = await search_pages(mock_client, SearchPagesArgs(query="x"))

        assert result.text.startswith("No pages found")

    @pytest.mark.asyncio
    async def test_title_from_property_when_url_has_no_slug(self, mock_client, rich_text):
        mock_client.search.return_value = {
            "results": [
                {
                    "url": "https://www.notion.so/8a7b6c5d",
                    "properties": {"Name": {"type": "title", "title": [rich_text("Team Wiki")]}},
                }
            ]
        }

        result = await search_pages(mock_client, SearchPagesArgs(query="wiki"))

        assert "• Team Wiki\n  Link: https://www.notion.so/8a7b6c5d" in result.text

    @pytest.mark.asyncio
    async def test_remote_failure_becomes_text(self, mock_client):
        mock_client.search.side_effect = NotionAPIError("API token is invalid.", status=401, code="unauthorized")

        result = await search_pages(mock_client, SearchPagesArgs(query="x"))

        assert result.text.startswith("Authentication error.")
        assert result.failed


class TestReadPage:
    """Tests for read_page handler."""

    @pytest.mark.asyncio
    async def test_fetches_blocks_and_page_concurrently(self, mock_client, make_page):
        started = []
        both_started = asyncio.Event()

        async def wait_for_peer(name, value):
            started.append(name)
            if len(started) == 2:
                both_started.set()
            await asyncio.wait_for(both_started.wait(), timeout=1)
            return value

        async def list_blocks(_id):
            return await wait_for_peer("blocks", {"results": []})

        async def retrieve(_id):
            return await wait_for_peer("page", make_page("Parallel"))

        mock_client.list_block_children.side_effect = list_blocks
        mock_client.retrieve_page.side_effect = retrieve

        result = await read_page(mock_client, ReadPageArgs(pageId="p1"))

        assert result == ToolOutcome("# Parallel")
        assert set(started) == {"blocks", "page"}

    @pytest.mark.asyncio
    async def test_not_found(self, mock_client):
        error = NotionAPIError.from_response(
            404, {"object": "error", "status": 404, "code": "object_not_found", "message": "Could not find block"}
        )
        mock_client.list_block_children.side_effect = error
        mock_client.retrieve_page.side_effect = error

        result = await read_page(mock_client, ReadPageArgs(pageId="missing"))

        assert result == ToolOutcome.failure(
            "Resource not found. Please check the provided ID. Details: Could not find block"
        )

    @pytest.mark.asyncio
    async def test_malformed_page_becomes_text(self, mock_client):
        mock_client.list_block_children.return_value = {"results": []}
        mock_client.retrieve_page.return_value = {"object": "page", "id": "p1"}

        result = await read_page(mock_client, ReadPageArgs(pageId="p1"))

        assert result.failed
        assert result.text.startswith("Unexpected page shape")

    @pytest.mark.asyncio
    async def test_network_error_becomes_text(self, mock_client, make_page):
        mock_client.list_block_children.side_effect = aiohttp.ClientConnectionError("Connection reset")
        mock_client.retrieve_page.return_value = make_page()

        result = await read_page(mock_client, ReadPageArgs(pageId="p1"))

        assert result == ToolOutcome.failure("Connection reset")

    @pytest.mark.asyncio
    async def test_failed_request_cancels_sibling(self, mock_client):
        page_started = asyncio.Event()
        page_cancelled = asyncio.Event()

        async def slow_page(_id):
            page_started.set()
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                page_cancelled.set()
                raise

        async def failing_blocks(_id):
            await page_started.wait()
            raise NotionAPIError("Could not find block", status=404, code="object_not_found")

        mock_client.retrieve_page.side_effect = slow_page
        mock_client.list_block_children.side_effect = failing_blocks

        result = await asyncio.wait_for(read_page(mock_client, ReadPageArgs(pageId="p1")), timeout=5)

        assert page_cancelled.is_set()
        assert result == ToolOutcome.failure(
            "Resource not found. Please check the provided ID. Details: Could not find block"
        )


class TestQueryDatabase:
    """Tests for query_database handler."""

    @pytest.mark.asyncio
    async def test_results_serialized_as_json(self, mock_client):
        rows = [{"object": "page", "id": "r1", "properties": {"Name": {"type": "title", "title": []}}}]
        mock_client.query_database.return_value = {"object": "list", "results": rows, "has_more": False}

        result = await query_database(mock_client, QueryDatabaseArgs(databaseId="db1"))

        assert json.loads(result.text) == rows
        assert result.text == json.dumps(rows, indent=2)
        mock_client.query_database.assert_awaited_once_with("db1", filter=None, sorts=None)

    @pytest.mark.asyncio
    async def test_sort_forwarded_as_list(self, mock_client):
        mock_client.query_database.return_value = {"results": []}
        flt = {"property": "Done", "checkbox": {"equals": False}}
        sort = {"property": "Due", "direction": "descending"}

        await query_database(mock_client, QueryDatabaseArgs(databaseId="db1", filter=flt, sort=sort))

        mock_client.query_database.assert_awaited_once_with("db1", filter=flt, sorts=[sort])

    @pytest.mark.asyncio
    async def test_failure_is_prefixed(self, mock_client):
        mock_client.query_database.side_effect = NotionAPIError(
            "body failed validation", status=400, code="validation_error"
        )

        result = await query_database(mock_client, QueryDatabaseArgs(databaseId="db1"))

        assert result == ToolOutcome.failure("Error querying database: Bad request. Details: body failed validation")


class TestRetrieveDatabase:
    """Tests for retrieve_database handler."""

    @pytest.mark.asyncio
    async def test_metadata_serialized_as_json(self, mock_client):
        database = {"object": "database", "id": "db1", "title": [{"plain_text": "Tâches"}]}
        mock_client.retrieve_database.return_value = database

        result = await retrieve_database(mock_client, RetrieveDatabaseArgs(databaseId="db1"))

        assert json.loads(result.text) == database
        assert "Tâches" in result.text

    @pytest.mark.asyncio
    async def test_rate_limited(self, mock_client):
        mock_client.retrieve_database.side_effect = NotionAPIError("Slow down", status=429, code="rate_limited")

        result = await retrieve_database(mock_client, RetrieveDatabaseArgs(databaseId="db1"))

        assert result == ToolOutcome.failure("API error (rate_limited): Slow down")
