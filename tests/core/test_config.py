"""Tests for settings loading."""

from __future__ import annotations

from notion_mcp.core.config import NotionSettings, clear_config_cache, get_config


class TestNotionSettings:
    """Tests for NotionSettings."""

    def test_defaults(self, clean_env):
        settings = NotionSettings(_env_file=None)

        assert settings.notion_api_key == ""
        assert settings.has_credentials is False
        assert settings.notion_api_base_url == "https://api.notion.com/v1"
        assert settings.search_page_size == 99
        assert settings.request_timeout is None

    def test_reads_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("NOTION_API_KEY", "secret_xyz")
        monkeypatch.setenv("NOTION_REQUEST_TIMEOUT", "12.5")
        monkeypatch.setenv("NOTION_MCP_LOG_LEVEL", "DEBUG")

        settings = NotionSettings(_env_file=None)

        assert settings.has_credentials is True
        assert settings.request_timeout == 12.5
        assert settings.log_level == "DEBUG"

    def test_blank_key_is_not_a_credential(self, clean_env, monkeypatch):
        monkeypatch.setenv("NOTION_API_KEY", "   ")

        assert NotionSettings(_env_file=None).has_credentials is False

    def test_request_headers(self, clean_env, monkeypatch):
        monkeypatch.setenv("NOTION_API_KEY", "secret_xyz")
        monkeypatch.setenv("NOTION_VERSION", "2025-01-01")

        headers = NotionSettings(_env_file=None).request_headers

        assert headers == {
            "Authorization": "Bearer secret_xyz",
            "Notion-Version": "2025-01-01",
            "Content-Type": "application/json",
        }


def test_get_config_singleton(env_with_api_key):
    first = get_config()

    assert get_config() is first
    clear_config_cache()
    assert get_config() is not first
