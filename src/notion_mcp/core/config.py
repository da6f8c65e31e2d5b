"""Core configuration - centralized config for the notion_mcp package.

All environment-based configuration should flow through this module.
This provides a single source of truth and consistent defaults.

Usage:
    from notion_mcp.core.config import get_config
    config = get_config()

    api_key = config.notion_api_key
    log_level = config.log_level
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NotionSettings(BaseSettings):
    """Configuration settings for the Notion MCP server.

    Settings can be configured via environment variables or a local
    ``.env`` file. The Notion credential keeps the conventional
    ``NOTION_API_KEY`` name; server-side knobs use the ``NOTION_MCP_`` prefix.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # NOTION API SETTINGS
    # ==========================================================================

    notion_api_key: str = Field(
        default="",
        description="Notion integration token",
        validation_alias="NOTION_API_KEY",
    )
    notion_api_base_url: str = Field(
        default="https://api.notion.com/v1",
        description="Base URL of the Notion REST API",
        validation_alias="NOTION_API_BASE_URL",
    )
    notion_version: str = Field(
        default="2022-06-28",
        description="Value sent in the Notion-Version header",
        validation_alias="NOTION_VERSION",
    )
    search_page_size: int = Field(
        default=99,
        description="Maximum number of pages returned by a single search",
        validation_alias="NOTION_SEARCH_PAGE_SIZE",
    )
    block_page_size: int = Field(
        default=100,
        description="Maximum number of child blocks fetched when reading a page",
        validation_alias="NOTION_BLOCK_PAGE_SIZE",
    )
    request_timeout: float | None = Field(
        default=None,
        description="Total timeout in seconds for one API request (unset = no timeout)",
        validation_alias="NOTION_REQUEST_TIMEOUT",
    )

    # ==========================================================================
    # LOGGING SETTINGS
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="NOTION_MCP_LOG_LEVEL",
    )
    log_format: str = Field(
        default="",
        description="Log format: 'json', 'text', or '' (auto-detect)",
        validation_alias="NOTION_MCP_LOG_FORMAT",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (optional)",
        validation_alias="NOTION_MCP_LOG_FILE",
    )

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def has_credentials(self) -> bool:
        """True when an integration token is configured."""
        return bool(self.notion_api_key.strip())

    @property
    def request_headers(self) -> dict[str, str]:
        """Headers sent with every Notion API request."""
        return {
            "Authorization": f"Bearer {self.notion_api_key}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json",
        }


# ==========================================================================
# GLOBAL CONFIG INSTANCE (lazy loaded)
# ==========================================================================

_config: NotionSettings | None = None


def get_config() -> NotionSettings:
    """Get the global configuration instance.

    Returns:
        The singleton NotionSettings instance.
    """
    global _config
    if _config is None:
        _config = NotionSettings()
    return _config


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing."""
    global _config
    _config = None
