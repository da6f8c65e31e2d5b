"""Health check utilities for the Notion MCP server.

Provides startup validation and a CLI probe that verifies the configured
credential against the Notion API.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import Any

import aiohttp

from .client import NotionClient
from .config import get_config
from .errors import format_error
from .exceptions import ConfigException, NotionAPIError

logger = logging.getLogger(__name__)

# Required environment variables for operation
REQUIRED_ENV_VARS = ["NOTION_API_KEY"]


@dataclass
class HealthStatus:
    """Overall health status of the server."""

    healthy: bool = False
    credential_present: bool = False
    api_reachable: bool = False
    bot_name: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "healthy": self.healthy,
            "credential_present": self.credential_present,
            "api_reachable": self.api_reachable,
            "bot_name": self.bot_name,
            "error": self.error,
        }


def validate_environment() -> None:
    """Validate that the Notion credential is configured.

    Raises:
        ConfigException: If NOTION_API_KEY is missing or blank
    """
    if not get_config().has_credentials:
        raise ConfigException(
            "NOTION_API_KEY environment variable is required",
            missing_vars=REQUIRED_ENV_VARS,
        )


async def run_health_check(client: NotionClient | None = None) -> HealthStatus:
    """Check the credential and that the API accepts it.

    Returns:
        HealthStatus with all check results
    """
    status = HealthStatus()

    try:
        validate_environment()
    except ConfigException as e:
        status.error = e.message
        return status
    status.credential_present = True

    client = client or NotionClient()
    try:
        bot = await client.retrieve_bot_user()
    except (NotionAPIError, aiohttp.ClientError, asyncio.TimeoutError) as e:
        status.error = format_error(e)
        return status

    status.api_reachable = True
    status.bot_name = bot.get("name")
    status.healthy = True
    return status


def startup_checks(fail_fast: bool = True) -> None:
    """Run startup checks; no network access is made here.

    Args:
        fail_fast: If True, exit with error code on failure
    """
    logger.info("Running startup checks...")
    try:
        validate_environment()
    except ConfigException as e:
        logger.error(f"Startup checks FAILED: {e.message}")
        if fail_fast:
            logger.error("Exiting due to failed startup checks")
            sys.exit(1)
        raise
    logger.info("All startup checks passed")


def cli_health_check() -> int:
    """CLI entry point for health check.

    Returns:
        Exit code (0 for healthy, 1 for unhealthy)
    """
    status = asyncio.run(run_health_check())

    # The report goes to stderr like every other diagnostic
    out = sys.stderr
    print(f"Healthy: {status.healthy}", file=out)
    print(f"Credential present: {status.credential_present}", file=out)
    print(f"API reachable: {status.api_reachable}", file=out)
    if status.bot_name:
        print(f"Bot: {status.bot_name}", file=out)
    if status.error:
        print(f"Error: {status.error}", file=out)

    return 0 if status.healthy else 1
