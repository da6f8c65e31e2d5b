# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Turn arbitrary upstream failures into one readable sentence.

The failure shape is not guaranteed: it may be a ``NotionAPIError``, an
aiohttp exception, a plain dict decoded from somewhere else, or anything
at all. Fields are therefore looked up leniently on attributes and keys.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


def _field(error: Any, name: str) -> Any:
    if isinstance(error, Mapping):
        return error.get(name)
    return getattr(error, name, None)


def _own_message(error: Any) -> str | None:
    message = _field(error, "message")
    if message:
        return str(message)
    if isinstance(error, BaseException) and str(error):
        return str(error)
    return None


def _detail(error: Any) -> str | None:
    """The body's message if present, else the failure's own message."""
    body = _field(error, "body")
    if isinstance(body, Mapping) and body.get("message"):
        return str(body["message"])
    return _own_message(error)


def _describe(error: Any) -> str:
    try:
        to_dict = getattr(error, "to_dict", None)
        if callable(to_dict):
            return json.dumps({**to_dict(), "body": _field(error, "body")}, default=str)
        return repr(error)
    except Exception:  # diagnostics only; the user-visible message is still produced
        return f"<unrepresentable {type(error).__name__}>"


def format_error(error: Any) -> str:
    """Classify a failure and return the user-visible message.

    Priority: HTTP 404, 401, 400, then a non-HTTP error code, then the
    failure's own message, then a fixed fallback.
    """
    logger.error("Full error: %s", _describe(error))

    status = _field(error, "status")
    detail = _detail(error)
    suffix = f" Details: {detail}" if detail else ""

    if status == 404:
        return f"Resource not found. Please check the provided ID.{suffix}"
    if status == 401:
        return f"Authentication error. Please check your API token.{suffix}"
    if status == 400:
        return f"Bad request.{suffix}"

    code = _field(error, "code")
    if code:
        return f"API error ({code}): {detail or UNKNOWN_ERROR_MESSAGE}"

    return detail or UNKNOWN_ERROR_MESSAGE
