# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Diagnostic logging for the Notion MCP server.

Stdout carries the MCP protocol, so every handler installed here writes
to stderr (or a file). Each tool call runs inside ``call_context`` and is
followed by a ``ToolCallTrace`` that logs its gateway states::

    RECEIVED -> VALIDATED -> EXECUTING -> SUCCEEDED | FAILED
    RECEIVED -> FAILED                     (unknown tool, invalid arguments)

A call whose handler turned a Notion failure into response text still ends
in FAILED here, even though the caller receives a normal envelope.
"""

from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

_call_id: ContextVar[str | None] = ContextVar("call_id", default=None)

# LogRecord attributes copied into the structured output when present
_TRACE_FIELDS = ("tool", "call_state", "duration_ms", "arguments")


def get_call_id() -> str | None:
    """Id of the tool call being processed in this context, if any."""
    return _call_id.get()


@contextmanager
def call_context(call_id: str | None = None) -> Generator[str, None, None]:
    """Scope a call id over one tool invocation.

    Every record logged inside the block carries the id, which is what
    ties the states of one call together when calls are interleaved.
    """
    cid = call_id or uuid.uuid4().hex
    token = _call_id.set(cid)
    try:
        yield cid
    finally:
        _call_id.reset(token)


class DiagnosticFormatter(logging.Formatter):
    """Formats records as JSON lines or as compact text.

    Text output: ``12:00:01 INFO notion_mcp.tools [1a2b3c4d] read_page: SUCCEEDED (12.3ms)``
    """

    def __init__(self, json_output: bool = False):
        super().__init__(datefmt="%H:%M:%S")
        self.json_output = json_output

    def _fields(self, record: logging.LogRecord) -> dict[str, Any]:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        call_id = get_call_id()
        if call_id:
            data["call_id"] = call_id
        for name in _TRACE_FIELDS:
            if hasattr(record, name):
                data[name] = getattr(record, name)
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return data

    def format(self, record: logging.LogRecord) -> str:
        data = self._fields(record)
        if self.json_output:
            return json.dumps(data, default=str)

        prefix = f"[{data['call_id'][:8]}] " if "call_id" in data else ""
        line = f"{self.formatTime(record, self.datefmt)} {record.levelname} {record.name} {prefix}{data['message']}"
        if "exception" in data:
            line += "\n" + data["exception"]
        return line


def configure_logging(
    level: str | int | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """Install stderr (and optional file) handlers on the root logger.

    Unset arguments fall back to ``NOTION_MCP_LOG_LEVEL``,
    ``NOTION_MCP_LOG_FORMAT`` (json/text, else JSON when stderr is not a
    terminal) and ``NOTION_MCP_LOG_FILE``.
    """
    from .config import get_config

    config = get_config()

    level = level or config.log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_format is None:
        fmt = config.log_format.lower()
        json_format = fmt == "json" or (fmt != "text" and not sys.stderr.isatty())

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(DiagnosticFormatter(json_output=json_format))
    root.addHandler(console)

    log_file = log_file or config.log_file
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(DiagnosticFormatter(json_output=True))
        root.addHandler(file_handler)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


_SENSITIVE_KEYS = ("token", "secret", "password", "api_key", "apikey", "auth", "credential")
_MAX_LOGGED_STRING = 500


def sanitize_arguments(data: Any) -> Any:
    """Copy of tool arguments safe to log: secrets redacted, long strings cut."""
    if isinstance(data, dict):
        return {
            key: "[REDACTED]" if any(s in str(key).lower() for s in _SENSITIVE_KEYS) else sanitize_arguments(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [sanitize_arguments(item) for item in data]
    if isinstance(data, str) and len(data) > _MAX_LOGGED_STRING:
        return data[:_MAX_LOGGED_STRING] + "..."
    return data


class CallState(StrEnum):
    RECEIVED = "RECEIVED"
    VALIDATED = "VALIDATED"
    EXECUTING = "EXECUTING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


_TERMINAL_STATES = {CallState.SUCCEEDED, CallState.FAILED}


class ToolCallTrace:
    """Logs one tool call's passage through the gateway states."""

    def __init__(self, tool_name: str, arguments: Any, logger: logging.Logger | None = None):
        self.tool_name = tool_name
        self.logger = logger or logging.getLogger("notion_mcp.tools")
        self.state = CallState.RECEIVED
        self._started = time.perf_counter()
        self.logger.info(
            f"{tool_name}: {CallState.RECEIVED}",
            extra={
                "tool": tool_name,
                "call_state": str(CallState.RECEIVED),
                "arguments": sanitize_arguments(arguments),
            },
        )

    @property
    def duration_ms(self) -> float:
        return (time.perf_counter() - self._started) * 1000

    @property
    def finished(self) -> bool:
        return self.state in _TERMINAL_STATES

    def advance(self, state: CallState, detail: str | None = None) -> None:
        """Record a transition; terminal states also log the elapsed time."""
        self.state = state
        message = f"{self.tool_name}: {state}"
        extra: dict[str, Any] = {"tool": self.tool_name, "call_state": str(state)}
        if self.finished:
            extra["duration_ms"] = round(self.duration_ms, 1)
            message += f" ({extra['duration_ms']}ms)"
        if detail:
            message += f" - {detail}"

        level = logging.WARNING if state is CallState.FAILED else logging.INFO
        self.logger.log(level, message, extra=extra)
