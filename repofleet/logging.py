"""
repofleet logging utilities.

Configures the package loggers for the CLI and provides httpx event hooks
that log API traffic without leaking access tokens.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import httpx

# Levels accepted by --log-level
LOG_LEVELS: dict[str, int] = {
    "trace": 5,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_SENSITIVE_HEADERS = {"authorization", "private-token", "cookie"}

_TOKEN_PREVIEW_LENGTH = 4

logging.addLevelName(LOG_LEVELS["trace"], "TRACE")


class JSONFormatter(logging.Formatter):
    """Formats each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            data["error"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(
    level: str = "info",
    log_format: str = "text",
    log_file: str | None = None,
) -> None:
    """
    Configure repofleet logging.

    Args:
        level: One of LOG_LEVELS
        log_format: "text" or "json"
        log_file: Write logs to this file instead of stderr ("-" means stdout)
    """
    if log_file == "-":
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
    elif log_file:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler()

    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    for existing in list(_logger.handlers):
        _logger.removeHandler(existing)
    _logger.addHandler(handler)
    _logger.setLevel(LOG_LEVELS.get(level.lower(), logging.INFO))


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a repofleet logger, e.g. get_logger("http")."""
    if name is None:
        return logging.getLogger("repofleet")
    return logging.getLogger(f"repofleet.{name}")


_logger = get_logger()
_http_logger = get_logger("http")


def mask_token(token: str | None) -> str:
    """Shorten a token to its last few characters for safe logging."""
    if not token:
        return "<none>"
    if len(token) <= _TOKEN_PREVIEW_LENGTH * 2:
        return "[REDACTED]"
    return f"***{token[-_TOKEN_PREVIEW_LENGTH:]}"


def safe_headers(headers: httpx.Headers | dict[str, str]) -> dict[str, Any]:
    """Copy headers with credential-bearing values redacted."""
    return {
        key: "[REDACTED]" if key.lower() in _SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


async def log_request(request: httpx.Request) -> None:
    """httpx request event hook."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return
    _http_logger.debug(f"{request.method} {request.url} | headers={safe_headers(request.headers)}")


async def log_response(response: httpx.Response) -> None:
    """httpx response event hook."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return
    request = response.request
    _http_logger.debug(f"Response {response.status_code} from {request.method} {request.url}")


__all__ = [
    "LOG_LEVELS",
    "configure_logging",
    "get_logger",
    "mask_token",
    "safe_headers",
    "log_request",
    "log_response",
]
