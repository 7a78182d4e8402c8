"""
Structured JSON Lines logging for the NFT client.

Library modules only ever call ``log_event`` on a module logger; handler
setup is left to the application. ``build_logger`` is the helper the CLI
uses to get machine-parseable output. Each JSONL entry includes:
- Timestamp (ISO 8601 UTC)
- Log level
- Event type for filtering
- Module name
- Human-readable message
- Extra structured data (call_id, path, status, attempt, ...)

Example log entry:
    {"ts": "2024-01-15T10:30:00Z", "level": "INFO", "event": "http_request",
     "module": "executor", "msg": "GET /nfts/42",
     "extra": {"call_id": "9f2c1a0b", "status": 200, "attempt": 1}}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

LOGGER_NAME = "licensechain_nft"


@dataclass(frozen=True)
class LogSettings:
    """
    Configuration for logger initialization.

    Attributes:
        level: Log level string (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path to log file (None for console only).
        jsonl: If True, use JSON Lines format; otherwise plain text.
    """
    level: str
    log_file: Path | None
    jsonl: bool


class JsonLineFormatter(logging.Formatter):
    """Logging formatter that outputs one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        event = getattr(record, "event", "log")
        extra = getattr(record, "extra", {})
        if not isinstance(extra, dict):
            extra = {"value": extra}

        payload = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "event": event,
            "module": record.module,
            "msg": record.getMessage(),
            "extra": extra,
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def build_logger(settings: LogSettings) -> logging.Logger:
    """
    Configure the package logger for an application run.

    Replaces any handlers already attached to the ``licensechain_nft``
    logger, so calling it twice does not duplicate output. Child loggers
    (``licensechain_nft.api.executor`` etc.) inherit the handlers.

    Args:
        settings: LogSettings with level, file path, and format.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = JsonLineFormatter() if settings.jsonl else None

    stream_handler = logging.StreamHandler()
    if formatter:
        stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        if formatter:
            file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    message: str,
    *,
    exc_info: Any = None,
    **extra: Any,
) -> None:
    """
    Log a structured event with typed metadata.

    Args:
        logger: Logger instance to use.
        level: Log level (logging.DEBUG, INFO, WARNING, ERROR).
        event: Event type identifier (e.g., "http_request", "http_retry").
        message: Human-readable log message.
        exc_info: Optional exception info for error logging.
        **extra: Additional key-value pairs to include in log entry.

    Example:
        >>> log_event(logger, logging.WARNING, "http_retry",
        ...           "Retrying after transport failure", attempt=1, delay_s=1.0)
    """
    logger.log(level, message, extra={"event": event, "extra": extra}, exc_info=exc_info)
