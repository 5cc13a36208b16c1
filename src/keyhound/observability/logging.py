"""
Structured logging configuration for Keyhound.

Provides consistent, structured logging across all modules with support
for JSON and human-readable output. Scan events carry counts, types and
timings only; secret values and contexts are never logged.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has; anything else was passed via extra=
_RESERVED_ATTRS = frozenset(
    (
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
        "asctime",
    )
)


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class StructuredFormatter(logging.Formatter):
    """
    Formatter that emits one JSON object per record.

    Scan events pass their counts through extra=, so every non-standard
    record attribute becomes a top-level key.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Single-line text formatter; event fields are appended as key=value."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as human-readable text."""
        stamp = _timestamp(record).strftime("%Y-%m-%d %H:%M:%S")
        output = f"[{stamp}] {record.levelname:>8} {record.name}: {record.getMessage()}"

        fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        ]
        if fields:
            output += " (" + ", ".join(fields) + ")"

        if record.exc_info:
            output += "\n" + self.formatException(record.exc_info)
        return output


class KeyhoundLogger:
    """
    Wrapper around Python logging for Keyhound-specific logging.

    Provides scan event helpers whose fields are passed as extra=.
    """

    def __init__(self, name: str, level: int = logging.NOTSET):
        """
        Initialize Keyhound logger.

        Args:
            name: Logger name
            level: Log level (NOTSET defers to the "keyhound" logger)
        """
        self.logger = logging.getLogger(name)
        if level != logging.NOTSET:
            self.logger.setLevel(level)

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        self.logger.log(level, message, extra=kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def scan_started(self, content_length: int, pattern_count: int) -> None:
        """Log scan start event."""
        self.debug(
            "Secret scan started",
            event_type="scan.started",
            content_length=content_length,
            pattern_count=pattern_count,
        )

    def scan_completed(
        self,
        total_secrets: int,
        high_confidence_secrets: int,
        secret_types: dict[str, int],
        risk_score: int,
        duration_seconds: float,
    ) -> None:
        """Log scan completion event."""
        self.debug(
            "Secret scan completed",
            event_type="scan.completed",
            total_secrets=total_secrets,
            high_confidence_secrets=high_confidence_secrets,
            secret_types=secret_types,
            risk_score=risk_score,
            duration_seconds=duration_seconds,
        )

    def scan_rejected(self, reason: str, error: str) -> None:
        """Log a scan refused before it ran."""
        self.warning(
            "Secret scan rejected",
            event_type="scan.rejected",
            reason=reason,
            error=error,
        )


def configure_logging(
    level: str = "INFO",
    format: str = "human",
    output: str = "stderr",
) -> None:
    """
    Configure logging for Keyhound.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format (human, json)
        output: Output destination (stderr, stdout)
    """
    root_logger = logging.getLogger("keyhound")
    root_logger.setLevel(getattr(logging, level.upper()))

    root_logger.handlers.clear()

    if output == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler(sys.stderr)

    if format == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanReadableFormatter()

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str) -> KeyhoundLogger:
    """
    Get a Keyhound logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        KeyhoundLogger instance
    """
    if not name.startswith("keyhound"):
        name = f"keyhound.{name}"
    return KeyhoundLogger(name)


# Configure logging from environment on import
_log_level = os.getenv("KEYHOUND_LOG_LEVEL", "WARNING")
_log_format = os.getenv("KEYHOUND_LOG_FORMAT", "human")
configure_logging(level=_log_level, format=_log_format)
