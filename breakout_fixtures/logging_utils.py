"""Logging configuration that carries fixture context on every record."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

_LOGGER_NAME = "breakout_fixtures"
CONTEXT_FIELDS = ("scenario", "operation", "path")


def fixture_context(
    scenario: str | None = None,
    operation: str | None = None,
    path: Path | None = None,
) -> dict[str, object]:
    """Build the ``extra`` mapping attached to fixture log records."""
    return {
        "scenario": scenario,
        "operation": operation,
        "path": str(path) if path is not None else None,
    }


def _record_context(record: logging.LogRecord) -> dict[str, object]:
    """Return the fixture context fields present on a record."""
    return {
        name: getattr(record, name)
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class FixtureContextFormatter(logging.Formatter):
    """Plain-text formatter that appends scenario, operation and path."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        """Render the record followed by its fixture context, if any."""
        text = super().format(record)
        context = _record_context(record)
        if not context:
            return text
        rendered = " ".join(f"{name}={value}" for name, value in context.items())
        return f"{text} [{rendered}]"


class JsonLogFormatter(logging.Formatter):
    """Format log records as JSON objects including fixture context."""

    def format(self, record: logging.LogRecord) -> str:
        """Serialize a log record in JSON format."""
        payload: dict[str, object] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_record_context(record))
        return json.dumps(payload)


def _close_handlers(logger: logging.Logger) -> None:
    """Detach and close all handlers currently bound to the logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    *,
    log_file: Path,
    verbose: bool,
    json_stream: bool = False,
) -> logging.Logger:
    """Configure package logging for one CLI invocation and return the logger.

    The log file is truncated so each generation run has an isolated history.
    With json_stream, records are also written to stderr as JSON lines.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    _close_handlers(logger)

    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    logger.propagate = False
    log_path = log_file.expanduser().resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setFormatter(FixtureContextFormatter())
    logger.addHandler(file_handler)
    if json_stream:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(JsonLogFormatter())
        logger.addHandler(stream_handler)
    return logger


def get_logger() -> logging.Logger:
    """Return the package logger (configured or with null handler)."""
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
