"""Logging configuration helpers for the vc CLI."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

_LOGGER_NAME = "vercel_cli"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonLogFormatter(logging.Formatter):
    """Format log records as JSON objects, one per line."""

    def format(self, record: logging.LogRecord) -> str:
        """Serialize a log record and its ``extra`` fields in JSON format."""
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and key not in payload:
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _close_handlers(logger: logging.Logger) -> None:
    """Detach and close all handlers currently bound to the logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    *,
    log_file: Path | None,
    verbose: bool,
    echo: bool = False,
    json_format: bool = False,
) -> logging.Logger:
    """Configure CLI logging and return the logger.

    Logging is reconfigured on every CLI invocation. When a log file is given
    it is truncated so each run has an isolated log history. With ``echo``
    records are also written to stderr. ``json_format`` writes the log file
    as JSON lines that keep the structured ``extra`` fields.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    _close_handlers(logger)

    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    logger.propagate = False
    if echo:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(logging.Formatter("> [%(levelname)s] %(message)s"))
        logger.addHandler(stream_handler)
    if log_file is None:
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())
        return logger
    log_path = log_file.expanduser().resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(JsonLogFormatter() if json_format else logging.Formatter(_TEXT_FORMAT))
    logger.addHandler(handler)
    return logger


def get_logger() -> logging.Logger:
    """Return the CLI logger (configured or with null handler)."""
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
