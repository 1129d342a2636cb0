"""Logging configuration for the property database tools.

Log records go to stderr so that command output on stdout (for example DDL
printed by ``generate --dry-run``) can be redirected into a file untouched.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Chatty third-party loggers and the level they are held at by default
_QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "alembic": logging.WARNING,
}


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    SQL text and driver messages routinely contain quotes and newlines, so
    values are encoded with ``json.dumps`` rather than a format string.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "name": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(
    level: LogLevel = "INFO",
    format_type: Literal["simple", "json"] = "simple",
    sql_echo: bool = False,
) -> None:
    """Configure logging for the application.

    Args:
        level: The logging level to use.
        format_type: The format type for log messages. "simple" for human-readable,
            "json" for structured logs.
        sql_echo: Route every SQL statement through the ``sqlalchemy.engine``
            logger at INFO level.
    """
    log_level = getattr(logging, level)

    formatter: logging.Formatter
    if format_type == "simple":
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = JsonFormatter()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    root_logger.addHandler(handler)

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
    if sql_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: The name for the logger, typically __name__.

    Returns:
        A configured logger instance.
    """
    return logging.getLogger(name)
