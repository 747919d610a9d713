"""Logging setup for Helpdesk.

Everything logs under the ``helpdesk`` logger hierarchy. The console gets
plain text; an optional log file gets one JSON object per record, which
keeps session context (``user_id``, ``channel_id``) as separate fields.
"""

import logging
import logging.config
from pathlib import Path
from typing import Any

ROOT_LOGGER = "helpdesk"
CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
JSON_FIELDS = "%(asctime)s %(name)s %(levelname)s %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def _file_handler(level: str, log_file: Path | str) -> dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": str(log_file),
        "maxBytes": LOG_FILE_MAX_BYTES,
        "backupCount": LOG_FILE_BACKUPS,
        "encoding": "utf-8",
        "formatter": "json",
        "level": level,
    }


def build_logging_config(level: str = "INFO", log_file: Path | str | None = None) -> dict[str, Any]:
    """dictConfig schema for the helpdesk loggers."""
    formatters: dict[str, Any] = {
        "console": {"format": CONSOLE_FORMAT, "datefmt": "%H:%M:%S"},
    }
    handlers: dict[str, Any] = {
        "console": {"class": "logging.StreamHandler", "formatter": "console", "level": level},
    }
    if log_file is not None:
        formatters["json"] = {"()": "pythonjsonlogger.json.JsonFormatter", "format": JSON_FIELDS}
        handlers["file"] = _file_handler(level, log_file)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "loggers": {
            ROOT_LOGGER: {"handlers": list(handlers), "level": level, "propagate": False},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    }


def setup_logging(level: str = "INFO", log_file: Path | str | None = None) -> None:
    """
    Configure logging for Helpdesk.

    Calling it again replaces the previous handlers, closing an open log file.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path for a rotating JSON log file
    """
    logging.config.dictConfig(build_logging_config(level, log_file))


class ContextLogger:
    """Hands out loggers that attach the same fields to every record."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def with_context(self, **context: Any) -> logging.LoggerAdapter:
        """Adapter whose records carry ``context`` as extra attributes."""
        return logging.LoggerAdapter(self.logger, context)
