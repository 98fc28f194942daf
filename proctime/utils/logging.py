"""Structured logging utilities for proctime.

Emits one JSON object per log line so timer diagnostics can be grepped or
shipped as-is.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


class StderrHandler(logging.StreamHandler):
    """Stream handler that writes to whatever ``sys.stderr`` is at emit time."""

    def __init__(self, level=logging.NOTSET):
        logging.Handler.__init__(self, level)

    @property
    def stream(self):
        return sys.stderr


class StructuredLogger:
    """Structured logger that adds keyword fields to each JSON record."""

    def __init__(
        self, name: str, log_file: Optional[str] = None, console: bool = True
    ):
        """Initialize structured logger.

        Args:
            name: Logger name (usually __name__)
            log_file: Optional log file path
            console: Attach a stderr handler to this logger
        """
        self.logger = logging.getLogger(name)

        formatter = StructuredFormatter()

        if console and not any(
            getattr(handler, "_structured_console", False)
            for handler in self.logger.handlers
        ):
            console_handler = StderrHandler()
            console_handler.setFormatter(formatter)
            console_handler._structured_console = True  # type: ignore[attr-defined]
            self.logger.addHandler(console_handler)

        if log_file:
            file_path = Path(log_file).expanduser()
            file_path.parent.mkdir(parents=True, exist_ok=True)

            already_attached = any(
                isinstance(handler, logging.FileHandler)
                and getattr(handler, "_structured_log_path", None) == str(file_path)
                for handler in self.logger.handlers
            )
            if not already_attached:
                file_handler = logging.FileHandler(file_path)
                file_handler.setFormatter(formatter)
                file_handler._structured_log_path = str(file_path)  # type: ignore[attr-defined]
                self.logger.addHandler(file_handler)

    def set_level(self, level: str) -> None:
        """Set logging level.

        Args:
            level: Log level (DEBUG, INFO, WARN, WARNING, ERROR, CRITICAL)
        """
        self.logger.setLevel(getattr(logging, level.upper()))

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        if not self.logger.isEnabledFor(level):
            return

        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": logging.getLevelName(level),
            "logger": self.logger.name,
            "message": message,
        }
        log_data.update(kwargs)

        serialized = json.dumps(log_data, default=str)

        self.logger.log(level, serialized, extra={"structured_json": serialized})

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)


class StructuredFormatter(logging.Formatter):
    """Formatter for structured log messages."""

    def format(self, record: logging.LogRecord) -> str:
        if hasattr(record, "structured_json"):
            return record.structured_json  # type: ignore[return-value]

        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


ROOT_LOGGER_NAME = "proctime"


def get_logger(name: str, log_file: Optional[str] = None) -> StructuredLogger:
    """Get or create a structured logger.

    Loggers below the ``proctime`` namespace get no handler and stay at
    NOTSET; they propagate to the package root logger, whose level and
    handlers are set through :func:`configure_default_logger`.
    """
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return StructuredLogger(name, log_file, console=False)

    logger = StructuredLogger(name, log_file)
    logger.set_level("INFO")
    return logger


def configure_default_logger(
    level: str = "INFO", log_file: Optional[str] = None
) -> StructuredLogger:
    """Configure the package root logger.

    Args:
        level: Log level
        log_file: Optional log file path

    Returns:
        Configured logger
    """
    logger = get_logger(ROOT_LOGGER_NAME, log_file)
    logger.set_level(level)
    return logger


