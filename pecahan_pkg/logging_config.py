"""Logging for the calculator.

All modules log under the "pecahan" logger. Nothing is printed until
setup_logging() attaches handlers; library callers that never call it
only see warnings through logging's last-resort handler.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

from .config import LOG_LEVEL, LOG_ROOT


class StructuredFormatter(logging.Formatter):
    """One line per record: ISO timestamp, level, logger name, message."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


def setup_logging(
    level: Optional[str] = None, log_file: Optional[str] = None
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the calculator logger.

    Calling it again replaces the previous handlers, so the CLI can be
    started several times in one process.

    Args:
        level: Level name; defaults to PECAHAN_LOG_LEVEL or WARNING
        log_file: Also append records to this file

    Returns:
        The "pecahan" logger
    """
    logger = logging.getLogger(LOG_ROOT)
    logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.WARNING))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger for one module, e.g. get_logger("worker") -> pecahan.worker."""
    return logging.getLogger(f"{LOG_ROOT}.{name}")
