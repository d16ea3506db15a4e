"""
Logging configuration.

Library modules only create loggers via logging.getLogger(__name__); the
command line tool calls setup_logging() to attach a handler.

Parser records carry the expression being parsed and, on failure, the error
tag and token position as ``extra`` attributes. Both formatters render them.
"""

import json
import logging
import sys
from typing import Any, Dict

from .config import Settings, get_settings

# Attributes the parser attaches to its records via ``extra``.
PARSE_FIELDS = ("expression", "tokens", "error_tag", "position")


def parse_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Parser attributes present on a record, in PARSE_FIELDS order."""
    return {
        field: getattr(record, field)
        for field in PARSE_FIELDS
        if hasattr(record, field)
    }


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with parser attributes as top-level keys"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(parse_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Single-line text for stderr; the expression is appended when known"""

    def __init__(self):
        super().__init__(fmt="%(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        expression = getattr(record, "expression", None)
        if expression is not None:
            text = f"{text} [expression={expression!r}]"
        return text


def setup_logging(settings: Settings | None = None) -> None:
    """Configure logging for the mathruntime package"""
    settings = settings or get_settings()

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)

    if settings.LOG_FORMAT == "json":
        formatter = StructuredFormatter()
    else:
        formatter = TextFormatter()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(log_level)

    logger = logging.getLogger("mathruntime")
    logger.handlers = [handler]
    logger.setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)
