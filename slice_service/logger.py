"""
Centralized logging configuration for the slice service.

Provides request-tagged logging so individual planning calls can be
correlated in service logs. The log level and output format come from
SliceSettings (LOG_LEVEL, LOG_FORMAT) via setup_logging at startup.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class RequestLogger(logging.LoggerAdapter):
    """
    Logger adapter that prefixes messages with a request identifier.
    """

    def process(self, msg, kwargs):
        request_id = self.extra.get("request_id")
        if request_id:
            return f"[req:{request_id[:8]}] {msg}", kwargs
        return msg, kwargs


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure global logging settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log format ("simple" or "json")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str, request_id: Optional[str] = None) -> RequestLogger:
    """
    Get a service logger instance.

    Args:
        name: Logger name (usually __name__)
        request_id: Optional request identifier for correlation

    Returns:
        RequestLogger wrapping logging.getLogger(name)
    """
    return RequestLogger(logging.getLogger(name), {"request_id": request_id})
