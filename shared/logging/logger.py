"""
Structured JSON logging for the GaiaShield services.

Each log entry includes the service name and is written to stdout as a
single JSON line. Structured context goes through
``extra={"_extra": {...}}``; keys that look like credentials are redacted.
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from datetime import datetime, timezone
from typing import Any

_SENSITIVE_KEY = re.compile(r"api[_-]?key|token|secret|password|appid", re.IGNORECASE)
REDACTED = "[REDACTED]"


def redact(data: Any) -> Any:
    """Recursively replace values stored under credential-like keys."""
    if isinstance(data, dict):
        return {
            key: REDACTED if _SENSITIVE_KEY.search(str(key)) else redact(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [redact(item) for item in data]
    return data


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        extra = getattr(record, "_extra", None)
        if extra:
            entry["extra"] = redact(extra)

        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(service_name: str, level_name: str | None = None) -> logging.Logger:
    """
    Configure the root logger for a service with JSON output to stdout.

    Call once at service startup (in main.py or lifespan).
    Returns the service-specific logger.
    """
    level_name = (level_name or os.environ.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter(service_name))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Silence noisy third-party loggers
    for noisy in ("uvicorn.access", "httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger(service_name)
    logger.info("Logging initialized", extra={"_extra": {"level": level_name}})
    return logger


def log_performance(logger: logging.Logger, message: str, **metrics: Any) -> None:
    """Emit a performance record at INFO with ``type="performance"``."""
    metrics.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    logger.info(message, extra={"_extra": {"type": "performance", "metrics": metrics}})
