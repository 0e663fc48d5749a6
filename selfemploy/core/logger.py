"""Logging setup.

Plain text on stdout by default; ``LOG_FORMAT=json`` switches to one JSON object
per line tagged with the service name and environment, for log aggregation.
"""
from __future__ import annotations

import json
import logging
import sys
from typing import Any

from selfemploy.core.config import settings

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}

# Per-statement / per-request chatter at INFO
_NOISY_LOGGERS = ("sqlalchemy.engine", "celery.app.trace", "uvicorn.access")

PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class JsonFormatter(logging.Formatter):
    def __init__(self, service: str, env: str) -> None:
        super().__init__()
        self.service = service
        self.env = env

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "service": self.service,
            "env": self.env,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra
        return json.dumps(payload, default=str)


def build_formatter(log_format: str | None = None) -> logging.Formatter:
    if (log_format or settings.LOG_FORMAT).lower() == "json":
        return JsonFormatter(settings.APP_NAME, settings.ENV)
    return logging.Formatter(PLAIN_FORMAT)


def init_logging(level: int | None = None, force: bool = False) -> None:
    """Install the stdout handler on the root logger.

    Does nothing when the root logger already has handlers (uvicorn, pytest)
    unless ``force`` is set, in which case they are replaced.
    """
    root = logging.getLogger()
    if root.handlers and not force:
        return
    for existing in list(root.handlers):
        root.removeHandler(existing)

    effective_level = level or getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter())
    root.setLevel(effective_level)
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective_level, logging.WARNING))
