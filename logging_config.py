"""Logging setup for the HTTP application."""

from __future__ import annotations

import logging
import time
from logging.config import dictConfig
from typing import Any, Dict, Iterable, Sequence

from settings import get_settings

_DEFAULT_EXTRA_KEYS = (
    "table",
    "timestamp",
    "generation",
    "reading_count",
    "retained_count",
    "reason",
    "elapsed_ms",
)

# Third-party loggers that are too chatty at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

_configured = False


class ContextualFormatter(logging.Formatter):
    """Render UTC timestamps and append known ``extra`` fields as ``key=value``."""

    converter = time.gmtime

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._extra_keys: Sequence[str] = tuple(extra_keys or _DEFAULT_EXTRA_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = [
            f"{key}={getattr(record, key)}"
            for key in self._extra_keys
            if getattr(record, key, None) is not None
        ]
        if not context:
            return message
        return f"{message} | {' '.join(context)}"


def _logging_dict(level: str | int) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "contextual": {
                "()": "logging_config.ContextualFormatter",
                "fmt": "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
                "extra_keys": list(_DEFAULT_EXTRA_KEYS),
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "contextual",
            }
        },
        "loggers": {name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
        "root": {"handlers": ["default"], "level": level},
    }


def configure_logging(level: str | int | None = None, force: bool = False) -> None:
    """Configure process-wide logging once; ``force`` re-applies it."""
    global _configured
    if _configured and not force:
        return

    log_level = level if level is not None else get_settings().log_level
    dictConfig(_logging_dict(log_level))
    _configured = True
