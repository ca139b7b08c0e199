from __future__ import annotations

import math
import os
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_TABLE_NAME_ENV = "READINGS_TABLE_NAME"
_TABLE_PATH_ENV = "READINGS_TABLE_PATH"
_STORE_TIMEOUT_ENV = "STORE_TIMEOUT_SECONDS"
_DISPLAY_OFFSET_ENV = "DISPLAY_UTC_OFFSET_HOURS"
_LOG_LEVEL_ENV = "LOG_LEVEL"

MAX_DISPLAY_OFFSET_HOURS = 24.0


@dataclass(frozen=True)
class Settings:
    table_name: str
    table_persistence_path: Optional[str]
    store_timeout_seconds: float
    display_utc_offset_hours: float
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_float_env(name: str, default: float, lower: float, upper: float) -> float:
    """Parse a finite float within ``(lower, upper]``, else return ``default``."""
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    if not math.isfinite(parsed) or not lower < parsed <= upper:
        return default
    return parsed


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        table_name=_read_str_env(_TABLE_NAME_ENV, "tempdata"),
        table_persistence_path=_read_optional_env(_TABLE_PATH_ENV, "./tmp/readings.json"),
        store_timeout_seconds=_read_float_env(
            _STORE_TIMEOUT_ENV, 5.0, lower=0.0, upper=threading.TIMEOUT_MAX
        ),
        display_utc_offset_hours=_read_float_env(
            _DISPLAY_OFFSET_ENV, 0.0, lower=-MAX_DISPLAY_OFFSET_HOURS, upper=MAX_DISPLAY_OFFSET_HOURS
        ),
        log_level=_read_log_level("INFO"),
    )
