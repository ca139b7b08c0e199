from __future__ import annotations
import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Iterator, Optional

from models.records import Reading
from services.errors import StoreError
from settings import get_settings

logger = logging.getLogger(__name__)


def _normalize(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def _to_payload(reading: Reading) -> Dict[str, Any]:
    return {
        "temp_inside": reading.temp_inside,
        "temp_outside": reading.temp_outside,
        "humidity": reading.humidity,
    }


def _from_payload(key: str, payload: Dict[str, Any]) -> Reading:
    return Reading(
        timestamp=_normalize(datetime.fromisoformat(key)),
        temp_inside=float(payload["temp_inside"]),
        temp_outside=float(payload["temp_outside"]),
        humidity=float(payload["humidity"]),
    )


class ReadingsTable:
    """Append-only readings keyed by timestamp, optionally persisted as JSON.

    Every operation waits at most ``timeout`` seconds for the table lock and
    raises ``StoreError`` instead of blocking the calling worker.
    """

    def __init__(
        self,
        name: str,
        persistence_path: Optional[Path] = None,
        timeout: float = 5.0,
    ) -> None:
        self.name = name
        self._items: Dict[datetime, Reading] = {}
        self.persistence_path = persistence_path
        self.timeout = timeout
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def append(self, reading: Reading) -> Reading:
        stored = Reading(
            timestamp=_normalize(reading.timestamp),
            temp_inside=float(reading.temp_inside),
            temp_outside=float(reading.temp_outside),
            humidity=float(reading.humidity),
        )
        with self._locked("append"):
            if stored.timestamp in self._items:
                self._fail(
                    "append",
                    f"Reading at {stored.timestamp.isoformat()} already exists.",
                )
            self._items[stored.timestamp] = stored
            try:
                self._persist()
            except OSError as exc:
                del self._items[stored.timestamp]
                self._fail("append", f"Could not persist reading: {exc}", exc)
        return stored

    def scan(self) -> list[Reading]:
        """Return every stored reading in ascending timestamp order."""

        with self._locked("scan"):
            return [self._items[key] for key in sorted(self._items)]

    def latest_timestamp(self) -> Optional[datetime]:
        with self._locked("latest_timestamp"):
            return max(self._items, default=None)

    def reset(self) -> None:
        with self._locked("reset"):
            previous = self._items
            self._items = {}
            try:
                self._persist()
            except OSError as exc:
                self._items = previous
                self._fail("reset", f"Could not drop readings: {exc}", exc)

    def __len__(self) -> int:
        with self._locked("count"):
            return len(self._items)

    @contextmanager
    def _locked(self, operation: str) -> Iterator[None]:
        if not self._lock.acquire(timeout=self.timeout):
            self._fail(operation, f"Timed out after {self.timeout}s waiting for table.")
        try:
            yield
        finally:
            self._lock.release()

    def _fail(self, operation: str, message: str, cause: Optional[Exception] = None) -> None:
        logger.error(
            "Readings table %s failed",
            operation,
            extra={"table": self.name, "reason": message},
        )
        raise StoreError(message) from cause

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = {
            timestamp.isoformat(): _to_payload(item)
            for timestamp, item in self._items.items()
        }
        self.persistence_path.write_text(json.dumps(payload, indent=2, sort_keys=True))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            logger.warning(
                "Ignoring unreadable readings file",
                extra={"table": self.name, "reason": str(self.persistence_path)},
            )
            data = {}

        if not isinstance(data, dict):
            logger.warning(
                "Ignoring readings file without a top-level object",
                extra={"table": self.name, "reason": str(self.persistence_path)},
            )
            data = {}

        for key, payload in data.items():
            try:
                reading = _from_payload(key, payload)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning(
                    "Skipping malformed stored reading",
                    extra={"table": self.name, "timestamp": key, "reason": str(exc)},
                )
                continue
            self._items[reading.timestamp] = reading


@lru_cache
def build_default_table(
    name: Optional[str] = None,
    path: Optional[str] = None,
) -> ReadingsTable:
    settings = get_settings()
    table_name = settings.table_name if name is None else name
    table_path = settings.table_persistence_path if path is None else path
    persistence = Path(table_path) if table_path else None
    return ReadingsTable(
        name=table_name,
        persistence_path=persistence,
        timeout=settings.store_timeout_seconds,
    )
