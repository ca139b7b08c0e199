"""In-memory memo of the most recently rendered chart."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Optional

from models.records import ChartDataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    artifact: str
    dataset: ChartDataset
    generation: int


class RenderCache:
    """Single-entry cache covering the whole reading history.

    Every ``invalidate()`` bumps a generation counter. A cache miss records
    the generation before it reads the store and passes it back to ``put``;
    the entry is only stored if no invalidation happened in between, so a
    computation that raced with a write is discarded rather than served.
    """

    def __init__(self) -> None:
        self._entry: Optional[CacheEntry] = None
        self._generation = 0
        self._lock = Lock()

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def get(self) -> Optional[CacheEntry]:
        with self._lock:
            return self._entry

    def put(self, artifact: str, dataset: ChartDataset, generation: int) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "Discarding chart built before an invalidation",
                    extra={"generation": generation},
                )
                return False
            self._entry = CacheEntry(
                artifact=artifact, dataset=dataset, generation=generation
            )
            return True

    def invalidate(self) -> int:
        with self._lock:
            self._entry = None
            self._generation += 1
            generation = self._generation
        logger.debug("Render cache invalidated", extra={"generation": generation})
        return generation
