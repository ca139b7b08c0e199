"""Reading ingestion and cached chart rendering."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Callable, Optional

from datastore.readings_table import ReadingsTable, build_default_table
from models.records import ChartDataset, Reading
from services import sample_filter
from services.aggregator import SeriesAggregator
from services.errors import ReadingValidationError, RenderError
from services.render_cache import CacheEntry, RenderCache
from services.renderer import ChartRenderer
from settings import get_settings

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_measurement(name: str, raw: Optional[str]) -> float:
    """Parse a single query-string measurement, rejecting blanks and junk."""
    candidate = (raw or "").strip()
    if not candidate:
        raise ReadingValidationError(f'Wrong param "{name}": value is missing')
    try:
        return float(candidate)
    except ValueError as exc:
        raise ReadingValidationError(
            f'Wrong param "{name}": {candidate!r} is not a number'
        ) from exc


def _format_series(values: list[float]) -> str:
    return " ".join(f"{value:0.2f}" for value in values)


class ReadingService:
    """Coordinates the readings table, chart pipeline and render cache.

    Writes invalidate the cache only after the table has accepted them, so a
    failed write leaves the previously cached chart in place and a successful
    one is visible to every read that starts after it returns.
    """

    def __init__(
        self,
        table: ReadingsTable,
        aggregator: SeriesAggregator,
        renderer: ChartRenderer,
        cache: Optional[RenderCache] = None,
        clock: Clock = _utcnow,
    ) -> None:
        self.table = table
        self.aggregator = aggregator
        self.renderer = renderer
        self.cache = cache or RenderCache()
        self.clock = clock

    def ingest(
        self,
        inside: Optional[str],
        outside: Optional[str],
        humidity: Optional[str],
    ) -> Reading:
        """Validate raw measurements, store them, then invalidate the chart."""
        temp_inside = parse_measurement("inside", inside)
        temp_outside = parse_measurement("outside", outside)
        relative_humidity = parse_measurement("humidity", humidity)
        reading = Reading(
            timestamp=self.clock(),
            temp_inside=temp_inside,
            temp_outside=temp_outside,
            humidity=relative_humidity,
        )
        stored = self.table.append(reading)
        self.cache.invalidate()
        logger.info(
            "Reading stored",
            extra={"timestamp": stored.timestamp.isoformat()},
        )
        return stored

    def render_chart(self) -> Optional[str]:
        """Return chart markup, or ``None`` when no plausible reading exists."""
        entry = self._resolve_entry()
        return entry.artifact if entry else None

    def chart_dataset(self) -> Optional[ChartDataset]:
        """Copy of the dataset behind the current chart."""
        entry = self._resolve_entry()
        return entry.dataset.copy() if entry else None

    def raw_dump(self) -> Optional[str]:
        """Plain-text dump of the retained raw values, one series per line."""
        inside: list[float] = []
        outside: list[float] = []
        humidity: list[float] = []
        for reading in sample_filter.retained(self.table.scan()):
            inside.append(reading.temp_inside)
            outside.append(reading.temp_outside)
            humidity.append(reading.humidity)
        if not inside:
            return None
        return "\n".join(_format_series(series) for series in (inside, outside, humidity))

    def reset_all(self) -> None:
        self.table.reset()
        self.cache.invalidate()
        logger.info("All readings dropped", extra={"table": self.table.name})

    def last_update_age(self) -> Optional[timedelta]:
        latest = self.table.latest_timestamp()
        if latest is None:
            return None
        return self.clock() - latest

    def _resolve_entry(self) -> Optional[CacheEntry]:
        entry = self.cache.get()
        if entry is not None:
            logger.debug("Render cache hit", extra={"generation": entry.generation})
            return entry

        # Captured before the scan so a write landing mid-build voids the put.
        generation = self.cache.generation
        start_time = time.perf_counter()
        readings = self.table.scan()
        dataset = self.aggregator.aggregate(sample_filter.retained(readings))
        if dataset.is_empty:
            logger.debug(
                "No plausible readings to chart",
                extra={"reading_count": len(readings), "retained_count": 0},
            )
            return None

        try:
            artifact = self.renderer.render(dataset)
        except Exception as exc:
            logger.exception(
                "Chart rendering failed",
                extra={"retained_count": len(dataset)},
            )
            raise RenderError("Chart rendering failed.") from exc

        entry = CacheEntry(artifact=artifact, dataset=dataset, generation=generation)
        self.cache.put(artifact, dataset, generation)
        logger.info(
            "Chart rebuilt",
            extra={
                "generation": generation,
                "reading_count": len(readings),
                "retained_count": len(dataset),
                "elapsed_ms": int((time.perf_counter() - start_time) * 1000),
            },
        )
        return entry


@lru_cache
def build_default_service() -> ReadingService:
    """Factory that wires the service with the configured table."""
    settings = get_settings()
    table = build_default_table()
    aggregator = SeriesAggregator(display_utc_offset_hours=settings.display_utc_offset_hours)
    return ReadingService(table=table, aggregator=aggregator, renderer=ChartRenderer())
