"""Aggregation logic turning filtered readings into chart series."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Iterable, List, Tuple

from models.records import ChartDataset, Reading

AXIS_PADDING_FRACTION = 0.1
LABEL_FORMAT = "%H:%M:%S"


def _padded(lower: float, upper: float) -> Tuple[float, float]:
    pad = (upper - lower) * AXIS_PADDING_FRACTION
    return lower - pad, upper + pad


class SeriesAggregator:
    """Pure aggregation component that can be unit tested in isolation.

    Input must already be filtered and ordered by timestamp. The outdoor
    series is shifted so both temperature series share the indoor mean, which
    keeps them comparable on a single axis when the outdoor sensor runs
    systematically warmer or colder.
    """

    def __init__(self, display_utc_offset_hours: float = 0.0) -> None:
        self.display_offset = timedelta(hours=display_utc_offset_hours)

    def aggregate(self, readings: Iterable[Reading]) -> ChartDataset:
        dataset = ChartDataset()
        inside_total = 0.0
        outside_total = 0.0
        raw_outside: List[float] = []

        for reading in readings:
            inside_total += reading.temp_inside
            outside_total += reading.temp_outside
            dataset.labels.append(self.format_label(reading))
            dataset.series_inside.append(reading.temp_inside)
            dataset.series_humidity.append(reading.humidity)
            raw_outside.append(reading.temp_outside)

        count = len(raw_outside)
        if not count:
            return dataset

        offset = inside_total / count - outside_total / count

        # Single reduction pass: seeds are infinities so one sample sets both bounds.
        temp_min, temp_max = math.inf, -math.inf
        humidity_min, humidity_max = math.inf, -math.inf
        for inside, outside, humidity in zip(
            dataset.series_inside, raw_outside, dataset.series_humidity
        ):
            adjusted = outside + offset
            dataset.series_outside.append(adjusted)
            temp_min = min(temp_min, inside, adjusted)
            temp_max = max(temp_max, inside, adjusted)
            humidity_min = min(humidity_min, humidity)
            humidity_max = max(humidity_max, humidity)

        dataset.temp_axis_min, dataset.temp_axis_max = _padded(temp_min, temp_max)
        dataset.humidity_axis_min, dataset.humidity_axis_max = _padded(
            humidity_min, humidity_max
        )
        return dataset

    def format_label(self, reading: Reading) -> str:
        return (reading.timestamp + self.display_offset).strftime(LABEL_FORMAT)
