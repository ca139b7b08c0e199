"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List


@dataclass(frozen=True, slots=True)
class Reading:
    """A single timestamped sample from the indoor/outdoor sensor pair."""

    timestamp: datetime
    temp_inside: float
    temp_outside: float
    humidity: float


@dataclass(slots=True)
class ChartDataset:
    """Aligned, padded series ready to hand to a chart renderer.

    ``labels`` and the three series are index-aligned and always share a
    length. A zero length dataset means there is nothing to plot.
    """

    labels: List[str] = field(default_factory=list)
    series_inside: List[float] = field(default_factory=list)
    series_outside: List[float] = field(default_factory=list)
    series_humidity: List[float] = field(default_factory=list)
    temp_axis_min: float = 0.0
    temp_axis_max: float = 0.0
    humidity_axis_min: float = 0.0
    humidity_axis_max: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.labels

    def __len__(self) -> int:
        return len(self.labels)

    def copy(self) -> "ChartDataset":
        return replace(
            self,
            labels=list(self.labels),
            series_inside=list(self.series_inside),
            series_outside=list(self.series_outside),
            series_humidity=list(self.series_humidity),
        )
