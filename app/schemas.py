"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from models.records import ChartDataset


class ChartDataResponse(BaseModel):
    """Aligned series and padded axis bounds behind the rendered chart."""

    labels: List[str] = Field(default_factory=list)
    series_inside: List[float] = Field(default_factory=list)
    series_outside: List[float] = Field(
        default_factory=list,
        description="Outdoor temperatures shifted onto the indoor mean.",
    )
    series_humidity: List[float] = Field(default_factory=list)
    temp_axis_min: float
    temp_axis_max: float
    humidity_axis_min: float
    humidity_axis_max: float

    @classmethod
    def from_dataset(cls, dataset: ChartDataset) -> "ChartDataResponse":
        return cls(
            labels=list(dataset.labels),
            series_inside=list(dataset.series_inside),
            series_outside=list(dataset.series_outside),
            series_humidity=list(dataset.series_humidity),
            temp_axis_min=dataset.temp_axis_min,
            temp_axis_max=dataset.temp_axis_max,
            humidity_axis_min=dataset.humidity_axis_min,
            humidity_axis_max=dataset.humidity_axis_max,
        )
