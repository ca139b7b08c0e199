"""Plausibility filter for raw sensor samples."""

from __future__ import annotations

import math
from typing import Iterable, Iterator

from models.records import Reading

TEMP_MIN = 2.0
TEMP_MAX = 40.0
HUMIDITY_MAX = 100.0


def accept(reading: Reading) -> bool:
    """Return ``False`` for samples the sensor hardware could not have produced."""
    values = (reading.temp_inside, reading.temp_outside, reading.humidity)
    if any(math.isnan(value) for value in values):
        return False
    if not TEMP_MIN <= reading.temp_inside <= TEMP_MAX:
        return False
    if not TEMP_MIN <= reading.temp_outside <= TEMP_MAX:
        return False
    return 0.0 < reading.humidity <= HUMIDITY_MAX


def retained(readings: Iterable[Reading]) -> Iterator[Reading]:
    return (reading for reading in readings if accept(reading))
