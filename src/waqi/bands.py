# file: src/waqi/bands.py
"""AQI -> health band mapping (WAQI / US EPA breakpoints)."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional


class BandInfo(NamedTuple):
    low: Optional[int]
    high: Optional[int]
    color: str
    label: str
    style: str  # rich style used by the human renderer


class AQIBand(Enum):
    GOOD = BandInfo(0, 50, "green", "Good", "green")
    MODERATE = BandInfo(51, 100, "yellow", "Moderate", "yellow")
    SENSITIVE = BandInfo(101, 150, "orange", "Unhealthy for sensitive groups", "dark_orange")
    UNHEALTHY = BandInfo(151, 200, "red", "Unhealthy", "red")
    VERY_UNHEALTHY = BandInfo(201, 300, "purple", "Very unhealthy", "purple")
    HAZARDOUS = BandInfo(301, 500, "maroon", "Hazardous", "#800000")
    UNKNOWN = BandInfo(None, None, "white", "Unknown", "white")

    @property
    def color(self) -> str:
        return self.value.color

    @property
    def label(self) -> str:
        return self.value.label

    @property
    def style(self) -> str:
        return self.value.style


_RANGED = [band for band in AQIBand if band.value.low is not None]


def aqi_band(aqi: int) -> AQIBand:
    """Band for an AQI value; anything outside 0..500 is UNKNOWN."""
    for band in _RANGED:
        if band.value.low <= aqi <= band.value.high:
            return band
    return AQIBand.UNKNOWN


def aqi_color(aqi: int) -> str:
    return aqi_band(aqi).color
