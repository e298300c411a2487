# file: src/waqi/models.py
"""
Typed records for WAQI responses.

Every record is a frozen dataclass built once via ``from_dict``. Decoding is
strict: unknown keys are ignored, but a missing key or a wrong type on a
modeled field raises DecodeError (no partial decode).

Shapes:
- /search/  -> {"status": "ok", "data": [StationSummary, ...]}
- /feed/x/  -> {"status": "ok", "data": StationDetail}
- errors    -> {"status": "error", "data": "Unknown station"}
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Mapping, Optional, Tuple, TypeVar

from .errors import DecodeError, UpstreamError

T = TypeVar("T")

_AQI_NUMBER = re.compile(r"-?[0-9]+")


# =============================================================================
# FIELD HELPERS
# =============================================================================

def _field(obj: Mapping[str, Any], *keys: str, path: str, optional: bool = False) -> Any:
    """Return the first present key (wire name first, then aliases)."""
    for key in keys:
        if key in obj:
            return obj[key]
    if optional:
        return None
    raise DecodeError(f"missing field {keys[0]!r}", path=path)


def _as_dict(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"expected object, got {type(value).__name__}", path=path)
    return value


def _as_list(value: Any, path: str) -> list:
    if not isinstance(value, list):
        raise DecodeError(f"expected array, got {type(value).__name__}", path=path)
    return value


def _as_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"expected string, got {type(value).__name__}", path=path)
    return value


def _as_int(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"expected integer, got {type(value).__name__}", path=path)
    return value


def _as_float(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"expected number, got {type(value).__name__}", path=path)
    return float(value)


# =============================================================================
# SEARCH RECORDS
# =============================================================================

@dataclass(frozen=True)
class CityRef:
    geo: Tuple[float, float]
    name: str
    url: str

    @classmethod
    def from_dict(cls, raw: Any, path: str = "city") -> "CityRef":
        obj = _as_dict(raw, path)
        geo = _as_list(_field(obj, "geo", path=path), f"{path}.geo")
        if len(geo) != 2:
            raise DecodeError(f"expected [lat, lon], got {len(geo)} values", path=f"{path}.geo")
        return cls(
            geo=(_as_float(geo[0], f"{path}.geo[0]"), _as_float(geo[1], f"{path}.geo[1]")),
            name=_as_str(_field(obj, "name", path=path), f"{path}.name"),
            url=_as_str(_field(obj, "url", path=path), f"{path}.url"),
        )


@dataclass(frozen=True)
class StationTime:
    stime: str
    tz: str
    vtime: int

    @classmethod
    def from_dict(cls, raw: Any, path: str = "time") -> "StationTime":
        obj = _as_dict(raw, path)
        return cls(
            stime=_as_str(_field(obj, "stime", path=path), f"{path}.stime"),
            tz=_as_str(_field(obj, "tz", path=path), f"{path}.tz"),
            vtime=_as_int(_field(obj, "vtime", path=path), f"{path}.vtime"),
        )


@dataclass(frozen=True)
class StationSummary:
    # "-" when the station has no current reading
    aqi: str
    station: CityRef
    time: StationTime
    uid: int

    @classmethod
    def from_dict(cls, raw: Any, path: str = "data[]") -> "StationSummary":
        obj = _as_dict(raw, path)
        return cls(
            aqi=_as_str(_field(obj, "aqi", path=path), f"{path}.aqi"),
            station=CityRef.from_dict(_field(obj, "station", path=path), f"{path}.station"),
            time=StationTime.from_dict(_field(obj, "time", path=path), f"{path}.time"),
            uid=_as_int(_field(obj, "uid", path=path), f"{path}.uid"),
        )

    def aqi_value(self) -> Optional[int]:
        """Numeric AQI, or None for placeholders like "-"."""
        text = self.aqi.strip()
        if not _AQI_NUMBER.fullmatch(text):
            return None
        return int(text)


# =============================================================================
# FEED RECORDS
# =============================================================================

@dataclass(frozen=True)
class Attribution:
    url: str
    name: str

    @classmethod
    def from_dict(cls, raw: Any, path: str = "attributions[]") -> "Attribution":
        obj = _as_dict(raw, path)
        return cls(
            url=_as_str(_field(obj, "url", path=path), f"{path}.url"),
            name=_as_str(_field(obj, "name", path=path), f"{path}.name"),
        )


@dataclass(frozen=True)
class ForecastStats:
    avg: int
    day: str
    max: int
    min: int

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "ForecastStats":
        obj = _as_dict(raw, path)
        return cls(
            avg=_as_int(_field(obj, "avg", path=path), f"{path}.avg"),
            day=_as_str(_field(obj, "day", path=path), f"{path}.day"),
            max=_as_int(_field(obj, "max", path=path), f"{path}.max"),
            min=_as_int(_field(obj, "min", path=path), f"{path}.min"),
        )


def _stats_list(obj: Mapping[str, Any], path: str, key: str, *aliases: str) -> Tuple[ForecastStats, ...]:
    items = _as_list(_field(obj, key, *aliases, path=path), f"{path}.{key}")
    return tuple(
        ForecastStats.from_dict(item, f"{path}.{key}[{i}]") for i, item in enumerate(items)
    )


@dataclass(frozen=True)
class DailyForecast:
    ozone: Tuple[ForecastStats, ...]
    pm10: Tuple[ForecastStats, ...]
    pm25: Tuple[ForecastStats, ...]
    uvi: Tuple[ForecastStats, ...]

    @classmethod
    def from_dict(cls, raw: Any, path: str = "forecast.daily") -> "DailyForecast":
        obj = _as_dict(raw, path)
        return cls(
            ozone=_stats_list(obj, path, "o3", "ozone"),
            pm10=_stats_list(obj, path, "pm10"),
            pm25=_stats_list(obj, path, "pm25", "pm2_5"),
            uvi=_stats_list(obj, path, "uvi", "uv"),
        )

    def series(self) -> Dict[str, Tuple[ForecastStats, ...]]:
        return {"o3": self.ozone, "pm10": self.pm10, "pm25": self.pm25, "uvi": self.uvi}


@dataclass(frozen=True)
class Forecast:
    daily: Optional[DailyForecast] = None

    @classmethod
    def from_dict(cls, raw: Any, path: str = "forecast") -> "Forecast":
        obj = _as_dict(raw, path)
        daily = _field(obj, "daily", path=path, optional=True)
        if daily is None:
            return cls(daily=None)
        return cls(daily=DailyForecast.from_dict(daily, f"{path}.daily"))


@dataclass(frozen=True)
class DebugInfo:
    sync: str

    @classmethod
    def from_dict(cls, raw: Any, path: str = "debug") -> "DebugInfo":
        obj = _as_dict(raw, path)
        return cls(sync=_as_str(_field(obj, "sync", path=path), f"{path}.sync"))


def _individual_aqi(raw: Any, path: str) -> Dict[str, Dict[str, float]]:
    obj = _as_dict(raw, path)
    out: Dict[str, Dict[str, float]] = {}
    for pollutant, values in obj.items():
        entry = _as_dict(values, f"{path}.{pollutant}")
        out[pollutant] = {
            name: _as_float(v, f"{path}.{pollutant}.{name}") for name, v in entry.items()
        }
    return out


@dataclass(frozen=True)
class StationDetail:
    aqi: int
    idx: int
    attributions: Tuple[Attribution, ...]
    city: CityRef
    dominant_pollutant: str
    individual_aqi: Dict[str, Dict[str, float]]
    forecast: Forecast
    debug: DebugInfo

    @classmethod
    def from_dict(cls, raw: Any, path: str = "data") -> "StationDetail":
        obj = _as_dict(raw, path)
        attributions = _as_list(_field(obj, "attributions", path=path), f"{path}.attributions")
        return cls(
            aqi=_as_int(_field(obj, "aqi", path=path), f"{path}.aqi"),
            idx=_as_int(_field(obj, "idx", path=path), f"{path}.idx"),
            attributions=tuple(
                Attribution.from_dict(a, f"{path}.attributions[{i}]")
                for i, a in enumerate(attributions)
            ),
            city=CityRef.from_dict(_field(obj, "city", path=path), f"{path}.city"),
            dominant_pollutant=_as_str(
                _field(obj, "dominentpol", "dominant_pollutant", path=path),
                f"{path}.dominentpol",
            ),
            individual_aqi=_individual_aqi(
                _field(obj, "iaqi", "individual_aqi", path=path), f"{path}.iaqi"
            ),
            forecast=Forecast.from_dict(_field(obj, "forecast", path=path), f"{path}.forecast"),
            debug=DebugInfo.from_dict(_field(obj, "debug", path=path), f"{path}.debug"),
        )

    def reading(self, pollutant: str) -> Optional[float]:
        return self.individual_aqi.get(pollutant, {}).get("v")


# =============================================================================
# ENVELOPE
# =============================================================================

@dataclass(frozen=True)
class ResponseEnvelope(Generic[T]):
    status: str
    data: T

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @staticmethod
    def _split(payload: Any) -> Tuple[str, Any]:
        obj = _as_dict(payload, "$")
        status = _as_str(_field(obj, "status", path="$"), "$.status")
        return status, _field(obj, "data", path="$")

    @classmethod
    def decode(cls, payload: Any, decoder: Callable[[Any], T]) -> "ResponseEnvelope[T]":
        """
        Typed decode. A non-"ok" status is reported as UpstreamError (with the
        upstream message) before the data shape is looked at.
        """
        status, data = cls._split(payload)
        if status != "ok":
            message = data if isinstance(data, str) else repr(data)
            raise UpstreamError(status, message)
        return cls(status=status, data=decoder(data))

    @classmethod
    def untyped(cls, payload: Any) -> "ResponseEnvelope[Any]":
        """Pass-through decode for JSON output: data is kept as-is."""
        status, data = cls._split(payload)
        return cls(status=status, data=data)


def _decode_summaries(data: Any) -> Tuple[StationSummary, ...]:
    items = _as_list(data, "data")
    return tuple(StationSummary.from_dict(item, f"data[{i}]") for i, item in enumerate(items))


def decode_search(payload: Any) -> ResponseEnvelope[Tuple[StationSummary, ...]]:
    return ResponseEnvelope.decode(payload, _decode_summaries)


def decode_feed(payload: Any) -> ResponseEnvelope[StationDetail]:
    return ResponseEnvelope.decode(payload, StationDetail.from_dict)
