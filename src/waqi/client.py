# src/waqi/client.py
from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import requests

from .config import DEFAULT_BASE_URL, AQIClientConfig
from .errors import DecodeError, InvalidStationError

logger = logging.getLogger(__name__)

# Kept literal in the path: "@1234" ids and "geo:lat;lng" lookups.
_STATION_SAFE_CHARS = "@:;"


def _sanitize_url(url: str) -> str:
    parts = urlsplit(url)
    q = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k.lower() != "token"]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(q), parts.fragment))


def station_path(station: str) -> str:
    """
    /feed/<station>/ with the station escaped as a single path segment.

    Raises InvalidStationError for ids that would escape the segment.
    """
    station = station.strip()
    if not station:
        raise InvalidStationError("station identifier must not be empty")
    if set(station) == {"."}:
        raise InvalidStationError(f"invalid station identifier: {station!r}")
    return f"/feed/{quote(station, safe=_STATION_SAFE_CHARS)}/"


class WAQIClient:
    """
    One-shot client for the two read-only WAQI endpoints.

    - search(keyword) -> GET /search/?token=..&keyword=..
    - feed(station)   -> GET /feed/<station>/?token=..

    Both return the decoded JSON payload; typing it is left to models.py.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # No retry adapter: a failed request is reported, not repeated.
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: AQIClientConfig) -> "WAQIClient":
        return cls(config.token, base_url=config.base_url, timeout=config.timeout)

    def build_url(self, path: str, params: Optional[dict] = None) -> str:
        query = urlencode({"token": self.token, **(params or {})})
        return f"{self.base_url}{path}?{query}"

    def _get(self, path: str, params: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        full_params = {"token": self.token, **(params or {})}
        logger.info("[waqi] GET %s", _sanitize_url(self.build_url(path, params)))

        resp = self.session.get(url, params=full_params, timeout=self.timeout)
        logger.debug("[waqi] status=%s", resp.status_code)
        resp.raise_for_status()

        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"response body is not valid JSON: {exc}", path=path) from exc

    def search(self, keyword: str) -> Any:
        return self._get("/search/", {"keyword": keyword})

    def feed(self, station: str) -> Any:
        return self._get(station_path(station))

    def close(self) -> None:
        self.session.close()
