# file: src/waqi/errors.py
"""Error taxonomy for the WAQI client."""

from __future__ import annotations

from typing import Optional


class AQIError(Exception):
    """Base class for every error the CLI reports before exiting non-zero."""


class ConfigError(AQIError, ValueError):
    """Raised before any network I/O when arguments or environment are unusable."""


class MissingTokenError(ConfigError):
    pass


class InvalidOutputFormatError(ConfigError):
    pass


class InvalidScaleError(ConfigError):
    pass


class InvalidStationError(ConfigError):
    pass


class DecodeError(AQIError, ValueError):
    """Response body is not JSON or does not match the modeled schema."""

    def __init__(self, message: str, *, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)


class UpstreamError(AQIError):
    """The API answered with an envelope whose status is not "ok"."""

    def __init__(self, status: str, message: str):
        self.status = status
        self.upstream_message = message
        super().__init__(f"upstream reported failure (status={status}): {message}")
