# file: src/waqi/config.py
"""
Configuration for the WAQI client: output/scale selectors, token lookup, .env loading.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import InvalidOutputFormatError, InvalidScaleError, MissingTokenError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.waqi.info"

# First match wins; API_TOKEN is kept for older shell setups.
TOKEN_ENV_VARS = ("WAQI_TOKEN", "API_TOKEN")
BASE_URL_ENV_VAR = "WAQI_BASE_URL"
TIMEOUT_ENV_VAR = "WAQI_TIMEOUT"


class OutputFormat(str, Enum):
    HUMAN = "human"
    JSON = "json"
    URL = "url"
    DEBUG = "debug"

    @classmethod
    def parse(cls, raw: str) -> "OutputFormat":
        try:
            return _OUTPUT_SYNONYMS[raw]
        except KeyError:
            raise InvalidOutputFormatError(
                f"invalid output format: {raw!r} (expected one of: h, human, j, json, u, url, d, debug)"
            ) from None


class Scale(str, Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @classmethod
    def parse(cls, raw: str) -> "Scale":
        try:
            return _SCALE_SYNONYMS[raw]
        except KeyError:
            raise InvalidScaleError(
                f"invalid scale: {raw!r} (expected one of: c, celsius, f, fahrenheit)"
            ) from None

    @property
    def symbol(self) -> str:
        return "°C" if self is Scale.CELSIUS else "°F"

    def convert(self, celsius: float) -> float:
        """Convert a Celsius reading (the unit WAQI reports) to this scale."""
        if self is Scale.CELSIUS:
            return celsius
        return celsius * 9.0 / 5.0 + 32.0


# Case-sensitive on purpose: "H" or "JSON" are rejected.
_OUTPUT_SYNONYMS = {
    "h": OutputFormat.HUMAN,
    "human": OutputFormat.HUMAN,
    "j": OutputFormat.JSON,
    "json": OutputFormat.JSON,
    "u": OutputFormat.URL,
    "url": OutputFormat.URL,
    "d": OutputFormat.DEBUG,
    "debug": OutputFormat.DEBUG,
}

_SCALE_SYNONYMS = {
    "c": Scale.CELSIUS,
    "celsius": Scale.CELSIUS,
    "f": Scale.FAHRENHEIT,
    "fahrenheit": Scale.FAHRENHEIT,
}


@dataclass(frozen=True)
class AQIClientConfig:
    token: str
    output: OutputFormat = OutputFormat.HUMAN
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None  # None -> requests default (no timeout)

    def masked_token(self) -> str:
        if len(self.token) >= 8:
            return self.token[:4] + "..." + self.token[-4:]
        return "***"


def load_env(*, debug: bool = False) -> Optional[str]:
    """
    Load the nearest .env (walking up from CWD) without overriding real env vars.
    Returns the path loaded (or None).
    """
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)
        if debug:
            logger.info("[waqi] loaded .env: %s", dotenv_path)
        return dotenv_path

    if debug:
        logger.info("[waqi] no .env found to load")
    return None


def resolve_token(flag: Optional[str], env: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if env is None else env

    if flag and flag.strip():
        return flag.strip()

    for name in TOKEN_ENV_VARS:
        value = env.get(name, "")
        if value.strip():
            return value.strip()

    raise MissingTokenError(
        "API token required but not found.\n"
        "- Pass -t/--token <token>, OR\n"
        f"- Set one of {', '.join(TOKEN_ENV_VARS)} (a .env file in the working directory also works)"
    )


def _env_timeout(env: Mapping[str, str]) -> Optional[float]:
    raw = env.get(TIMEOUT_ENV_VAR)
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning("[waqi] ignoring unparsable %s=%r", TIMEOUT_ENV_VAR, raw)
        return None
    return value if value > 0 else None


def resolve_config(
    token: Optional[str],
    output: str = "human",
    env: Optional[Mapping[str, str]] = None,
) -> AQIClientConfig:
    """
    Build the validated client config from CLI values + environment.

    Raises a ConfigError subclass before any network call is made.
    """
    env = os.environ if env is None else env

    fmt = OutputFormat.parse(output)
    resolved_token = resolve_token(token, env)
    base_url = (env.get(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL).rstrip("/")

    return AQIClientConfig(
        token=resolved_token,
        output=fmt,
        base_url=base_url,
        timeout=_env_timeout(env),
    )
