"""
WAQI command-line client (station search + station feed).

Modules:
- config: output format / scale enums, token and env resolution
- errors: error taxonomy (config, decode, upstream)
- models: typed response records + strict decoder
- bands: AQI value -> color band mapping
- client: requests-based HTTP transport
- render: output-mode dispatch (human, json, url, debug)
- cli: Typer application (`aqi search`, `aqi info`)
"""

from .bands import AQIBand, aqi_band, aqi_color
from .client import WAQIClient
from .config import AQIClientConfig, OutputFormat, Scale
from .models import ResponseEnvelope, StationDetail, StationSummary

__all__ = [
    "AQIBand",
    "aqi_band",
    "aqi_color",
    "WAQIClient",
    "AQIClientConfig",
    "OutputFormat",
    "Scale",
    "ResponseEnvelope",
    "StationDetail",
    "StationSummary",
]
