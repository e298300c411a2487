# file: src/waqi/render.py
"""
Output-mode dispatch.

One render call per run, one branch per OutputFormat:
- HUMAN: rich text, AQI value colored by band
- JSON:  envelope ``data`` as plain JSON text
- URL:   station URLs, one per line (search only; no-op for info)
- DEBUG: pretty dump of the decoded envelope
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from rich.console import Console
from rich.pretty import Pretty
from rich.table import Table
from rich.text import Text

from .bands import aqi_band
from .config import OutputFormat, Scale
from .models import ResponseEnvelope, StationDetail, StationSummary

TEMPERATURE_KEY = "t"


def _line(console: Console, text: Text | str = "") -> None:
    console.print(text, soft_wrap=True, highlight=False)


def _plain(console: Console, text: str) -> None:
    # no markup, no wrapping: safe to pipe
    console.out(text, highlight=False)


def _summary_aqi(summary: StationSummary) -> Text:
    value = summary.aqi_value()
    if value is None:
        return Text(summary.aqi)
    return Text(str(value), style=aqi_band(value).style)


def _render_json(envelope: ResponseEnvelope[Any], console: Console) -> None:
    _plain(console, json.dumps(envelope.data, indent=2, ensure_ascii=False))


def _render_debug(envelope: ResponseEnvelope[Any], console: Console) -> None:
    console.print(Pretty(envelope, expand_all=True))


# =============================================================================
# SEARCH
# =============================================================================

def render_search(
    envelope: ResponseEnvelope[Any],
    fmt: OutputFormat,
    console: Console,
) -> None:
    """Render a /search/ envelope (typed, except in JSON mode)."""
    if fmt is OutputFormat.JSON:
        _render_json(envelope, console)
    elif fmt is OutputFormat.URL:
        for summary in envelope.data:
            _plain(console, summary.station.url)
    elif fmt is OutputFormat.DEBUG:
        _render_debug(envelope, console)
    else:
        _render_search_human(envelope.data, console)


def _render_search_human(results: Sequence[StationSummary], console: Console) -> None:
    if not results:
        _line(console, "no stations found")
        return

    for i, summary in enumerate(results):
        if i:
            _line(console)
        _line(console, Text(summary.station.name, style="bold"))
        _line(console, Text(summary.station.url))
        _line(console, Text.assemble("aqi: ", _summary_aqi(summary)))


# =============================================================================
# FEED
# =============================================================================

def render_feed(
    envelope: ResponseEnvelope[Any],
    fmt: OutputFormat,
    console: Console,
    *,
    scale: Scale = Scale.FAHRENHEIT,
    details: bool = False,
) -> None:
    """Render a /feed/<station>/ envelope. URL mode prints nothing for a feed."""
    if fmt is OutputFormat.JSON:
        _render_json(envelope, console)
    elif fmt is OutputFormat.URL:
        return
    elif fmt is OutputFormat.DEBUG:
        _render_debug(envelope, console)
    else:
        _render_feed_human(envelope.data, console, scale=scale, details=details)


def _render_feed_human(
    detail: StationDetail,
    console: Console,
    *,
    scale: Scale,
    details: bool,
) -> None:
    band = aqi_band(detail.aqi)
    _line(console, Text(detail.city.name, style="bold"))
    _line(console, Text.assemble("aqi: ", (str(detail.aqi), band.style)))

    if not details:
        return

    _line(console, Text(f"category: {band.label}"))
    _line(console, Text(f"dominant pollutant: {detail.dominant_pollutant}"))

    if detail.individual_aqi:
        console.print(_readings_table(detail, scale))

    if detail.forecast.daily is not None:
        console.print(_forecast_table(detail))

    for attribution in detail.attributions:
        _line(console, Text(f"source: {attribution.name} ({attribution.url})", style="dim"))
    _line(console, Text(f"last sync: {detail.debug.sync}", style="dim"))


def _readings_table(detail: StationDetail, scale: Scale) -> Table:
    table = Table(title="Current readings")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green", justify="right")

    for key in sorted(detail.individual_aqi):
        value = detail.reading(key)
        if value is None:
            continue
        if key == TEMPERATURE_KEY:
            table.add_row(key, f"{scale.convert(value):.1f}{scale.symbol}")
        else:
            table.add_row(key, f"{value:g}")
    return table


def _forecast_table(detail: StationDetail) -> Table:
    table = Table(title="Daily forecast")
    table.add_column("Day", style="cyan")
    table.add_column("Pollutant")
    table.add_column("Min", justify="right")
    table.add_column("Avg", justify="right")
    table.add_column("Max", justify="right")

    for pollutant, stats in detail.forecast.daily.series().items():
        for row in stats:
            table.add_row(row.day, pollutant, str(row.min), str(row.avg), str(row.max))
    return table
