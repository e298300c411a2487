# file: src/waqi/cli.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

import requests
import typer
from rich.console import Console
from rich.text import Text

from .client import WAQIClient
from .config import AQIClientConfig, OutputFormat, Scale, load_env, resolve_config
from .errors import AQIError
from .models import ResponseEnvelope, decode_feed, decode_search
from .render import render_feed, render_search

logging.basicConfig(level=logging.WARNING, format="%(asctime)s | %(levelname)s | %(message)s")
logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Query the World Air Quality Index (waqi.info) API.",
)
console = Console()
err_console = Console(stderr=True)


@contextmanager
def _fatal_errors() -> Iterator[None]:
    """Report any config/transport/decode/upstream failure and exit 1."""
    try:
        yield
    except AQIError as exc:
        logger.debug("[waqi] %s", type(exc).__name__, exc_info=True)
        _fail(str(exc))
    except requests.RequestException as exc:
        logger.debug("[waqi] transport failure", exc_info=True)
        _fail(f"request failed: {exc}")


def _fail(message: str) -> None:
    err_console.print(Text.assemble(("error: ", "bold red"), message), soft_wrap=True)
    raise typer.Exit(code=1)


def _resolve(ctx: typer.Context, output: Optional[str]) -> AQIClientConfig:
    state = ctx.obj or {}
    cfg = resolve_config(
        token=state.get("token"),
        output=output if output is not None else state.get("output", "human"),
    )
    logger.debug(
        "[waqi] config: token=%s output=%s base_url=%s timeout=%s",
        cfg.masked_token(),
        cfg.output.value,
        cfg.base_url,
        cfg.timeout,
    )
    return cfg


@app.callback()
def main_callback(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(
        None, "--token", "-t", help="API token (default: $WAQI_TOKEN or $API_TOKEN)."
    ),
    output: str = typer.Option(
        "human", "--output", "-o", help="Output format: human|h, json|j, url|u, debug|d."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    load_env(debug=verbose)
    ctx.obj = {"token": token, "output": output}


@app.command()
def search(
    ctx: typer.Context,
    term: List[str] = typer.Argument(..., help="Keyword(s) to search station names for."),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Overrides the global --output."),
):
    """Search stations by keyword."""
    with _fatal_errors():
        cfg = _resolve(ctx, output)
        keyword = " ".join(term)

        client = WAQIClient.from_config(cfg)
        try:
            payload = client.search(keyword)
        finally:
            client.close()

        if cfg.output is OutputFormat.JSON:
            envelope = ResponseEnvelope.untyped(payload)
        else:
            envelope = decode_search(payload)
        logger.info("[waqi] search %r -> status=%s", keyword, envelope.status)

        render_search(envelope, cfg.output, console)


@app.command()
def info(
    ctx: typer.Context,
    station: str = typer.Argument(..., help="Station id (e.g. @1451), city name, 'here' or geo:lat;lng."),
    scale: str = typer.Option(
        "fahrenheit", "--scale", "-s", help="Temperature scale: celsius|c, fahrenheit|f."
    ),
    details: bool = typer.Option(False, "--details", help="Also show readings, forecast and sources."),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Overrides the global --output."),
):
    """Show the current feed for one station."""
    with _fatal_errors():
        cfg = _resolve(ctx, output)
        temp_scale = Scale.parse(scale)

        client = WAQIClient.from_config(cfg)
        try:
            payload = client.feed(station)
        finally:
            client.close()

        if cfg.output is OutputFormat.JSON:
            envelope = ResponseEnvelope.untyped(payload)
        else:
            envelope = decode_feed(payload)
        logger.info("[waqi] feed %r -> status=%s", station, envelope.status)

        render_feed(envelope, cfg.output, console, scale=temp_scale, details=details)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
