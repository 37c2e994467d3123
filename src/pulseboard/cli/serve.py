"""Serve command: run the HTTP API."""

import typer
import uvicorn

from pulseboard.api import create_app
from pulseboard.config import get_settings
from pulseboard.logging import configure_logging


def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Bind port"),
    no_producer: bool = typer.Option(
        False, "--no-producer", help="Do not run the synthetic producer"
    ),
) -> None:
    """Serve series, CSV export and event ingestion over HTTP."""
    settings = get_settings()
    if no_producer:
        settings = settings.model_copy(update={"producer_enabled": False})

    configure_logging(log_format=settings.log_format, debug=settings.debug)
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )
