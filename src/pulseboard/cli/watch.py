"""Watch command: live terminal view of the dashboard."""

import asyncio
import time

import typer
from rich.live import Live

from pulseboard.cli._console import console, error_panel, nl, setup_logging
from pulseboard.cli._display import build_page_table
from pulseboard.config import get_settings
from pulseboard.dashboard import Dashboard
from pulseboard.errors import InvalidCriteriaError
from pulseboard.producer import SyntheticProducer
from pulseboard.sample_data import seed_store
from pulseboard.store import EventStore


async def _watch(
    dashboard: Dashboard,
    producer: SyntheticProducer,
    *,
    refresh_seconds: float,
    duration_seconds: float | None,
) -> None:
    deadline = None if duration_seconds is None else time.monotonic() + duration_seconds
    await producer.start()
    try:
        with Live(
            build_page_table(dashboard.render()),
            console=console,
            refresh_per_second=4,
        ) as live:
            while deadline is None or time.monotonic() < deadline:
                await asyncio.sleep(refresh_seconds)
                live.update(build_page_table(dashboard.render()))
    finally:
        await producer.stop()


def watch(
    endpoints: list[str] = typer.Option(
        None,
        "--endpoint",
        "-e",
        help="Endpoint to include (repeatable); omit for all endpoints",
    ),
    min_count: str = typer.Option("0", "--min-count", help="Inclusive minimum request count"),
    page: int = typer.Option(1, "--page", "-p", help="1-based page number"),
    page_size: int | None = typer.Option(None, "--page-size", help="Events per page"),
    interval: float | None = typer.Option(
        None, "--interval", help="Seconds between synthetic events"
    ),
    refresh: float = typer.Option(1.0, "--refresh", help="Seconds between redraws"),
    duration: float | None = typer.Option(
        None, "--duration", help="Stop after this many seconds (default: until Ctrl+C)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """
    Render the current page live while the synthetic producer appends events.

    Examples:
        pulseboard watch
        pulseboard watch -e /home --min-count 1000 --interval 1
    """
    setup_logging(verbose=verbose)
    settings = get_settings()
    if page_size is not None:
        settings = settings.model_copy(update={"page_size": max(1, page_size)})
    if interval is not None:
        settings = settings.model_copy(update={"producer_interval_seconds": interval})

    store = EventStore()
    seed_store(store)
    dashboard = Dashboard.from_settings(store, settings)
    try:
        dashboard.set_min_count(min_count)
    except InvalidCriteriaError as e:
        error_panel(str(e), title="Invalid filter")
        raise typer.Exit(1)
    dashboard.set_endpoints(endpoints or [])
    for _ in range(max(1, page) - 1):
        dashboard.next_page()

    producer = SyntheticProducer.from_settings(store, settings)
    try:
        asyncio.run(
            _watch(
                dashboard,
                producer,
                refresh_seconds=max(0.05, refresh),
                duration_seconds=duration,
            )
        )
    except KeyboardInterrupt:
        pass  # Clean exit on Ctrl+C
    finally:
        nl()
