"""Export command: write the filtered event set as CSV."""

import json
from pathlib import Path

import typer

from pulseboard.cli._console import error_panel, success
from pulseboard.config import get_settings
from pulseboard.criteria import parse_criteria
from pulseboard.errors import InvalidCriteriaError, InvalidEventError
from pulseboard.pipeline import filter_events, to_csv_bytes
from pulseboard.sample_data import seed_store
from pulseboard.store import EventStore


def _load_store(input_path: Path | None) -> EventStore:
    store = EventStore()
    if input_path is None:
        seed_store(store)
        return store

    records = json.loads(input_path.read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise InvalidEventError(f"{input_path} must contain a JSON array of events")
    store.extend(records)
    return store


def export(
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Destination file (defaults to PULSEBOARD_EXPORT_FILENAME)",
    ),
    input_path: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="JSON array of events to export instead of the sample data",
    ),
    start: str | None = typer.Option(None, "--start", help="Inclusive lower time bound"),
    end: str | None = typer.Option(None, "--end", help="Inclusive upper time bound"),
    endpoints: list[str] = typer.Option(
        None,
        "--endpoint",
        "-e",
        help="Endpoint to include (repeatable); omit for all endpoints",
    ),
    min_count: str = typer.Option("0", "--min-count", help="Inclusive minimum request count"),
) -> None:
    """
    Export filtered events to CSV.

    Examples:
        pulseboard export -o requests.csv
        pulseboard export -e /home --min-count 2000
        pulseboard export -i events.json --start 2023-10-07T00:00:00Z
    """
    settings = get_settings()
    destination = output or Path(settings.export_filename)

    try:
        criteria = parse_criteria(
            start=start, end=end, endpoints=endpoints, min_count=min_count
        )
        store = _load_store(input_path)
    except InvalidCriteriaError as e:
        error_panel(str(e), title="Invalid filter")
        raise typer.Exit(1)
    except (InvalidEventError, OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        error_panel(str(e), title="Could not load events")
        raise typer.Exit(1)

    filtered = filter_events(store.snapshot(), criteria)
    destination.write_bytes(to_csv_bytes(filtered))
    success(f"Wrote {len(filtered)} events to {destination}")
