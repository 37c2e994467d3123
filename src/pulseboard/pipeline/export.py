"""CSV export of the filtered (unpaginated) event set.

Fields are joined with plain commas and no quoting, so an endpoint name that
itself contains a comma produces an ambiguous row.
"""

from collections.abc import Iterable

from pulseboard.models import Event, format_instant

CSV_HEADER = ("Endpoint", "Time", "Requests")
CSV_MEDIA_TYPE = "application/octet-stream"


def to_csv(filtered: Iterable[Event]) -> str:
    rows = [",".join(CSV_HEADER)]
    rows.extend(
        ",".join((event.endpoint, format_instant(event.timestamp), str(event.count)))
        for event in filtered
    )
    return "\n".join(rows)


def to_csv_bytes(filtered: Iterable[Event]) -> bytes:
    """Encode the CSV export as the UTF-8 download payload."""
    return to_csv(filtered).encode("utf-8")
