"""Log output for the pulseboard process.

Store records carry the event they concern as ``extra=`` fields
(see ``event_extra``). The JSON format lifts those fields into an ``event``
object so ingestion can be followed per endpoint in a log pipeline.
"""

import json
import logging
from datetime import UTC, datetime

from pulseboard.models import Event, format_instant

EVENT_FIELDS = ("endpoint", "event_time", "count", "flagged", "store_size")

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def event_extra(event: Event, *, store_size: int | None = None) -> dict[str, object]:
    """Record extras describing one stored event."""
    extra: dict[str, object] = {
        "endpoint": event.endpoint,
        "event_time": format_instant(event.timestamp),
        "count": event.count,
        "flagged": event.flagged,
    }
    if store_size is not None:
        extra["store_size"] = store_size
    return extra


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with event extras grouped under ``event``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        event = {
            name: getattr(record, name) for name in EVENT_FIELDS if hasattr(record, name)
        }
        if event:
            payload["event"] = event
        if record.exc_info and record.exc_info[1]:
            payload["error"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": self.formatException(record.exc_info),
            }
        return json.dumps(payload, default=str)


def configure_logging(*, log_format: str = "text", debug: bool = False) -> None:
    """Install a single stream handler on the root logger."""
    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
