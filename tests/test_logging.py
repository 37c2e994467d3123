from __future__ import annotations

import json
import logging
import sys

import pytest

from pulseboard.logging import JSONFormatter, event_extra
from pulseboard.store import EventStore
from tests._fixtures.events import make_event, utc_dt


def _record(msg: str, exc_info=None) -> logging.LogRecord:  # type: ignore[no-untyped-def]
    return logging.LogRecord(
        name="pulseboard.store",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


def test_json_formatter_emits_one_object_per_record() -> None:
    payload = json.loads(JSONFormatter().format(_record("Rejected event")))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "pulseboard.store"
    assert payload["message"] == "Rejected event"
    assert payload["timestamp"].endswith("+00:00")
    assert "error" not in payload


def test_json_formatter_includes_exception_details() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record("Listener failed", exc_info=sys.exc_info())

    payload = json.loads(JSONFormatter().format(record))

    assert payload["error"]["type"] == "ValueError"
    assert payload["error"]["message"] == "boom"
    assert "Traceback" in payload["error"]["stacktrace"]


def test_json_formatter_groups_event_extras() -> None:
    event = make_event("/home", at=utc_dt(2023, 10, 8, 2, 18, 17, 735), count=2364, flagged=True)
    record = _record("Appended event")
    for name, value in event_extra(event, store_size=4).items():
        setattr(record, name, value)

    payload = json.loads(JSONFormatter().format(record))

    assert payload["event"] == {
        "endpoint": "/home",
        "event_time": "2023-10-08T02:18:17.735Z",
        "count": 2364,
        "flagged": True,
        "store_size": 4,
    }


def test_store_append_logs_event_extras(caplog: pytest.LogCaptureFixture) -> None:
    store = EventStore()
    with caplog.at_level(logging.DEBUG, logger="pulseboard.store"):
        store.append(make_event("/contact", count=12))

    (record,) = [r for r in caplog.records if r.name == "pulseboard.store"]
    assert record.endpoint == "/contact"
    assert record.count == 12
    assert record.store_size == 1
