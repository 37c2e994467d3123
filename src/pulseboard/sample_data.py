"""
Seed records for demo mode.

Nine observations across /home, /product and /contact on 2023-10-06..08,
including two spikes above 3000 requests (/home 3433 and /product 3198).
Records use the producer wire shape: time, requests, special.
"""

from typing import Any

from pulseboard.models import Event, parse_event
from pulseboard.store import EventStore

SAMPLE_RECORDS: tuple[dict[str, Any], ...] = (
    {"endpoint": "/home", "time": "2023-10-08T02:18:17.735Z", "requests": 2364, "special": True},
    {"endpoint": "/home", "time": "2023-10-07T02:23:17.735Z", "requests": 1132},
    {"endpoint": "/home", "time": "2023-10-06T02:03:17.735Z", "requests": 3433, "special": True},
    {"endpoint": "/product", "time": "2023-10-07T02:13:17.735Z", "requests": 1563},
    {"endpoint": "/product", "time": "2023-10-06T02:12:17.735Z", "requests": 1563},
    {"endpoint": "/contact", "time": "2023-10-07T02:13:17.735Z", "requests": 2298, "special": True},
    {"endpoint": "/product", "time": "2023-10-08T02:17:17.735Z", "requests": 3198, "special": True},
    {"endpoint": "/contact", "time": "2023-10-08T02:13:17.735Z", "requests": 1950, "special": True},
    {"endpoint": "/contact", "time": "2023-10-06T02:01:17.735Z", "requests": 2800},
)


def load_sample_events() -> list[Event]:
    return [parse_event(record) for record in SAMPLE_RECORDS]


def seed_store(store: EventStore) -> int:
    """Append the sample records to store. Returns the number appended."""
    return len(store.extend(SAMPLE_RECORDS))
