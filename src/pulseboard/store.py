"""Append-only in-memory event log.

The store is the one piece of shared mutable state: a producer appends from
any scheduling context (thread, asyncio task, request handler) while pipeline
runs read it. A single lock guards the append/snapshot boundary, and every
pipeline run works on an immutable snapshot so an append landing mid-run can
never leave it half old, half new.

The log grows for the life of the process. There is no eviction.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pulseboard.logging import event_extra
from pulseboard.models import Event, parse_event

logger = logging.getLogger(__name__)

EventListener = Callable[[Event], None]


class EventStore:
    """Thread-safe append-only sequence of request-count events."""

    def __init__(self, events: Iterable[Event | Mapping[str, Any]] = ()) -> None:
        self._lock = threading.Lock()
        self._events: list[Event] = [parse_event(item) for item in events]
        self._listeners: list[EventListener] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def append(self, event: Event | Mapping[str, Any]) -> Event:
        """Validate and append one event. Raises InvalidEventError on bad input."""
        try:
            parsed = parse_event(event)
        except ValueError as exc:
            logger.warning("Rejected event: %s", exc)
            raise
        with self._lock:
            self._events.append(parsed)
            size = len(self._events)
        logger.debug(
            "Appended event for %s (size=%s)",
            parsed.endpoint,
            size,
            extra=event_extra(parsed, store_size=size),
        )
        self._notify(parsed)
        return parsed

    def extend(self, events: Iterable[Event | Mapping[str, Any]]) -> list[Event]:
        """Append a batch. Any invalid record rejects the whole batch."""
        try:
            parsed = [parse_event(item) for item in events]
        except ValueError as exc:
            logger.warning("Rejected event batch: %s", exc)
            raise
        with self._lock:
            self._events.extend(parsed)
        for event in parsed:
            self._notify(event)
        return parsed

    def snapshot(self) -> tuple[Event, ...]:
        """Return an immutable copy of the log in insertion order."""
        with self._lock:
            return tuple(self._events)

    def add_listener(self, listener: EventListener) -> Callable[[], None]:
        """Register a callback run after each append. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def _remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _remove

    def _notify(self, event: Event) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Event listener %r failed", listener)
