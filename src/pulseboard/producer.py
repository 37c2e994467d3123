"""Periodic synthetic event producer for demo mode.

Appends one event per tick to an EventStore. The store does not care who
calls append, so a real producer (HTTP ingestion, a log tailer, a thread)
can replace this without touching the pipeline.
"""

import asyncio
import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime

from pulseboard.config import Settings
from pulseboard.models import Event
from pulseboard.store import EventStore

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SyntheticProducer:
    """Appends a random request-count event for one endpoint on an interval."""

    def __init__(
        self,
        store: EventStore,
        *,
        interval_seconds: float = 5.0,
        endpoint: str = "/home",
        max_count: int = 3000,
        flag_rate: float = 0.2,
        seed: int | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._interval_seconds = max(0.0, interval_seconds)
        self._endpoint = endpoint
        self._max_count = max(1, max_count)
        self._flag_rate = min(1.0, max(0.0, flag_rate))
        self._random = random.Random(seed)
        self._clock = clock
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self.produced = 0

    @classmethod
    def from_settings(cls, store: EventStore, settings: Settings) -> "SyntheticProducer":
        return cls(
            store,
            interval_seconds=settings.producer_interval_seconds,
            endpoint=settings.producer_endpoint,
            max_count=settings.producer_max_count,
            flag_rate=settings.producer_flag_rate,
            seed=settings.producer_seed,
        )

    @property
    def running(self) -> bool:
        return self._task is not None

    def produce_once(self) -> Event:
        """Generate and append a single event."""
        event = self._store.append(
            Event(
                endpoint=self._endpoint,
                timestamp=self._clock(),
                count=self._random.randrange(self._max_count),
                flagged=self._random.random() < self._flag_rate,
            )
        )
        self.produced += 1
        return event

    async def start(self) -> None:
        """Start the producer background task."""
        if self._task is not None:
            return
        self._stop_event.clear()
        self._task = asyncio.create_task(self._loop())
        logger.info(
            "Synthetic producer started (endpoint=%s, interval=%.1fs, flag_rate=%.2f)",
            self._endpoint,
            self._interval_seconds,
            self._flag_rate,
        )

    async def stop(self) -> None:
        """Stop the producer background task."""
        if self._task is None:
            return
        self._stop_event.set()
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        finally:
            self._task = None
        logger.info("Synthetic producer stopped after %s events", self.produced)

    async def _loop(self) -> None:
        """Append on interval until stopped. The first event lands after one interval."""
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=self._interval_seconds,
                )
            except TimeoutError:
                pass
            else:
                break

            try:
                self.produce_once()
            except ValueError as exc:
                logger.warning("Synthetic producer tick rejected: %s", exc)
