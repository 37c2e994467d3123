"""Live dashboard view state.

The dashboard owns the transient view state (filter criteria, color scheme,
page window) and drives the pipeline over store snapshots. Each update touches
one field. A rejected criteria update raises InvalidCriteriaError and keeps the
previous criteria.

`filtering` is the explicit in-progress flag. It is set here, around the
pipeline call, and never by the filter stage itself.

Changing the filters does not reset the page number. Callers read
`DashboardView.total_filtered` / `page_count` and call `reset_page()` when the
current page has fallen out of range.
"""

import logging
from collections.abc import Iterable

from pydantic import BaseModel

from pulseboard.config import Settings, get_settings
from pulseboard.criteria import coerce_min_count, normalize_endpoints, parse_instant
from pulseboard.errors import InvalidCriteriaError
from pulseboard.models import (
    ChartData,
    Classification,
    ColorScheme,
    FilterCriteria,
    PageOverflowPolicy,
    PageWindow,
)
from pulseboard.pipeline import (
    PipelineResult,
    filter_events,
    page_count,
    resolve_page_number,
    run_pipeline,
    to_csv_bytes,
)
from pulseboard.store import EventStore

logger = logging.getLogger(__name__)


class DashboardView(BaseModel):
    """Rendered dashboard state handed to the chart renderer."""

    chart: ChartData
    page_number: int
    page_size: int
    page_count: int
    total_filtered: int
    total_events: int

    @classmethod
    def from_result(cls, result: PipelineResult, total_events: int) -> "DashboardView":
        return cls(
            chart=ChartData(datasets=result.series),
            page_number=result.page_number,
            page_size=result.page_size,
            page_count=result.page_count,
            total_filtered=result.total_filtered,
            total_events=total_events,
        )


class Dashboard:
    """Caller-owned view state over an EventStore."""

    def __init__(
        self,
        store: EventStore,
        *,
        page_size: int = 10,
        color_scheme: ColorScheme | None = None,
        overflow: PageOverflowPolicy = PageOverflowPolicy.EMPTY,
        sort_points: bool = False,
    ) -> None:
        self._store = store
        self._criteria = FilterCriteria()
        self._colors = color_scheme or ColorScheme()
        self._window = PageWindow(page_size=page_size)
        self._overflow = overflow
        self._sort_points = sort_points
        self._filtering = False

    @classmethod
    def from_settings(
        cls, store: EventStore, settings: Settings | None = None
    ) -> "Dashboard":
        settings = settings or get_settings()
        return cls(
            store,
            page_size=settings.page_size,
            color_scheme=settings.color_scheme,
            overflow=settings.page_overflow,
            sort_points=settings.sort_series_points,
        )

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def color_scheme(self) -> ColorScheme:
        return self._colors

    @property
    def window(self) -> PageWindow:
        return self._window

    @property
    def filtering(self) -> bool:
        return self._filtering

    # -------------------------------------------------------------------------
    # Criteria updates
    # -------------------------------------------------------------------------

    def _update_criteria(self, **changes: object) -> FilterCriteria:
        self._criteria = self._criteria.model_copy(update=changes)
        logger.debug("Filter criteria updated: %s", changes)
        return self._criteria

    def _reject(self, exc: InvalidCriteriaError) -> None:
        logger.warning("Rejected criteria update, keeping previous: %s", exc)

    def set_start_time(self, value: object) -> FilterCriteria:
        try:
            start_time = parse_instant(value)
        except InvalidCriteriaError as exc:
            self._reject(exc)
            raise
        return self._update_criteria(start_time=start_time)

    def set_end_time(self, value: object) -> FilterCriteria:
        try:
            end_time = parse_instant(value)
        except InvalidCriteriaError as exc:
            self._reject(exc)
            raise
        return self._update_criteria(end_time=end_time)

    def set_min_count(self, value: object) -> FilterCriteria:
        try:
            min_count = coerce_min_count(value)
        except InvalidCriteriaError as exc:
            self._reject(exc)
            raise
        return self._update_criteria(min_count=min_count)

    def set_endpoints(self, endpoints: Iterable[str] | str) -> FilterCriteria:
        return self._update_criteria(endpoints=normalize_endpoints(endpoints))

    def set_endpoint_selected(self, endpoint: str, selected: bool) -> FilterCriteria:
        """Toggle one endpoint checkbox. Deselecting every endpoint means all endpoints."""
        if selected:
            endpoints = self._criteria.endpoints | {endpoint}
        else:
            endpoints = self._criteria.endpoints - {endpoint}
        return self._update_criteria(endpoints=frozenset(endpoints))

    # -------------------------------------------------------------------------
    # Colors
    # -------------------------------------------------------------------------

    def set_color(self, kind: Classification | str, color: str) -> ColorScheme:
        """Change one classification color. Applies from the next render on."""
        classification = Classification("flagged" if kind == "special" else kind)
        if not color.strip():
            raise ValueError("color must not be blank")
        self._colors = self._colors.model_copy(update={classification.value: color})
        return self._colors

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def _total_filtered(self) -> int:
        return len(filter_events(self._store.snapshot(), self._criteria))

    def next_page(self) -> PageWindow:
        window = self._window.next()
        if self._overflow == PageOverflowPolicy.CLAMP:
            page_number = resolve_page_number(
                window.page_number,
                self._total_filtered(),
                window.page_size,
                self._overflow,
            )
            window = window.with_page(page_number)
        self._window = window
        return self._window

    def previous_page(self) -> PageWindow:
        self._window = self._window.previous()
        return self._window

    def reset_page(self) -> PageWindow:
        self._window = self._window.with_page(1)
        return self._window

    def is_page_out_of_range(self) -> bool:
        total = self._total_filtered()
        return self._window.page_number > max(
            1, page_count(total, self._window.page_size)
        )

    # -------------------------------------------------------------------------
    # Outputs
    # -------------------------------------------------------------------------

    def render(self) -> DashboardView:
        """Run the pipeline on a fresh snapshot and return the visible page."""
        events = self._store.snapshot()
        self._filtering = True
        try:
            result = run_pipeline(
                events,
                self._criteria,
                self._window,
                self._colors,
                sort_points=self._sort_points,
                overflow=self._overflow,
            )
        finally:
            self._filtering = False

        return DashboardView.from_result(result, total_events=len(events))

    def export_csv(self) -> bytes:
        """CSV payload for the whole filtered set, independent of the current page."""
        filtered = filter_events(self._store.snapshot(), self._criteria)
        logger.info("Exporting %s filtered events", len(filtered))
        return to_csv_bytes(filtered)
