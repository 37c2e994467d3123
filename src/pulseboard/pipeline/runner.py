"""One synchronous filter -> paginate -> group -> build run over a snapshot."""

from collections.abc import Sequence
from dataclasses import dataclass

from pulseboard.models import (
    ChartSeries,
    ColorScheme,
    Event,
    FilterCriteria,
    PageOverflowPolicy,
    PageWindow,
)
from pulseboard.pipeline.filters import filter_events
from pulseboard.pipeline.grouping import group_events
from pulseboard.pipeline.pagination import page_count, paginate, resolve_page_number
from pulseboard.pipeline.series import build_series


@dataclass(frozen=True)
class PipelineResult:
    """Everything a single pipeline run derives from one snapshot."""

    series: list[ChartSeries]
    filtered: list[Event]
    page_events: list[Event]
    page_number: int
    page_size: int
    page_count: int

    @property
    def total_filtered(self) -> int:
        return len(self.filtered)


def run_pipeline(
    events: Sequence[Event],
    criteria: FilterCriteria,
    window: PageWindow,
    color_scheme: ColorScheme,
    *,
    sort_points: bool = False,
    overflow: PageOverflowPolicy = PageOverflowPolicy.EMPTY,
) -> PipelineResult:
    filtered = filter_events(events, criteria)
    page_number = resolve_page_number(
        window.page_number, len(filtered), window.page_size, overflow
    )
    page = paginate(filtered, page_number, window.page_size)
    groups = group_events(page, color_scheme)
    return PipelineResult(
        series=build_series(groups, sort_points=sort_points),
        filtered=filtered,
        page_events=page,
        page_number=page_number,
        page_size=window.page_size,
        page_count=page_count(len(filtered), window.page_size),
    )
