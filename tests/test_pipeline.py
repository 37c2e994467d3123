from __future__ import annotations

import pytest

from pulseboard.models import (
    ColorScheme,
    Event,
    FilterCriteria,
    PageOverflowPolicy,
    PageWindow,
)
from pulseboard.pipeline import (
    build_series,
    filter_events,
    group_events,
    page_count,
    paginate,
    resolve_page_number,
    run_pipeline,
    to_csv,
    to_csv_bytes,
)
from tests._fixtures.events import make_event, utc_dt

COLORS = ColorScheme(default="blue", flagged="green")


def _is_subsequence(sub: list[Event], full: list[Event]) -> bool:
    remaining = iter(full)
    return all(any(item is candidate for candidate in remaining) for item in sub)


# =============================================================================
# Filter
# =============================================================================


def test_default_criteria_is_identity(sample_events: list[Event]) -> None:
    assert filter_events(sample_events, FilterCriteria()) == sample_events


@pytest.mark.parametrize(
    "criteria",
    [
        FilterCriteria(endpoints=frozenset({"/contact", "/product"})),
        FilterCriteria(min_count=2000),
        FilterCriteria(start_time=utc_dt(2023, 10, 7)),
        FilterCriteria(end_time=utc_dt(2023, 10, 7, 23, 59)),
        FilterCriteria(
            start_time=utc_dt(2023, 10, 7),
            end_time=utc_dt(2023, 10, 8),
            endpoints=frozenset({"/home"}),
            min_count=1000,
        ),
    ],
)
def test_filter_is_order_preserving_subsequence(
    sample_events: list[Event], criteria: FilterCriteria
) -> None:
    filtered = filter_events(sample_events, criteria)
    assert _is_subsequence(filtered, sample_events)


def test_filter_by_endpoint_scenario(sample_events: list[Event]) -> None:
    filtered = filter_events(sample_events, FilterCriteria(endpoints=frozenset({"/home"})))
    assert len(filtered) == 3
    assert {event.endpoint for event in filtered} == {"/home"}


def test_filter_by_min_count_scenario(sample_events: list[Event]) -> None:
    filtered = filter_events(sample_events, FilterCriteria(min_count=3000))
    assert [(event.endpoint, event.count) for event in filtered] == [
        ("/home", 3433),
        ("/product", 3198),
    ]


def test_time_bounds_are_inclusive() -> None:
    at = utc_dt(2023, 10, 7, 2, 13, 17, 735)
    events = [make_event(at=at)]
    criteria = FilterCriteria(start_time=at, end_time=at)
    assert filter_events(events, criteria) == events


def test_inverted_time_range_yields_empty(sample_events: list[Event]) -> None:
    criteria = FilterCriteria(start_time=utc_dt(2023, 10, 8), end_time=utc_dt(2023, 10, 6))
    assert filter_events(sample_events, criteria) == []


def test_filter_excluding_everything_is_empty_not_error(sample_events: list[Event]) -> None:
    assert filter_events(sample_events, FilterCriteria(endpoints=frozenset({"/nope"}))) == []
    assert filter_events([], FilterCriteria(min_count=5)) == []


def test_filter_is_pure(sample_events: list[Event]) -> None:
    criteria = FilterCriteria(min_count=2000)
    before = list(sample_events)
    first = filter_events(sample_events, criteria)
    second = filter_events(sample_events, criteria)
    assert first == second
    assert sample_events == before


# =============================================================================
# Paginate
# =============================================================================


@pytest.mark.parametrize("page_size", [1, 2, 4, 9, 10])
def test_pages_partition_filtered_without_gaps(
    sample_events: list[Event], page_size: int
) -> None:
    pages = [
        paginate(sample_events, number, page_size)
        for number in range(1, page_count(len(sample_events), page_size) + 1)
    ]
    assert all(len(page) <= page_size for page in pages)
    assert [event for page in pages for event in page] == sample_events


def test_page_past_the_end_is_empty(sample_events: list[Event]) -> None:
    assert paginate(sample_events, 2, 10) == []


def test_page_number_below_one_is_clamped(sample_events: list[Event]) -> None:
    assert paginate(sample_events, 0, 4) == sample_events[:4]
    assert paginate(sample_events, -3, 4) == sample_events[:4]


def test_paginate_rejects_non_positive_page_size(sample_events: list[Event]) -> None:
    with pytest.raises(ValueError):
        paginate(sample_events, 1, 0)


def test_page_count_and_overflow_policies() -> None:
    assert page_count(0, 10) == 0
    assert page_count(9, 10) == 1
    assert page_count(21, 10) == 3

    assert resolve_page_number(5, 9, 10, PageOverflowPolicy.EMPTY) == 5
    assert resolve_page_number(5, 9, 10, PageOverflowPolicy.CLAMP) == 1
    assert resolve_page_number(5, 0, 10, PageOverflowPolicy.CLAMP) == 1
    assert resolve_page_number(0, 30, 10, PageOverflowPolicy.EMPTY) == 1


# =============================================================================
# Group / build
# =============================================================================


def test_first_event_decides_series_color() -> None:
    page = [
        make_event("/a", flagged=False, count=1),
        make_event("/a", flagged=True, count=2),
    ]
    groups = group_events(page, COLORS)
    assert list(groups) == ["/a"]
    assert groups["/a"].color == "blue"
    assert [point.count for point in groups["/a"].points] == [1, 2]

    flipped = group_events(list(reversed(page)), COLORS)
    assert flipped["/a"].color == "green"


def test_grouping_is_deterministic(sample_events: list[Event]) -> None:
    first = group_events(sample_events, COLORS)
    second = group_events(sample_events, COLORS)
    assert first == second


def test_grouping_keeps_page_order_and_first_appearance(sample_events: list[Event]) -> None:
    groups = group_events(sample_events, COLORS)
    assert list(groups) == ["/home", "/product", "/contact"]
    assert groups["/home"].color == "green"
    assert groups["/product"].color == "blue"
    assert [point.count for point in groups["/product"].points] == [1563, 1563, 3198]


def test_color_scheme_is_read_at_grouping_time(sample_events: list[Event]) -> None:
    before = build_series(group_events(sample_events, COLORS))
    after = build_series(
        group_events(sample_events, ColorScheme(default="#111111", flagged="#222222"))
    )
    assert before[0].color == "green"
    assert after[0].color == "#222222"


def test_home_scenario_builds_single_series_with_three_points(
    sample_events: list[Event],
) -> None:
    filtered = filter_events(sample_events, FilterCriteria(endpoints=frozenset({"/home"})))
    series = build_series(group_events(paginate(filtered, 1, 3), COLORS))
    assert len(series) == 1
    assert series[0].label == "/home"
    assert len(series[0].points) == 3


def test_build_keeps_page_order_unless_sorting_requested(sample_events: list[Event]) -> None:
    groups = group_events(sample_events, COLORS)

    unsorted = build_series(groups)
    home_times = [point.time for point in unsorted[0].points]
    assert home_times == [
        utc_dt(2023, 10, 8, 2, 18, 17, 735),
        utc_dt(2023, 10, 7, 2, 23, 17, 735),
        utc_dt(2023, 10, 6, 2, 3, 17, 735),
    ]

    ordered = build_series(groups, sort_points=True)
    assert [point.time for point in ordered[0].points] == sorted(home_times)
    assert [point.time for point in groups["/home"].points] == home_times


def test_empty_page_builds_empty_series() -> None:
    assert build_series(group_events([], COLORS)) == []


# =============================================================================
# Export
# =============================================================================


def test_csv_has_header_and_normalized_rows(sample_events: list[Event]) -> None:
    lines = to_csv(sample_events[:2]).split("\n")
    assert lines == [
        "Endpoint,Time,Requests",
        "/home,2023-10-08T02:18:17.735Z,2364",
        "/home,2023-10-07T02:23:17.735Z,1132",
    ]


def test_csv_of_empty_set_is_header_only() -> None:
    assert to_csv([]) == "Endpoint,Time,Requests"
    assert to_csv_bytes([]) == b"Endpoint,Time,Requests"


@pytest.mark.parametrize("page_number,page_size", [(1, 2), (2, 10), (3, 1)])
def test_csv_row_count_ignores_pagination(
    sample_events: list[Event], page_number: int, page_size: int
) -> None:
    criteria = FilterCriteria(min_count=1500)
    result = run_pipeline(
        sample_events,
        criteria,
        PageWindow(page_number=page_number, page_size=page_size),
        COLORS,
    )
    rows = to_csv(result.filtered).split("\n")
    assert len(rows) == len(filter_events(sample_events, criteria)) + 1


# =============================================================================
# Full run
# =============================================================================


def test_run_pipeline_page_two_of_nine_is_empty(sample_events: list[Event]) -> None:
    result = run_pipeline(
        sample_events, FilterCriteria(), PageWindow(page_number=2, page_size=10), COLORS
    )
    assert result.page_events == []
    assert result.series == []
    assert result.total_filtered == 9
    assert result.page_count == 1
    assert result.page_number == 2


def test_run_pipeline_clamp_policy_shows_last_page(sample_events: list[Event]) -> None:
    result = run_pipeline(
        sample_events,
        FilterCriteria(),
        PageWindow(page_number=7, page_size=4),
        COLORS,
        overflow=PageOverflowPolicy.CLAMP,
    )
    assert result.page_number == 3
    assert result.page_events == sample_events[8:]
