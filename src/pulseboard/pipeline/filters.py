"""Filter engine: reduce the event log to the events matching the criteria."""

from collections.abc import Iterable

from pulseboard.models import Event, FilterCriteria


def _matches(event: Event, criteria: FilterCriteria) -> bool:
    if criteria.start_time is not None and event.timestamp < criteria.start_time:
        return False
    if criteria.end_time is not None and event.timestamp > criteria.end_time:
        return False
    if event.count < criteria.min_count:
        return False
    if criteria.endpoints and event.endpoint not in criteria.endpoints:
        return False
    return True


def filter_events(events: Iterable[Event], criteria: FilterCriteria) -> list[Event]:
    """
    Return the order-preserving subsequence of events matching criteria.

    Time bounds are inclusive and an absent bound is unbounded. An inverted
    range yields an empty result.
    """
    return [event for event in events if _matches(event, criteria)]
