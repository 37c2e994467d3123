"""Group a page of events by endpoint and classify each bucket's color."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from pulseboard.models import ColorScheme, Event, SeriesPoint


@dataclass
class SeriesGroup:
    """Per-endpoint bucket accumulated while walking a page."""

    label: str
    color: str
    points: list[SeriesPoint] = field(default_factory=list)


def group_events(
    page: Iterable[Event], color_scheme: ColorScheme
) -> dict[str, SeriesGroup]:
    """
    Partition a page by endpoint, in page order.

    The bucket color comes from the first event seen for its endpoint. Later
    events on the same page add points but never recolor the bucket, so a page
    that mixes flagged and unflagged events for one endpoint is drawn in the
    color of whichever came first.
    """
    groups: dict[str, SeriesGroup] = {}
    for event in page:
        group = groups.get(event.endpoint)
        if group is None:
            group = SeriesGroup(
                label=event.endpoint,
                color=color_scheme.color_for(event.classification),
            )
            groups[event.endpoint] = group
        group.points.append(SeriesPoint(time=event.timestamp, count=event.count))
    return groups
