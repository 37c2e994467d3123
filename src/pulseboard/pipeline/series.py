"""Convert endpoint groups into chart-ready series."""

from collections.abc import Mapping

from pulseboard.models import ChartSeries
from pulseboard.pipeline.grouping import SeriesGroup


def build_series(
    groups: Mapping[str, SeriesGroup], *, sort_points: bool = False
) -> list[ChartSeries]:
    """
    Build one series per group, in group iteration order.

    Points keep page order unless sort_points is set, in which case each
    series is sorted by time (stable for equal timestamps). Renderers that
    join points in array order need sort_points when the log is not already
    time-ordered.
    """
    series: list[ChartSeries] = []
    for group in groups.values():
        points = list(group.points)
        if sort_points:
            points.sort(key=lambda point: point.time)
        series.append(ChartSeries(label=group.label, points=points, color=group.color))
    return series
