"""Pulseboard - live per-endpoint request count dashboard pipeline."""

__version__ = "0.1.0"

from pulseboard.dashboard import Dashboard, DashboardView
from pulseboard.errors import InvalidCriteriaError, InvalidEventError, PulseboardError
from pulseboard.models import (
    ChartData,
    ChartSeries,
    ColorScheme,
    Event,
    FilterCriteria,
    PageOverflowPolicy,
    PageWindow,
    SeriesPoint,
)
from pulseboard.store import EventStore

__all__ = [
    "__version__",
    "Dashboard",
    "DashboardView",
    "InvalidCriteriaError",
    "InvalidEventError",
    "PulseboardError",
    "ChartData",
    "ChartSeries",
    "ColorScheme",
    "Event",
    "FilterCriteria",
    "PageOverflowPolicy",
    "PageWindow",
    "SeriesPoint",
    "EventStore",
]
