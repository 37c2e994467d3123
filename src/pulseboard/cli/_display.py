"""Rich rendering of a dashboard view for the terminal."""

from rich.box import ROUNDED
from rich.table import Table
from rich.text import Text

from pulseboard.dashboard import DashboardView
from pulseboard.models import ChartSeries, format_instant


def _sparkline(series: ChartSeries, width: int = 12) -> str:
    blocks = "▁▂▃▄▅▆▇█"
    counts = [point.count for point in series.points][-width:]
    if not counts:
        return ""
    top = max(counts) or 1
    return "".join(blocks[min(len(blocks) - 1, count * len(blocks) // (top + 1))] for count in counts)


def build_page_table(view: DashboardView) -> Table:
    """One row per series on the visible page."""
    table = Table(
        title=(
            f"Page {view.page_number}/{max(1, view.page_count)} · "
            f"{view.total_filtered} of {view.total_events} events"
        ),
        box=ROUNDED,
        border_style="dim",
        expand=False,
    )
    table.add_column("Endpoint", style="bold")
    table.add_column("Points", justify="right")
    table.add_column("Requests", justify="right")
    table.add_column("Latest")
    table.add_column("Trend")

    for series in view.chart.datasets:
        latest = series.points[-1] if series.points else None
        table.add_row(
            Text(series.label, style=series.color),
            str(len(series.points)),
            str(sum(point.count for point in series.points)),
            format_instant(latest.time) if latest else "-",
            Text(_sparkline(series), style=series.color),
        )

    if not view.chart.datasets:
        table.add_row(Text("no events on this page", style="dim"), "", "", "", "")
    return table
