"""Pure filter / paginate / group / build / export pipeline stages."""

from pulseboard.pipeline.export import CSV_HEADER, CSV_MEDIA_TYPE, to_csv, to_csv_bytes
from pulseboard.pipeline.filters import filter_events
from pulseboard.pipeline.grouping import SeriesGroup, group_events
from pulseboard.pipeline.pagination import page_count, paginate, resolve_page_number
from pulseboard.pipeline.runner import PipelineResult, run_pipeline
from pulseboard.pipeline.series import build_series

__all__ = [
    "CSV_HEADER",
    "CSV_MEDIA_TYPE",
    "to_csv",
    "to_csv_bytes",
    "filter_events",
    "SeriesGroup",
    "group_events",
    "page_count",
    "paginate",
    "resolve_page_number",
    "PipelineResult",
    "run_pipeline",
    "build_series",
]
