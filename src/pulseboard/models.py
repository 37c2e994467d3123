"""Domain models for the request dashboard."""

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from pulseboard.errors import InvalidEventError

# =============================================================================
# Time helpers
# =============================================================================


def as_utc_aware(value: datetime) -> datetime:
    """Normalize a datetime to UTC-aware. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def truncate_to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def format_instant(value: datetime) -> str:
    """Render an instant as ISO-8601 UTC with milliseconds, e.g. 2023-10-08T02:18:17.735Z."""
    value = as_utc_aware(value)
    return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{value.microsecond // 1000:03d}Z"


# =============================================================================
# Common Types
# =============================================================================


class Classification(StrEnum):
    DEFAULT = "default"
    FLAGGED = "flagged"


class PageOverflowPolicy(StrEnum):
    """What happens when navigation runs past the last page."""

    EMPTY = "empty"  # unbounded next page, past-the-end pages render empty
    CLAMP = "clamp"  # next page and render stop at the last page


# =============================================================================
# Events
# =============================================================================


class Event(BaseModel):
    """One timestamped request-count observation for an endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    endpoint: str = Field(min_length=1)
    timestamp: datetime = Field(validation_alias=AliasChoices("timestamp", "time"))
    count: int = Field(ge=0, validation_alias=AliasChoices("count", "requests"))
    flagged: bool = Field(
        default=False, validation_alias=AliasChoices("flagged", "special")
    )

    @field_validator("endpoint")
    @classmethod
    def _reject_blank_endpoint(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("endpoint must not be blank")
        return value

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        try:
            return truncate_to_millis(as_utc_aware(value))
        except OverflowError as exc:
            raise ValueError(f"timestamp out of range in UTC: {exc}") from exc

    @property
    def classification(self) -> Classification:
        return Classification.FLAGGED if self.flagged else Classification.DEFAULT


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for item in exc.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "event"
        parts.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_event(data: Event | Mapping[str, Any]) -> Event:
    """Validate raw producer input into an Event, raising InvalidEventError."""
    if isinstance(data, Event):
        return data
    if not isinstance(data, Mapping):
        raise InvalidEventError(
            f"event must be a mapping, got {type(data).__name__}"
        )
    try:
        return Event.model_validate(dict(data))
    except ValidationError as exc:
        raise InvalidEventError(_describe_validation_error(exc)) from exc


# =============================================================================
# View State
# =============================================================================


class FilterCriteria(BaseModel):
    """Active inclusion predicates. Empty endpoint set means all endpoints."""

    model_config = ConfigDict(frozen=True)

    start_time: datetime | None = None
    end_time: datetime | None = None
    endpoints: frozenset[str] = frozenset()
    min_count: int = 0

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalize_bound(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        try:
            return as_utc_aware(value)
        except OverflowError as exc:
            raise ValueError(f"time bound out of range in UTC: {exc}") from exc


class ColorScheme(BaseModel):
    """Display color per classification."""

    model_config = ConfigDict(frozen=True)

    default: str = "blue"
    flagged: str = "green"

    def color_for(self, classification: Classification) -> str:
        if classification == Classification.FLAGGED:
            return self.flagged
        return self.default


class PageWindow(BaseModel):
    """The (page_number, page_size) pair selecting the visible slice."""

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)

    def next(self) -> "PageWindow":
        return self.model_copy(update={"page_number": self.page_number + 1})

    def previous(self) -> "PageWindow":
        return self.model_copy(update={"page_number": max(1, self.page_number - 1)})

    def with_page(self, page_number: int) -> "PageWindow":
        return self.model_copy(update={"page_number": max(1, page_number)})


# =============================================================================
# Chart Output
# =============================================================================


class SeriesPoint(BaseModel):
    """One (time, count) point on a series."""

    time: datetime
    count: int


class ChartSeries(BaseModel):
    """Chart-ready series for a single endpoint."""

    label: str
    points: list[SeriesPoint]
    color: str


class ChartData(BaseModel):
    """Finished structure handed to the chart renderer."""

    datasets: list[ChartSeries] = Field(default_factory=list)


__all__ = [
    "as_utc_aware",
    "truncate_to_millis",
    "format_instant",
    "Classification",
    "PageOverflowPolicy",
    "Event",
    "parse_event",
    "FilterCriteria",
    "ColorScheme",
    "PageWindow",
    "SeriesPoint",
    "ChartSeries",
    "ChartData",
]
