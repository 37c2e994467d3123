"""Parse UI-originated filter input into FilterCriteria."""

import logging
import math
from collections.abc import Iterable
from datetime import datetime

from pydantic import TypeAdapter, ValidationError

from pulseboard.errors import InvalidCriteriaError
from pulseboard.models import FilterCriteria, as_utc_aware

logger = logging.getLogger(__name__)

_INSTANT_ADAPTER = TypeAdapter(datetime)


def parse_instant(value: object) -> datetime | None:
    """Parse an optional time bound. None or blank text means unbounded."""
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = _INSTANT_ADAPTER.validate_python(value.strip())
        except ValidationError as exc:
            raise InvalidCriteriaError(f"Invalid time bound: {value!r}") from exc
    if not isinstance(value, datetime):
        raise InvalidCriteriaError(f"Invalid time bound: {value!r}")
    try:
        return as_utc_aware(value)
    except OverflowError as exc:
        raise InvalidCriteriaError(f"Time bound out of range in UTC: {value!r}") from exc


def coerce_min_count(value: object) -> int:
    """Coerce a minimum-count input to int. Non-numeric, NaN or fractional input is rejected."""
    if isinstance(value, bool):
        raise InvalidCriteriaError(f"Invalid minimum count: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        raise InvalidCriteriaError(f"Invalid minimum count: {value!r}")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise InvalidCriteriaError(f"Invalid minimum count: {value!r}") from exc
    raise InvalidCriteriaError(f"Invalid minimum count: {value!r}")


def normalize_endpoints(endpoints: Iterable[str] | str | None) -> frozenset[str]:
    """Endpoint selection as a set. A single name is one endpoint, not its characters."""
    if not endpoints:
        return frozenset()
    if isinstance(endpoints, str):
        return frozenset({endpoints})
    return frozenset(endpoint for endpoint in endpoints if endpoint)


def parse_criteria(
    *,
    start: object = None,
    end: object = None,
    endpoints: Iterable[str] | None = None,
    min_count: object = 0,
) -> FilterCriteria:
    """Build FilterCriteria from raw inputs, raising InvalidCriteriaError on bad fields."""
    try:
        return FilterCriteria(
            start_time=parse_instant(start),
            end_time=parse_instant(end),
            endpoints=normalize_endpoints(endpoints),
            min_count=coerce_min_count(min_count),
        )
    except InvalidCriteriaError as exc:
        logger.warning("Rejected filter criteria: %s", exc)
        raise
