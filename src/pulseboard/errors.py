"""Domain errors raised at the ingestion and criteria-update boundaries."""


class PulseboardError(Exception):
    """Base class for all pulseboard errors."""


class InvalidEventError(PulseboardError, ValueError):
    """An event failed validation and was not appended."""


class InvalidCriteriaError(PulseboardError, ValueError):
    """A filter criteria update was rejected; the previous criteria stay active."""


__all__ = [
    "PulseboardError",
    "InvalidEventError",
    "InvalidCriteriaError",
]
