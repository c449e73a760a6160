"""Core domain vocabulary: zones, health statuses and their severity ordering."""

from collections.abc import Iterable
from datetime import UTC, datetime
from enum import IntEnum, StrEnum
from typing import Protocol


class Severity(IntEnum):
    """Ordered severity carried by a classified zone."""

    NONE = 0
    WARNING = 1
    ERROR = 2


class Zone(StrEnum):
    """Outcome of classifying one value against a sensor type's bands."""

    ERROR_LOW = "error_low"
    WARNING_LOW = "warning_low"
    NORMAL = "normal"
    WARNING_HIGH = "warning_high"
    ERROR_HIGH = "error_high"
    OUT_OF_RANGE = "out_of_range"

    @property
    def severity(self) -> Severity:
        # OUT_OF_RANGE carries no severity, so the health reducer counts it as ok
        return _ZONE_SEVERITY[self]


_ZONE_SEVERITY = {
    Zone.ERROR_LOW: Severity.ERROR,
    Zone.WARNING_LOW: Severity.WARNING,
    Zone.NORMAL: Severity.NONE,
    Zone.WARNING_HIGH: Severity.WARNING,
    Zone.ERROR_HIGH: Severity.ERROR,
    Zone.OUT_OF_RANGE: Severity.NONE,
}

# Fixed classification priority; the first matching band wins
BAND_ORDER: tuple[Zone, ...] = (
    Zone.ERROR_LOW,
    Zone.WARNING_LOW,
    Zone.NORMAL,
    Zone.WARNING_HIGH,
    Zone.ERROR_HIGH,
)


class Status(StrEnum):
    """Debounced health verdict for a sensor instance."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"
    NO_DATA = "no_data"

    @property
    def rank(self) -> int:
        """Total order used for severity comparison: no_data < ok < warning < error."""
        return _STATUS_RANK[self]

    @classmethod
    def from_severity(cls, severity: Severity) -> "Status":
        if severity is Severity.ERROR:
            return cls.ERROR
        if severity is Severity.WARNING:
            return cls.WARNING
        return cls.OK


_STATUS_RANK = {
    Status.NO_DATA: 0,
    Status.OK: 1,
    Status.WARNING: 2,
    Status.ERROR: 3,
}


def most_severe(statuses: Iterable[Status]) -> Status:
    """Return the highest-ranked status, or NO_DATA for an empty input."""
    return max(statuses, key=lambda status: status.rank, default=Status.NO_DATA)


class ValidationKind(StrEnum):
    """Reasons an incoming reading is rejected."""

    MISSING_VALUE = "missing_value"
    MISSING_TIMESTAMP = "missing_timestamp"
    FUTURE_TIMESTAMP = "future_timestamp"
    OUT_OF_ABSOLUTE_RANGE = "out_of_absolute_range"


class BandDefinition(Protocol):
    """Anything carrying the absolute range and the five closed bands of a sensor type."""

    min_value: float
    max_value: float
    error_low_min: float
    error_low_max: float
    warning_low_min: float
    warning_low_max: float
    normal_min: float
    normal_max: float
    warning_high_min: float
    warning_high_max: float
    error_high_min: float
    error_high_max: float


def utc_now() -> datetime:
    """Current time as naive UTC, the representation stored in SQLite."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalise an aware datetime to naive UTC; naive values are assumed to be UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
