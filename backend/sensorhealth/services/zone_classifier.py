"""Zone classification of a single value against a sensor type's bands.

Everything here is pure: no state, no I/O, no logging.
"""

from sensorhealth.domain import BAND_ORDER, BandDefinition, Severity, Zone

__all__ = [
    "band_bounds",
    "classify",
    "is_normal",
    "is_valid",
    "is_warning_or_error",
]


def band_bounds(definition: BandDefinition, zone: Zone) -> tuple[float, float]:
    """Return the closed interval ``(low, high)`` configured for a band zone."""
    if zone is Zone.OUT_OF_RANGE:
        raise ValueError("out_of_range has no band")
    return getattr(definition, f"{zone.value}_min"), getattr(definition, f"{zone.value}_max")


def classify(definition: BandDefinition, value: float) -> Zone:
    """Map a value to the first band that contains it, in fixed priority order.

    Bands are closed intervals and need not tile the absolute range; a value
    matching no band resolves to ``Zone.OUT_OF_RANGE``. Callers are expected to
    have checked the absolute range with :func:`is_valid` first.
    """
    for zone in BAND_ORDER:
        low, high = band_bounds(definition, zone)
        if low <= value <= high:
            return zone
    return Zone.OUT_OF_RANGE


def is_valid(definition: BandDefinition, value: float) -> bool:
    """Whether the value lies within the sensor type's absolute range."""
    return definition.min_value <= value <= definition.max_value


def is_normal(definition: BandDefinition, value: float) -> bool:
    return classify(definition, value) is Zone.NORMAL


def is_warning_or_error(definition: BandDefinition, value: float) -> bool:
    return classify(definition, value).severity > Severity.NONE
