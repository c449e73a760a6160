"""Tests for the debounced health status computation."""

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from sensorhealth.domain import Status, Zone
from sensorhealth.services.health_service import (
    CONSECUTIVE_READINGS_THRESHOLD,
    READING_TIMEOUT,
    compute_status,
)

NOW = datetime(2026, 1, 29, 12, 0, 0)


def _readings(*zones: Zone, newest_at: datetime = NOW, step: timedelta = timedelta(minutes=1)):
    """Readings newest-first, one ``step`` apart, ending at ``newest_at``."""
    return [
        SimpleNamespace(timestamp=newest_at - i * step, zone=zone.value)
        for i, zone in enumerate(zones)
    ]


def test_constants():
    assert CONSECUTIVE_READINGS_THRESHOLD == 3
    assert READING_TIMEOUT == timedelta(minutes=10)


def test_no_history_is_no_data():
    assert compute_status([], now=NOW) is Status.NO_DATA


def test_warning_in_window():
    readings = _readings(Zone.WARNING_HIGH, Zone.NORMAL, Zone.NORMAL)
    assert compute_status(readings, now=NOW) is Status.WARNING


def test_error_outranks_warning_even_as_minority():
    readings = _readings(Zone.ERROR_HIGH, Zone.NORMAL, Zone.NORMAL)
    assert compute_status(readings, now=NOW) is Status.ERROR

    readings = _readings(Zone.WARNING_LOW, Zone.ERROR_LOW, Zone.WARNING_HIGH)
    assert compute_status(readings, now=NOW) is Status.ERROR


def test_all_normal_is_ok():
    readings = _readings(Zone.NORMAL, Zone.NORMAL, Zone.NORMAL)
    assert compute_status(readings, now=NOW) is Status.OK


def test_staleness_overrides_severity():
    readings = _readings(Zone.ERROR_HIGH, newest_at=NOW - timedelta(minutes=11))
    assert compute_status(readings, now=NOW) is Status.NO_DATA


def test_reading_exactly_at_timeout_is_not_stale():
    readings = _readings(Zone.NORMAL, newest_at=NOW - READING_TIMEOUT)
    assert compute_status(readings, now=NOW) is Status.OK


def test_only_newest_three_readings_count():
    """An error four readings back has left the debounce window."""
    readings = _readings(Zone.NORMAL, Zone.NORMAL, Zone.NORMAL, Zone.ERROR_HIGH)
    assert compute_status(readings, now=NOW) is Status.OK


def test_shorter_history_uses_what_is_there():
    assert compute_status(_readings(Zone.WARNING_LOW), now=NOW) is Status.WARNING
    assert compute_status(_readings(Zone.NORMAL, Zone.NORMAL), now=NOW) is Status.OK


def test_out_of_range_counts_as_ok():
    readings = _readings(Zone.OUT_OF_RANGE, Zone.OUT_OF_RANGE, Zone.NORMAL)
    assert compute_status(readings, now=NOW) is Status.OK


def test_input_order_does_not_matter():
    readings = _readings(Zone.NORMAL, Zone.NORMAL, Zone.NORMAL, Zone.ERROR_HIGH)
    assert compute_status(list(reversed(readings)), now=NOW) is Status.OK


@pytest.mark.parametrize(
    ("zones", "expected"),
    [
        ((Zone.NORMAL, Zone.WARNING_HIGH, Zone.NORMAL), Status.WARNING),
        ((Zone.NORMAL, Zone.NORMAL, Zone.ERROR_LOW), Status.ERROR),
        ((Zone.OUT_OF_RANGE, Zone.WARNING_LOW, Zone.NORMAL), Status.WARNING),
    ],
)
def test_bad_reading_anywhere_in_window(zones, expected):
    assert compute_status(_readings(*zones), now=NOW) is expected


def test_is_pure():
    readings = _readings(Zone.WARNING_HIGH, Zone.NORMAL, Zone.NORMAL)
    assert compute_status(readings, now=NOW) is compute_status(readings, now=NOW)
