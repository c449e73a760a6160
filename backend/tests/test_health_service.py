"""Tests for refreshing and persisting sensor health."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from sensorhealth.domain import Status, Zone, utc_now
from sensorhealth.exceptions import StorageError
from sensorhealth.models import SensorReading
from sensorhealth.schemas.events import SensorStatusChangedEvent
from sensorhealth.services.health_service import (
    fetch_recent_readings,
    get_sensor_health,
    refresh_sensor_health,
)


async def _add_readings(session, sensor, *zones_and_ages):
    """Insert readings directly as (zone, minutes ago) pairs."""
    now = utc_now()
    for zone, minutes_ago in zones_and_ages:
        session.add(
            SensorReading(
                sensor_id=sensor.id,
                value=20.0,
                timestamp=now - timedelta(minutes=minutes_ago),
                zone=zone.value,
            )
        )
    await session.commit()


def _status_events(broadcaster):
    return [
        call.args[0]
        for call in broadcaster.publish.await_args_list
        if isinstance(call.args[0], SensorStatusChangedEvent)
    ]


@pytest.mark.asyncio
async def test_no_history_stays_no_data_without_event(
    session, temperature_sensor, notifier, broadcaster, aggregator
):
    status = await refresh_sensor_health(session, temperature_sensor, notifier)

    assert status is Status.NO_DATA
    health = await get_sensor_health(session, temperature_sensor.id)
    assert health.status == Status.NO_DATA
    assert health.last_computed_at is not None
    await notifier.drain()
    broadcaster.publish.assert_not_awaited()
    aggregator.recompute_device_alert_status.assert_not_awaited()


@pytest.mark.asyncio
async def test_refresh_persists_status_and_notifies_change(
    session, temperature_sensor, notifier, broadcaster, aggregator
):
    await _add_readings(
        session, temperature_sensor, (Zone.WARNING_HIGH, 1), (Zone.NORMAL, 2), (Zone.NORMAL, 3)
    )

    status = await refresh_sensor_health(session, temperature_sensor, notifier)

    assert status is Status.WARNING
    health = await get_sensor_health(session, temperature_sensor.id)
    assert health.status == Status.WARNING
    newest = (await fetch_recent_readings(session, temperature_sensor))[0]
    assert health.last_reading_id == newest.id

    await notifier.drain()
    events = _status_events(broadcaster)
    assert len(events) == 1
    assert events[0].old_status is Status.NO_DATA
    assert events[0].new_status is Status.WARNING
    assert events[0].device_id == temperature_sensor.device_id
    aggregator.recompute_device_alert_status.assert_awaited_once_with(temperature_sensor.device_id)


@pytest.mark.asyncio
async def test_repeated_refresh_does_not_duplicate_event(
    session, temperature_sensor, notifier, broadcaster
):
    await _add_readings(session, temperature_sensor, (Zone.ERROR_HIGH, 1), (Zone.NORMAL, 2))

    first = await refresh_sensor_health(session, temperature_sensor, notifier)
    second = await refresh_sensor_health(session, temperature_sensor, notifier)

    assert first is second is Status.ERROR
    await notifier.drain()
    assert len(_status_events(broadcaster)) == 1


@pytest.mark.asyncio
async def test_stale_error_reading_is_no_data(session, temperature_sensor, notifier):
    await _add_readings(session, temperature_sensor, (Zone.ERROR_HIGH, 11))

    assert await refresh_sensor_health(session, temperature_sensor, notifier) is Status.NO_DATA


@pytest.mark.asyncio
async def test_recovers_after_three_normal_readings(session, temperature_sensor, notifier):
    await _add_readings(session, temperature_sensor, (Zone.ERROR_LOW, 4))
    assert await refresh_sensor_health(session, temperature_sensor, notifier) is Status.ERROR

    await _add_readings(session, temperature_sensor, (Zone.NORMAL, 3), (Zone.NORMAL, 2))
    assert await refresh_sensor_health(session, temperature_sensor, notifier) is Status.ERROR

    await _add_readings(session, temperature_sensor, (Zone.NORMAL, 1))
    assert await refresh_sensor_health(session, temperature_sensor, notifier) is Status.OK


@pytest.mark.asyncio
async def test_readings_before_provisioning_are_ignored(session, temperature_sensor, notifier):
    before_provisioning = (24 * 60) + 5
    await _add_readings(session, temperature_sensor, (Zone.ERROR_HIGH, before_provisioning))

    assert await fetch_recent_readings(session, temperature_sensor) == []


@pytest.mark.asyncio
async def test_sensors_are_independent(session, temperature_sensor, humidity_sensor, notifier):
    await _add_readings(session, temperature_sensor, (Zone.ERROR_HIGH, 1))

    assert await refresh_sensor_health(session, humidity_sensor, notifier) is Status.NO_DATA
    assert await refresh_sensor_health(session, temperature_sensor, notifier) is Status.ERROR


@pytest.mark.asyncio
async def test_storage_error_leaves_health_record_untouched(
    session, temperature_sensor, notifier, broadcaster
):
    broken = MagicMock()
    broken.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("locked")))
    broken.rollback = AsyncMock()

    with pytest.raises(StorageError):
        await refresh_sensor_health(broken, temperature_sensor, notifier)

    broken.rollback.assert_awaited_once()
    health = await get_sensor_health(session, temperature_sensor.id)
    assert health.status == Status.NO_DATA
    assert health.last_computed_at is None
    await notifier.drain()
    broadcaster.publish.assert_not_awaited()
