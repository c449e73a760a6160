"""Sensor health — debounced status over the most recent readings.

The status is recomputed from persisted history every time; nothing carries
over between calls, so concurrent refreshes of one sensor are idempotent.
"""

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.domain import Severity, Status, Zone, utc_now
from sensorhealth.exceptions import StorageError
from sensorhealth.models import DeviceSensor, SensorHealth, SensorReading
from sensorhealth.services.cascade import CascadeNotifier

__all__ = [
    "CONSECUTIVE_READINGS_THRESHOLD",
    "READING_TIMEOUT",
    "compute_status",
    "fetch_recent_readings",
    "get_sensor_health",
    "refresh_sensor_health",
]

logger = logging.getLogger(__name__)

CONSECUTIVE_READINGS_THRESHOLD = 3
READING_TIMEOUT = timedelta(minutes=10)


class ZonedReading(Protocol):
    timestamp: datetime
    zone: str


def compute_status(
    recent_readings: Iterable[ZonedReading],
    *,
    now: datetime | None = None,
) -> Status:
    """
    Severity-priority reduction over the newest readings.

    1. No readings -> no_data
    2. Newest reading older than READING_TIMEOUT -> no_data, whatever its zone
    3. Among the newest CONSECUTIVE_READINGS_THRESHOLD readings: any error
       band -> error, else any warning band -> warning, else ok.

    ``out_of_range`` zones carry no severity and count as ok.
    The sensor instance is not a parameter: the readings passed in are already
    scoped to one sensor, and nothing else about the sensor affects the result.
    """
    readings = sorted(recent_readings, key=lambda reading: reading.timestamp, reverse=True)
    if not readings:
        return Status.NO_DATA

    now = now or utc_now()
    if now - readings[0].timestamp > READING_TIMEOUT:
        return Status.NO_DATA

    window = readings[:CONSECUTIVE_READINGS_THRESHOLD]
    severity = max(Zone(reading.zone).severity for reading in window)
    return Status.from_severity(Severity(severity))


async def fetch_recent_readings(
    session: AsyncSession,
    sensor: DeviceSensor,
    limit: int = CONSECUTIVE_READINGS_THRESHOLD,
) -> list[SensorReading]:
    """Newest-first readings of a sensor, ignoring any dated before it was provisioned."""
    result = await session.execute(
        select(SensorReading)
        .where(
            SensorReading.sensor_id == sensor.id,
            SensorReading.timestamp >= sensor.created_at,
        )
        .order_by(SensorReading.timestamp.desc(), SensorReading.id.desc())
        .limit(limit)
    )
    return list(result.scalars())


async def get_sensor_health(session: AsyncSession, sensor_id: int) -> SensorHealth | None:
    result = await session.execute(select(SensorHealth).where(SensorHealth.sensor_id == sensor_id))
    return result.scalar_one_or_none()


async def refresh_sensor_health(
    session: AsyncSession,
    sensor: DeviceSensor,
    notifier: CascadeNotifier,
    *,
    now: datetime | None = None,
    timeout: float | None = None,
) -> Status:
    """
    Recompute a sensor's status from its history and store it (last write wins).

    The status-changed notification fires only when the new status differs
    from the stored one. A storage failure leaves the health record as it was
    and is raised as StorageError.
    """
    now = now or utc_now()
    # Read before any rollback can expire the instance
    sensor_id = sensor.id

    try:
        async with asyncio.timeout(timeout):
            readings = await fetch_recent_readings(session, sensor)
            new_status = compute_status(readings, now=now)

            health = await get_sensor_health(session, sensor.id)
            if health is None:
                health = SensorHealth(sensor_id=sensor.id, status=Status.NO_DATA.value)
                session.add(health)
            old_status = Status(health.status)

            health.status = new_status.value
            health.last_reading_id = readings[0].id if readings else None
            health.last_computed_at = now
            await session.commit()
    except TimeoutError:
        await session.rollback()
        logger.warning(f"Health refresh for sensor {sensor_id} timed out after {timeout}s")
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Health refresh for sensor {sensor_id} failed: {e}")
        raise StorageError(f"Could not refresh health for sensor {sensor_id}") from e

    if old_status != new_status:
        logger.info(f"Sensor {sensor_id} status {old_status} -> {new_status}")
        notifier.notify_status_changed(sensor, old_status, new_status)
    else:
        logger.info(f"Sensor {sensor_id} status unchanged ({new_status})")
    return new_status
