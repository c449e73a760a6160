"""Reading ingestion — validate, classify, persist, then hand off to the notifier."""

import asyncio
import logging
import math
from datetime import datetime
from numbers import Real
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.domain import ValidationKind, to_naive_utc, utc_now
from sensorhealth.exceptions import ReadingValidationError, StorageError
from sensorhealth.models import DeviceSensor, SensorReading, SensorType
from sensorhealth.services.cascade import CascadeNotifier
from sensorhealth.services.zone_classifier import classify, is_valid

__all__ = ["ingest_reading", "validate_reading"]

logger = logging.getLogger(__name__)


def validate_reading(
    sensor_type: SensorType,
    value: Any,
    timestamp: datetime | None,
    now: datetime,
) -> tuple[float, datetime]:
    """
    Check an incoming reading, failing fast on the first problem.

    Order:
    1. value present and numeric (bools, NaN and infinities are rejected)
    2. timestamp present
    3. timestamp not later than ``now`` (no clock skew tolerance)
    4. value within the sensor type's absolute range

    Returns the value as float and the timestamp as naive UTC.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        raise ReadingValidationError(ValidationKind.MISSING_VALUE, "value must be a number")
    value = float(value)
    if not math.isfinite(value):
        raise ReadingValidationError(ValidationKind.MISSING_VALUE, "value must be a finite number")

    if timestamp is None:
        raise ReadingValidationError(ValidationKind.MISSING_TIMESTAMP, "timestamp is required")
    timestamp = to_naive_utc(timestamp)
    if timestamp > now:
        raise ReadingValidationError(
            ValidationKind.FUTURE_TIMESTAMP, "timestamp can't be in the future"
        )

    if not is_valid(sensor_type, value):
        raise ReadingValidationError(
            ValidationKind.OUT_OF_ABSOLUTE_RANGE,
            f"value must be between {sensor_type.min_value} and "
            f"{sensor_type.max_value} {sensor_type.unit}",
        )

    return value, timestamp


async def ingest_reading(
    session: AsyncSession,
    sensor: DeviceSensor,
    value: Any,
    timestamp: datetime | None,
    notifier: CascadeNotifier,
    *,
    now: datetime | None = None,
    timeout: float | None = None,
) -> SensorReading:
    """
    Validate, classify and persist one reading for a sensor instance.

    On success exactly one row is written and one best-effort broadcast is
    scheduled. On validation failure nothing is written. Storage failures are
    rolled back and raised as StorageError; if ``timeout`` expires before the
    commit completes the session is rolled back and TimeoutError propagates.
    """
    now = now or utc_now()
    sensor_type = sensor.sensor_type
    sensor_id = sensor.id

    try:
        value, timestamp = validate_reading(sensor_type, value, timestamp, now)
    except ReadingValidationError as e:
        logger.warning(f"Rejected reading for sensor {sensor_id}: {e.kind} ({e.message})")
        raise

    zone = classify(sensor_type, value)
    reading = SensorReading(
        sensor_id=sensor.id,
        value=value,
        timestamp=timestamp,
        zone=zone.value,
        created_at=now,
    )

    try:
        async with asyncio.timeout(timeout):
            session.add(reading)
            await session.commit()
    except TimeoutError:
        await session.rollback()
        logger.warning(f"Ingest for sensor {sensor_id} timed out after {timeout}s, rolled back")
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Failed to persist reading for sensor {sensor_id}: {e}")
        raise StorageError(f"Could not persist reading for sensor {sensor_id}") from e

    logger.info(f"Stored reading {reading.id} for sensor {sensor_id}: {value} -> {zone}")
    notifier.notify_reading_committed(reading)
    return reading
