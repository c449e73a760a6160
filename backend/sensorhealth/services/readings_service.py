"""Readings service layer — fetches stored reading history for charting."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.domain import to_naive_utc
from sensorhealth.models import DeviceSensor, SensorReading
from sensorhealth.schemas.readings import ReadingOut, ReadingsHistoryResponse

__all__ = ["get_reading_history"]

DEFAULT_HISTORY_LIMIT = 100


async def get_reading_history(
    session: AsyncSession,
    sensor: DeviceSensor,
    start: datetime | None = None,
    end: datetime | None = None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> ReadingsHistoryResponse:
    """Newest-first readings of a sensor instance, optionally bounded in time."""
    query = select(SensorReading).where(SensorReading.sensor_id == sensor.id)
    if start is not None:
        query = query.where(SensorReading.timestamp >= to_naive_utc(start))
    if end is not None:
        query = query.where(SensorReading.timestamp <= to_naive_utc(end))
    query = query.order_by(SensorReading.timestamp.desc(), SensorReading.id.desc()).limit(limit)

    result = await session.execute(query)
    readings = [ReadingOut.model_validate(row) for row in result.scalars()]

    return ReadingsHistoryResponse(
        sensor_id=sensor.id,
        sensor_type=sensor.sensor_type.name,
        unit=sensor.sensor_type.unit,
        readings=readings,
    )
