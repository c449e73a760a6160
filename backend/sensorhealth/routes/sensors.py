"""Sensor instance routes: history and health."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.config import INGEST_TIMEOUT
from sensorhealth.database import get_db
from sensorhealth.dependencies import get_notifier
from sensorhealth.domain import to_naive_utc
from sensorhealth.exceptions import SensorNotFoundError
from sensorhealth.models import DeviceSensor
from sensorhealth.schemas import ReadingsHistoryResponse, SensorHealthResponse
from sensorhealth.services.cascade import CascadeNotifier
from sensorhealth.services.device_service import get_device_sensor
from sensorhealth.services.health_service import get_sensor_health, refresh_sensor_health
from sensorhealth.services.readings_service import get_reading_history

# Maximum number of readings returned by one history request
MAX_HISTORY_LIMIT = 1000

router = APIRouter(prefix="/api/sensors", tags=["sensors"])


async def _load_sensor(session: AsyncSession, sensor_id: int) -> DeviceSensor:
    try:
        return await get_device_sensor(session, sensor_id)
    except SensorNotFoundError:
        raise HTTPException(status_code=404, detail="Sensor not found")


@router.get("/{sensor_id}/readings", response_model=ReadingsHistoryResponse)
async def get_readings(
    sensor_id: int,
    start: datetime | None = Query(None, description="Start of time range (ISO format)"),
    end: datetime | None = Query(None, description="End of time range (ISO format)"),
    limit: int = Query(100, ge=1, le=MAX_HISTORY_LIMIT),
    session: AsyncSession = Depends(get_db),
) -> ReadingsHistoryResponse:
    """Get newest-first reading history for a sensor."""
    # Stored timestamps are naive UTC
    start = to_naive_utc(start) if start is not None else None
    end = to_naive_utc(end) if end is not None else None
    if start is not None and end is not None and start >= end:
        raise HTTPException(status_code=400, detail="start must be before end")

    sensor = await _load_sensor(session, sensor_id)
    return await get_reading_history(session, sensor, start, end, limit)


@router.get("/{sensor_id}/health", response_model=SensorHealthResponse)
async def get_health(
    sensor_id: int,
    session: AsyncSession = Depends(get_db),
) -> SensorHealthResponse:
    """Get the stored health record of a sensor."""
    await _load_sensor(session, sensor_id)
    health = await get_sensor_health(session, sensor_id)
    if not health:
        raise HTTPException(status_code=404, detail="Health record not found")
    return SensorHealthResponse(
        sensor_id=health.sensor_id,
        status=health.status,
        last_reading_id=health.last_reading_id,
        last_computed_at=health.last_computed_at,
    )


@router.post("/{sensor_id}/refresh", response_model=SensorHealthResponse)
async def refresh_health(
    sensor_id: int,
    session: AsyncSession = Depends(get_db),
    notifier: CascadeNotifier = Depends(get_notifier),
) -> SensorHealthResponse:
    """Recompute and store a sensor's health from its reading history."""
    sensor = await _load_sensor(session, sensor_id)
    try:
        await refresh_sensor_health(session, sensor, notifier, timeout=INGEST_TIMEOUT)
    except TimeoutError:
        raise HTTPException(status_code=504, detail="Refresh timed out")

    health = await get_sensor_health(session, sensor_id)
    return SensorHealthResponse(
        sensor_id=health.sensor_id,
        status=health.status,
        last_reading_id=health.last_reading_id,
        last_computed_at=health.last_computed_at,
    )
