"""Sensor type catalog routes."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.database import get_db
from sensorhealth.schemas import ClassificationResponse, SensorTypeOut
from sensorhealth.services.sensor_type_service import (
    get_sensor_type_by_name,
    list_sensor_types,
    to_sensor_type_out,
)
from sensorhealth.services.zone_classifier import (
    classify,
    is_normal,
    is_valid,
    is_warning_or_error,
)

router = APIRouter(prefix="/api/sensor-types", tags=["sensor-types"])


@router.get("", response_model=list[SensorTypeOut])
async def get_sensor_types(session: AsyncSession = Depends(get_db)) -> list[SensorTypeOut]:
    """List all sensor type definitions with their bands."""
    return [to_sensor_type_out(sensor_type) for sensor_type in await list_sensor_types(session)]


@router.get("/{name}", response_model=SensorTypeOut)
async def get_sensor_type(name: str, session: AsyncSession = Depends(get_db)) -> SensorTypeOut:
    """Get one sensor type by full name or catalog key (e.g. "temperature")."""
    sensor_type = await get_sensor_type_by_name(session, name)
    if not sensor_type:
        raise HTTPException(status_code=404, detail="Sensor type not found")
    return to_sensor_type_out(sensor_type)


@router.get("/{name}/classify", response_model=ClassificationResponse)
async def classify_value(
    name: str,
    value: float = Query(..., description="Value to classify"),
    session: AsyncSession = Depends(get_db),
) -> ClassificationResponse:
    """Classify a value against a sensor type without storing anything."""
    sensor_type = await get_sensor_type_by_name(session, name)
    if not sensor_type:
        raise HTTPException(status_code=404, detail="Sensor type not found")
    return ClassificationResponse(
        sensor_type=sensor_type.name,
        value=value,
        zone=classify(sensor_type, value),
        is_valid=is_valid(sensor_type, value),
        is_normal=is_normal(sensor_type, value),
        is_warning_or_error=is_warning_or_error(sensor_type, value),
    )
