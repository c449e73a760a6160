"""Device routes: provisioning and alert status."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.database import get_db
from sensorhealth.exceptions import (
    DeviceExistsError,
    DeviceNotFoundError,
    DuplicateSensorError,
    SensorTypeNotFoundError,
)
from sensorhealth.schemas import DeviceAlertResponse, DeviceCreateRequest
from sensorhealth.services.device_service import get_device_alert_view, provision_device

router = APIRouter(prefix="/api/devices", tags=["devices"])


@router.post("", response_model=DeviceAlertResponse, status_code=201)
async def create_device(
    payload: DeviceCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> DeviceAlertResponse:
    """Provision a device; every new sensor starts at no_data."""
    try:
        await provision_device(session, payload.id, payload.name, payload.sensor_types)
    except SensorTypeNotFoundError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (DeviceExistsError, DuplicateSensorError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return await get_device_alert_view(session, payload.id)


@router.get("/{device_id}", response_model=DeviceAlertResponse)
async def get_device(
    device_id: str,
    session: AsyncSession = Depends(get_db),
) -> DeviceAlertResponse:
    """Get a device's alert status and the status of each of its sensors."""
    try:
        return await get_device_alert_view(session, device_id)
    except DeviceNotFoundError:
        raise HTTPException(status_code=404, detail="Device not found")
