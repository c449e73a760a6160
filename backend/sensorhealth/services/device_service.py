"""Device service layer — provisioning and lookup of devices and sensor instances."""

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.domain import Status, utc_now
from sensorhealth.exceptions import (
    DeviceNotFoundError,
    DeviceExistsError,
    DuplicateSensorError,
    SensorNotFoundError,
    SensorTypeNotFoundError,
)
from sensorhealth.models import Device, DeviceSensor, SensorHealth, SensorType
from sensorhealth.schemas.health import DeviceAlertResponse, SensorStatusSummary
from sensorhealth.services.sensor_type_service import get_sensor_type_by_name

__all__ = [
    "get_device",
    "get_device_alert_view",
    "get_device_sensor",
    "provision_device",
    "provision_sensor",
]

logger = logging.getLogger(__name__)


async def provision_device(
    session: AsyncSession,
    device_id: str,
    name: str,
    sensor_type_names: Sequence[str],
    provisioned_at: datetime | None = None,
) -> Device:
    """Create a device with one sensor instance and one health record per sensor type.

    Readings timestamped before ``provisioned_at`` never count towards health.
    Nothing is committed if any sensor type is unknown or listed twice.
    """
    existing = await session.execute(select(Device.id).where(Device.id == device_id))
    if existing.scalar_one_or_none() is not None:
        raise DeviceExistsError(f"Device {device_id} already exists")

    provisioned_at = provisioned_at or utc_now()
    device = Device(
        id=device_id,
        name=name,
        alert_status=Status.NO_DATA.value,
        created_at=provisioned_at,
    )
    session.add(device)
    await session.flush()

    try:
        for sensor_type_name in sensor_type_names:
            await provision_sensor(
                session, device, sensor_type_name, provisioned_at=provisioned_at, commit=False
            )
    except (SensorTypeNotFoundError, DuplicateSensorError):
        await session.rollback()
        raise

    await session.commit()
    logger.info(f"Provisioned device {device_id} with {len(sensor_type_names)} sensors")
    return device


async def provision_sensor(
    session: AsyncSession,
    device: Device,
    sensor_type_name: str,
    provisioned_at: datetime | None = None,
    commit: bool = True,
) -> DeviceSensor:
    """Mount a sensor of the given type on a device, starting at ``no_data``."""
    sensor_type = await get_sensor_type_by_name(session, sensor_type_name)
    if sensor_type is None:
        raise SensorTypeNotFoundError(f"Unknown sensor type: {sensor_type_name}")

    existing = await session.execute(
        select(DeviceSensor.id).where(
            DeviceSensor.device_id == device.id,
            DeviceSensor.sensor_type_id == sensor_type.id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise DuplicateSensorError(
            f"Device {device.id} already has a {sensor_type.name} sensor"
        )

    sensor = DeviceSensor(
        device_id=device.id,
        sensor_type=sensor_type,
        created_at=provisioned_at or utc_now(),
    )
    session.add(sensor)
    await session.flush()

    session.add(SensorHealth(sensor_id=sensor.id, status=Status.NO_DATA.value))
    if commit:
        await session.commit()
    return sensor


async def get_device_sensor(session: AsyncSession, sensor_id: int) -> DeviceSensor:
    """Load a sensor instance together with its type definition."""
    result = await session.execute(select(DeviceSensor).where(DeviceSensor.id == sensor_id))
    sensor = result.unique().scalar_one_or_none()
    if sensor is None:
        raise SensorNotFoundError(f"Sensor {sensor_id} not found")
    return sensor


async def get_device(session: AsyncSession, device_id: str) -> Device:
    result = await session.execute(select(Device).where(Device.id == device_id))
    device = result.scalar_one_or_none()
    if device is None:
        raise DeviceNotFoundError(f"Device {device_id} not found")
    return device


async def get_device_alert_view(session: AsyncSession, device_id: str) -> DeviceAlertResponse:
    """Device alert status plus the stored status of each of its sensors."""
    device = await get_device(session, device_id)

    result = await session.execute(
        select(DeviceSensor.id, SensorType.name, SensorHealth.status)
        .join(SensorType, SensorType.id == DeviceSensor.sensor_type_id)
        .outerjoin(SensorHealth, SensorHealth.sensor_id == DeviceSensor.id)
        .where(DeviceSensor.device_id == device_id)
        .order_by(DeviceSensor.id)
    )
    sensors = [
        SensorStatusSummary(
            sensor_id=sensor_id,
            sensor_type=type_name,
            status=Status(status) if status else Status.NO_DATA,
        )
        for sensor_id, type_name, status in result
    ]

    return DeviceAlertResponse(
        id=device.id,
        name=device.name,
        alert_status=Status(device.alert_status),
        alert_status_updated_at=device.alert_status_updated_at,
        sensors=sensors,
    )
