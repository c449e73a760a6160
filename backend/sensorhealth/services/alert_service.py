"""Device alert aggregation — derives a device's alert status from its sensors."""

import logging
from collections.abc import Callable, Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.domain import Status, most_severe, utc_now
from sensorhealth.models import Device, DeviceSensor, SensorHealth

__all__ = ["DeviceAlertAggregator", "compute_alert_status"]

logger = logging.getLogger(__name__)


def compute_alert_status(statuses: Iterable[Status]) -> Status:
    """
    Reduce sensor statuses to one device alert status.

    Sensors without data are ignored. Any error wins, then any warning; a
    device whose remaining sensors are all ok is ok, and a device with no
    reporting sensor at all has no data.
    """
    return most_severe(status for status in statuses if status is not Status.NO_DATA)


class DeviceAlertAggregator:
    """Default alert aggregator persisting the device alert status in the same store."""

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory

    async def recompute_device_alert_status(self, device_id: str) -> None:
        async with self._session_factory() as session:
            await self.recompute(session, device_id)

    async def recompute(self, session: AsyncSession, device_id: str) -> Status | None:
        device = await session.get(Device, device_id)
        if device is None:
            logger.warning(f"Alert recompute requested for unknown device {device_id}")
            return None

        result = await session.execute(
            select(SensorHealth.status)
            .join(DeviceSensor, DeviceSensor.id == SensorHealth.sensor_id)
            .where(DeviceSensor.device_id == device_id)
        )
        new_status = compute_alert_status(Status(status) for status in result.scalars())

        if device.alert_status != new_status.value:
            logger.info(
                f"Device {device_id} alert status {device.alert_status} -> {new_status}"
            )
            device.alert_status = new_status.value
            device.alert_status_updated_at = utc_now()
            await session.commit()
        return new_status
