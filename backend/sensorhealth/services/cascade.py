"""Cascade notifier — best-effort hand-off of committed readings and status changes.

Nothing in here may fail the ingest or refresh that triggered it: every
notification runs as a detached asyncio task whose errors are only logged.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, Protocol

from sensorhealth.domain import Status, Zone
from sensorhealth.models import DeviceSensor, SensorReading
from sensorhealth.schemas.events import (
    DashboardEvent,
    ReadingCommittedEvent,
    SensorStatusChangedEvent,
)

__all__ = ["AlertAggregator", "Broadcaster", "CascadeNotifier"]

logger = logging.getLogger(__name__)


class Broadcaster(Protocol):
    """Fire-and-forget path to live dashboards."""

    async def publish(self, event: DashboardEvent) -> None: ...


class AlertAggregator(Protocol):
    """Recomputes a device-wide alert status from its sensors' statuses."""

    async def recompute_device_alert_status(self, device_id: str) -> None: ...


class CascadeNotifier:
    """Signals the broadcaster and the alert aggregator after a successful write."""

    def __init__(self, broadcaster: Broadcaster, aggregator: AlertAggregator | None = None) -> None:
        self._broadcaster = broadcaster
        self._aggregator = aggregator
        self._tasks: set[asyncio.Task] = set()

    def notify_reading_committed(self, reading: SensorReading) -> None:
        event = ReadingCommittedEvent(
            sensor_instance_id=reading.sensor_id,
            value=reading.value,
            zone=Zone(reading.zone),
            timestamp=reading.timestamp,
        )
        self._spawn(self._broadcaster.publish(event), f"reading_committed sensor={reading.sensor_id}")

    def notify_status_changed(
        self,
        sensor: DeviceSensor,
        old_status: Status,
        new_status: Status,
    ) -> None:
        """Publish a status change and ask for a device alert recompute.

        Equal statuses are a no-op so repeated refreshes do not emit duplicates.
        """
        if old_status == new_status:
            return

        event = SensorStatusChangedEvent(
            sensor_instance_id=sensor.id,
            device_id=sensor.device_id,
            old_status=old_status,
            new_status=new_status,
        )
        self._spawn(self._broadcaster.publish(event), f"sensor_status_changed sensor={sensor.id}")
        if self._aggregator is not None:
            self._spawn(
                self._aggregator.recompute_device_alert_status(sensor.device_id),
                f"device_alert_recompute device={sensor.device_id}",
            )

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every notification scheduled so far to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _spawn(self, coro: Coroutine[Any, Any, None], label: str) -> None:
        task = asyncio.get_running_loop().create_task(self._run(coro, label))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @staticmethod
    async def _run(coro: Coroutine[Any, Any, None], label: str) -> None:
        try:
            await coro
        except Exception:
            logger.exception(f"Notification failed: {label}")
