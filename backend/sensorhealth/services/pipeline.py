"""Reading pipeline — the one place where ingest, notification and refresh are ordered."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.domain import Status
from sensorhealth.exceptions import StorageError
from sensorhealth.models import DeviceSensor, SensorReading
from sensorhealth.services.cascade import CascadeNotifier
from sensorhealth.services.health_service import refresh_sensor_health
from sensorhealth.services.reading_ingestor import ingest_reading

__all__ = ["IngestOutcome", "process_reading"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestOutcome:
    reading: SensorReading
    status: Status | None


async def process_reading(
    session: AsyncSession,
    sensor: DeviceSensor,
    value: Any,
    timestamp: datetime | None,
    notifier: CascadeNotifier,
    *,
    refresh: bool = True,
    timeout: float | None = None,
) -> IngestOutcome:
    """
    Run one reading through the engine:

    ingest (validate, classify, persist) -> reading_committed broadcast
    -> health refresh (optional) -> sensor_status_changed + device alert trigger

    Validation and storage errors from the ingest step propagate and skip the
    refresh. Once the reading is committed nothing is raised: a refresh that
    times out or fails to store is logged and reported as ``status=None``, so
    callers never resubmit a reading that is already stored.
    """
    reading = await ingest_reading(session, sensor, value, timestamp, notifier, timeout=timeout)

    status = None
    if refresh:
        # A failed refresh rolls the session back, which would expire these
        reading_id, sensor_id = reading.id, sensor.id
        session.expunge(reading)
        try:
            status = await refresh_sensor_health(session, sensor, notifier, timeout=timeout)
        except (TimeoutError, StorageError) as e:
            logger.warning(
                f"Reading {reading_id} stored but health refresh for sensor {sensor_id} failed: {e!r}"
            )
    return IngestOutcome(reading=reading, status=status)
