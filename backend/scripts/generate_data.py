#!/usr/bin/env python3
"""Generate a few hours of readings for the demo device through the ingest pipeline."""

import asyncio
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from sensorhealth.database import async_session
from sensorhealth.domain import utc_now
from sensorhealth.exceptions import ReadingValidationError
from sensorhealth.models import DeviceSensor, SensorType
from sensorhealth.services.alert_service import DeviceAlertAggregator
from sensorhealth.services.broadcast import EventBroadcaster
from sensorhealth.services.cascade import CascadeNotifier
from sensorhealth.services.pipeline import process_reading
from scripts.seed_sensor_types import DEMO_DEVICE_ID

# Fixed seed for reproducibility
RANDOM_SEED = 42

# Time configuration
HOURS_TO_GENERATE = 6
INTERVAL_MINUTES = 5

# (baseline, jitter) per sensor type name
BASELINES = {
    "Temperature Sensor": (19.0, 1.5),
    "Humidity Sensor": (70.0, 5.0),
    "Pressure Sensor": (7.0, 0.5),
    "pH Sensor": (6.8, 0.2),
    "EC Sensor": (1.8, 0.3),
}

# Temperature drifts into the warning band over the last hour
INCIDENT_SENSOR_TYPE = "Temperature Sensor"
INCIDENT_DRIFT_PER_HOUR = 6.0


def generate_values(
    type_name: str,
    start_time: datetime,
    end_time: datetime,
) -> list[tuple[datetime, float]]:
    """Generate (timestamp, value) pairs with a random walk around the baseline."""
    base, jitter = BASELINES[type_name]
    incident_start = end_time - timedelta(hours=1)
    values = []
    current_time = start_time
    while current_time <= end_time:
        value = base + random.uniform(-jitter, jitter)
        if type_name == INCIDENT_SENSOR_TYPE and current_time >= incident_start:
            hours_into_incident = (current_time - incident_start).total_seconds() / 3600
            value += hours_into_incident * INCIDENT_DRIFT_PER_HOUR
        values.append((current_time, round(value, 2)))
        current_time += timedelta(minutes=INTERVAL_MINUTES)
    return values


async def generate_all_data() -> None:
    """Feed generated readings for every demo sensor through the pipeline."""
    random.seed(RANDOM_SEED)
    end_time = utc_now()
    start_time = end_time - timedelta(hours=HOURS_TO_GENERATE)
    notifier = CascadeNotifier(
        broadcaster=EventBroadcaster(),
        aggregator=DeviceAlertAggregator(session_factory=async_session),
    )

    async with async_session() as session:
        result = await session.execute(
            select(DeviceSensor)
            .join(SensorType, SensorType.id == DeviceSensor.sensor_type_id)
            .where(DeviceSensor.device_id == DEMO_DEVICE_ID)
        )
        sensors = list(result.unique().scalars())
        if not sensors:
            print("No demo sensors found, run seed_sensor_types.py first.")
            return

        for sensor in sensors:
            stored = rejected = 0
            for timestamp, value in generate_values(sensor.sensor_type.name, start_time, end_time):
                try:
                    await process_reading(session, sensor, value, timestamp, notifier)
                    stored += 1
                except ReadingValidationError:
                    rejected += 1
            print(f"  {sensor.sensor_type.name}: {stored} stored, {rejected} rejected")

    await notifier.drain()


if __name__ == "__main__":
    asyncio.run(generate_all_data())
