#!/usr/bin/env python3
"""Seed the sensor type catalog and a demo device into the database."""

import asyncio
import sys
from datetime import timedelta
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sensorhealth.database import async_session
from sensorhealth.domain import utc_now
from sensorhealth.models import Device
from sensorhealth.services.device_service import provision_device
from sensorhealth.services.sensor_type_service import seed_sensor_types

DEMO_DEVICE_ID = "greenhouse-01"
DEMO_DEVICE_NAME = "Greenhouse Controller 01"
DEMO_SENSOR_TYPES = ["temperature", "humidity", "pressure", "ph", "ec"]

# Backdated so generated history counts towards health
DEMO_PROVISIONED_HOURS_AGO = 48


async def seed_catalog_and_device() -> None:
    """Seed sensor types and the demo device (idempotent)."""
    async with async_session() as session:
        sensor_types = await seed_sensor_types(session)
        print(f"Sensor type catalog holds {len(sensor_types)} definitions.")

        if await session.get(Device, DEMO_DEVICE_ID):
            print("Demo device already provisioned, skipping.")
            return

        await provision_device(
            session,
            DEMO_DEVICE_ID,
            DEMO_DEVICE_NAME,
            DEMO_SENSOR_TYPES,
            provisioned_at=utc_now() - timedelta(hours=DEMO_PROVISIONED_HOURS_AGO),
        )
        print(f"Provisioned {DEMO_DEVICE_ID} with {len(DEMO_SENSOR_TYPES)} sensors.")


if __name__ == "__main__":
    asyncio.run(seed_catalog_and_device())
