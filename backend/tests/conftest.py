"""Shared fixtures: a throwaway SQLite database and a provisioned temperature sensor."""

import os
import tempfile
from datetime import timedelta
from pathlib import Path
from unittest.mock import AsyncMock

# Must run before anything imports sensorhealth.config
_TMP_DIR = Path(tempfile.mkdtemp(prefix="sensorhealth-tests-"))
os.environ["DATABASE_PATH"] = str(_TMP_DIR / "test.db")
os.environ["LOG_DIR"] = str(_TMP_DIR / "logs")

import pytest  # noqa: E402
from sqlalchemy import select  # noqa: E402

from sensorhealth.database import async_session, create_tables, drop_tables, engine  # noqa: E402
from sensorhealth.domain import utc_now  # noqa: E402
from sensorhealth.models import DeviceSensor  # noqa: E402
from sensorhealth.services.cascade import CascadeNotifier  # noqa: E402
from sensorhealth.services.device_service import (  # noqa: E402
    get_device_sensor,
    provision_device,
)
from sensorhealth.services.sensor_type_service import seed_sensor_types  # noqa: E402

DEVICE_ID = "device-1"


@pytest.fixture(autouse=True)
async def database():
    """Fresh schema for every test."""
    await create_tables()
    yield
    await drop_tables()
    await engine.dispose()


@pytest.fixture
async def session():
    async with async_session() as session:
        yield session


@pytest.fixture
async def device(session):
    """Device with a temperature and a humidity sensor, provisioned a day ago."""
    await seed_sensor_types(session)
    return await provision_device(
        session,
        DEVICE_ID,
        "Test Device",
        ["temperature", "humidity"],
        provisioned_at=utc_now() - timedelta(days=1),
    )


@pytest.fixture
async def temperature_sensor(session, device):
    sensors = await _device_sensors(session)
    return sensors["Temperature Sensor"]


@pytest.fixture
async def humidity_sensor(session, device):
    sensors = await _device_sensors(session)
    return sensors["Humidity Sensor"]


async def _device_sensors(session):
    result = await session.execute(
        select(DeviceSensor.id).where(DeviceSensor.device_id == DEVICE_ID)
    )
    sensor_ids = list(result.scalars())
    sensors = [await get_device_sensor(session, sensor_id) for sensor_id in sensor_ids]
    return {sensor.sensor_type.name: sensor for sensor in sensors}


@pytest.fixture
def broadcaster():
    return AsyncMock()


@pytest.fixture
def aggregator():
    return AsyncMock()


@pytest.fixture
async def notifier(broadcaster, aggregator):
    notifier = CascadeNotifier(broadcaster=broadcaster, aggregator=aggregator)
    yield notifier
    await notifier.drain()
