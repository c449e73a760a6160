"""Sensor type catalog service — seeding and lookup of type definitions."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.domain import BAND_ORDER
from sensorhealth.models import SensorType
from sensorhealth.schemas.sensor_type import Band, SensorTypeOut
from sensorhealth.services._registry import SENSOR_TYPE_CATALOG, SensorTypeDefinition
from sensorhealth.services.zone_classifier import band_bounds

__all__ = [
    "get_sensor_type_by_name",
    "list_sensor_types",
    "seed_sensor_types",
    "to_sensor_type_out",
]

logger = logging.getLogger(__name__)


async def seed_sensor_types(
    session: AsyncSession,
    catalog: dict[str, SensorTypeDefinition] | None = None,
) -> list[SensorType]:
    """Find-or-create every catalog definition by name (idempotent).

    Existing rows are left untouched: definitions are immutable once seeded,
    and already stored readings keep the zone they were stamped with.
    """
    catalog = catalog if catalog is not None else SENSOR_TYPE_CATALOG
    result = await session.execute(select(SensorType))
    existing = {sensor_type.name: sensor_type for sensor_type in result.scalars()}

    seeded: list[SensorType] = []
    created = 0
    for definition in catalog.values():
        sensor_type = existing.get(definition.name)
        if sensor_type is None:
            sensor_type = SensorType(**definition.as_columns())
            session.add(sensor_type)
            created += 1
        seeded.append(sensor_type)

    await session.commit()
    logger.info(f"Sensor type catalog seeded: {created} created, {len(seeded) - created} existing")
    return seeded


async def list_sensor_types(session: AsyncSession) -> list[SensorType]:
    result = await session.execute(select(SensorType).order_by(SensorType.name))
    return list(result.scalars())


async def get_sensor_type_by_name(session: AsyncSession, name: str) -> SensorType | None:
    """Look up a sensor type by its full name or by its short catalog key."""
    definition = SENSOR_TYPE_CATALOG.get(name)
    if definition is not None:
        name = definition.name
    result = await session.execute(select(SensorType).where(SensorType.name == name))
    return result.scalar_one_or_none()


def to_sensor_type_out(sensor_type: SensorType) -> SensorTypeOut:
    bands = []
    for zone in BAND_ORDER:
        low, high = band_bounds(sensor_type, zone)
        bands.append(Band(zone=zone, low=low, high=high))
    return SensorTypeOut(
        name=sensor_type.name,
        unit=sensor_type.unit,
        min_value=sensor_type.min_value,
        max_value=sensor_type.max_value,
        bands=bands,
    )
