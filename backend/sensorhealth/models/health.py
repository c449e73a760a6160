"""Sensor health record model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sensorhealth.database import Base
from sensorhealth.domain import Status


class SensorHealth(Base):
    """Last computed health status of a sensor instance (derived, not a source of truth)."""

    __tablename__ = "sensor_health"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sensor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("device_sensors.id"), nullable=False, unique=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=Status.NO_DATA.value)
    last_reading_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sensor_readings.id"), nullable=True
    )
    last_computed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
