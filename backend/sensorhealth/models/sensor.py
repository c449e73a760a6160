"""Sensor instance model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sensorhealth.database import Base
from sensorhealth.domain import utc_now


class DeviceSensor(Base):
    """A sensor of one type mounted on one device."""

    __tablename__ = "device_sensors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    device_id: Mapped[str] = mapped_column(String(50), ForeignKey("devices.id"), nullable=False)
    sensor_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sensor_types.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)

    device: Mapped["Device"] = relationship(back_populates="sensors")
    sensor_type: Mapped["SensorType"] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint("device_id", "sensor_type_id", name="uq_device_sensor_type"),
    )


# Import here to avoid circular imports
from sensorhealth.models.device import Device  # noqa: E402, F401
from sensorhealth.models.sensor_type import SensorType  # noqa: E402, F401
