"""Device model."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sensorhealth.database import Base
from sensorhealth.domain import Status, utc_now


class Device(Base):
    """Physical device carrying one sensor instance per sensor type."""

    __tablename__ = "devices"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    alert_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Status.NO_DATA.value
    )
    alert_status_updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)

    sensors: Mapped[list["DeviceSensor"]] = relationship(back_populates="device")


# Import here to avoid circular imports
from sensorhealth.models.sensor import DeviceSensor  # noqa: E402, F401
