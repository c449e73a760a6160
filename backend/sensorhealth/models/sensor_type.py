"""Sensor type catalog model."""

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sensorhealth.database import Base
from sensorhealth.domain import utc_now


class SensorType(Base):
    """Kind of physical sensor with its absolute range and five threshold bands."""

    __tablename__ = "sensor_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    min_value: Mapped[float] = mapped_column(Float, nullable=False)
    max_value: Mapped[float] = mapped_column(Float, nullable=False)

    error_low_min: Mapped[float] = mapped_column(Float, nullable=False)
    error_low_max: Mapped[float] = mapped_column(Float, nullable=False)
    warning_low_min: Mapped[float] = mapped_column(Float, nullable=False)
    warning_low_max: Mapped[float] = mapped_column(Float, nullable=False)
    normal_min: Mapped[float] = mapped_column(Float, nullable=False)
    normal_max: Mapped[float] = mapped_column(Float, nullable=False)
    warning_high_min: Mapped[float] = mapped_column(Float, nullable=False)
    warning_high_max: Mapped[float] = mapped_column(Float, nullable=False)
    error_high_min: Mapped[float] = mapped_column(Float, nullable=False)
    error_high_max: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
