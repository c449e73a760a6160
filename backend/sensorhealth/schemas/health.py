"""Pydantic schemas for sensor health and device alert status."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from sensorhealth.domain import Status


class SensorHealthResponse(BaseModel):
    """Stored health record of a sensor instance."""

    model_config = ConfigDict(populate_by_name=True)

    sensor_id: int = Field(serialization_alias="sensorId")
    status: Status
    last_reading_id: int | None = Field(default=None, serialization_alias="lastReadingId")
    last_computed_at: datetime | None = Field(default=None, serialization_alias="lastComputedAt")


class SensorStatusSummary(BaseModel):
    """Per-sensor status line inside a device view."""

    model_config = ConfigDict(populate_by_name=True)

    sensor_id: int = Field(serialization_alias="sensorId")
    sensor_type: str = Field(serialization_alias="sensorType")
    status: Status


class DeviceAlertResponse(BaseModel):
    """Device with its aggregated alert status."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    alert_status: Status = Field(serialization_alias="alertStatus")
    alert_status_updated_at: datetime | None = Field(
        default=None, serialization_alias="alertStatusUpdatedAt"
    )
    sensors: list[SensorStatusSummary]


class DeviceCreateRequest(BaseModel):
    """Provision a device with one sensor per listed sensor type."""

    id: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    sensor_types: list[str] = Field(default_factory=list)
