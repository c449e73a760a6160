"""Pydantic schemas for reading ingestion and history."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sensorhealth.domain import Status, Zone


class IngestRequest(BaseModel):
    """One incoming reading.

    ``value`` is passed through untouched so the ingestor alone decides what
    counts as numeric; booleans and numeric strings are rejected there.
    """

    sensor_instance_id: int
    value: Any = None
    timestamp: datetime | None = None


class ReadingOut(BaseModel):
    """A stored reading."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    sensor_id: int = Field(serialization_alias="sensorId")
    value: float
    timestamp: datetime
    zone: Zone
    created_at: datetime = Field(serialization_alias="createdAt")


class IngestResponse(BaseModel):
    """Stored reading plus the health status computed right after it."""

    model_config = ConfigDict(populate_by_name=True)

    reading: ReadingOut
    status: Status | None = None


class ReadingsHistoryResponse(BaseModel):
    """Newest-first reading history for one sensor instance."""

    model_config = ConfigDict(populate_by_name=True)

    sensor_id: int = Field(serialization_alias="sensorId")
    sensor_type: str = Field(serialization_alias="sensorType")
    unit: str
    readings: list[ReadingOut]
