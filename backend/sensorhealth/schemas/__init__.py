"""Pydantic schemas for API request/response models and emitted events."""

from sensorhealth.schemas.events import (
    DashboardEvent,
    ReadingCommittedEvent,
    SensorStatusChangedEvent,
)
from sensorhealth.schemas.health import (
    DeviceCreateRequest,
    DeviceAlertResponse,
    SensorHealthResponse,
    SensorStatusSummary,
)
from sensorhealth.schemas.readings import (
    IngestRequest,
    IngestResponse,
    ReadingOut,
    ReadingsHistoryResponse,
)
from sensorhealth.schemas.sensor_type import ClassificationResponse, SensorTypeOut

__all__ = [
    # Sensor type schemas
    "SensorTypeOut",
    "ClassificationResponse",
    # Reading schemas
    "IngestRequest",
    "IngestResponse",
    "ReadingOut",
    "ReadingsHistoryResponse",
    # Health schemas
    "SensorHealthResponse",
    "SensorStatusSummary",
    "DeviceCreateRequest",
    "DeviceAlertResponse",
    # Event schemas
    "DashboardEvent",
    "ReadingCommittedEvent",
    "SensorStatusChangedEvent",
]
