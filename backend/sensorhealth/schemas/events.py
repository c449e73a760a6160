"""Events pushed to live dashboards through the broadcaster."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from sensorhealth.domain import Status, Zone


class ReadingCommittedEvent(BaseModel):
    """A reading was durably stored."""

    event: Literal["reading_committed"] = "reading_committed"
    sensor_instance_id: int
    value: float
    zone: Zone
    timestamp: datetime


class SensorStatusChangedEvent(BaseModel):
    """A sensor's recomputed health status differs from the recorded one."""

    event: Literal["sensor_status_changed"] = "sensor_status_changed"
    sensor_instance_id: int
    device_id: str
    old_status: Status
    new_status: Status


DashboardEvent = ReadingCommittedEvent | SensorStatusChangedEvent
