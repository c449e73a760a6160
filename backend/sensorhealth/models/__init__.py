"""SQLAlchemy models."""

from sensorhealth.models.device import Device
from sensorhealth.models.health import SensorHealth
from sensorhealth.models.readings import SensorReading
from sensorhealth.models.sensor import DeviceSensor
from sensorhealth.models.sensor_type import SensorType

__all__ = [
    "SensorType",
    "Device",
    "DeviceSensor",
    "SensorReading",
    "SensorHealth",
]
