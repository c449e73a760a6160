"""Service layer modules."""

from sensorhealth.services.alert_service import DeviceAlertAggregator, compute_alert_status
from sensorhealth.services.broadcast import EventBroadcaster, ThrottledBroadcaster
from sensorhealth.services.cascade import CascadeNotifier
from sensorhealth.services.device_service import (
    get_device_alert_view,
    get_device_sensor,
    provision_device,
    provision_sensor,
)
from sensorhealth.services.health_service import (
    compute_status,
    get_sensor_health,
    refresh_sensor_health,
)
from sensorhealth.services.pipeline import IngestOutcome, process_reading
from sensorhealth.services.reading_ingestor import ingest_reading
from sensorhealth.services.readings_service import get_reading_history
from sensorhealth.services.sensor_type_service import (
    get_sensor_type_by_name,
    list_sensor_types,
    seed_sensor_types,
)
from sensorhealth.services.zone_classifier import (
    classify,
    is_normal,
    is_valid,
    is_warning_or_error,
)

__all__ = [
    "classify",
    "is_valid",
    "is_normal",
    "is_warning_or_error",
    "ingest_reading",
    "compute_status",
    "refresh_sensor_health",
    "get_sensor_health",
    "process_reading",
    "IngestOutcome",
    "CascadeNotifier",
    "EventBroadcaster",
    "ThrottledBroadcaster",
    "DeviceAlertAggregator",
    "compute_alert_status",
    "get_reading_history",
    "provision_device",
    "provision_sensor",
    "get_device_sensor",
    "get_device_alert_view",
    "seed_sensor_types",
    "list_sensor_types",
    "get_sensor_type_by_name",
]
