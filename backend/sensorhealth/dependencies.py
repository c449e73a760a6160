"""Process-wide collaborators injected into routes."""

from functools import lru_cache

from sensorhealth.config import BROADCAST_THROTTLE_SECONDS
from sensorhealth.database import get_session
from sensorhealth.services.alert_service import DeviceAlertAggregator
from sensorhealth.services.broadcast import EventBroadcaster, ThrottledBroadcaster
from sensorhealth.services.cascade import CascadeNotifier


@lru_cache
def get_broadcaster() -> EventBroadcaster:
    """Broadcaster that dashboard consumers subscribe to."""
    return EventBroadcaster()


@lru_cache
def get_throttled_broadcaster() -> ThrottledBroadcaster:
    return ThrottledBroadcaster(get_broadcaster(), interval=BROADCAST_THROTTLE_SECONDS)


@lru_cache
def get_notifier() -> CascadeNotifier:
    """Cascade notifier wired to the throttled broadcaster and the device alert aggregator."""
    return CascadeNotifier(
        broadcaster=get_throttled_broadcaster(),
        aggregator=DeviceAlertAggregator(session_factory=get_session),
    )
