"""In-process event broadcasting to live dashboard subscribers."""

import asyncio
import logging
from collections import defaultdict

from sensorhealth.config import BROADCAST_THROTTLE_SECONDS
from sensorhealth.schemas.events import DashboardEvent

__all__ = ["EventBroadcaster", "ThrottledBroadcaster"]

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 100


class EventBroadcaster:
    """Fan-out of dashboard events to subscriber queues.

    Publishing never blocks: a subscriber whose queue is full misses the event.
    Consumers must tolerate missed and duplicated events anyway, since status
    can always be recomputed with a refresh.
    """

    def __init__(self, queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        self._queue_size = queue_size
        self._subscribers: set[asyncio.Queue[DashboardEvent]] = set()

    def subscribe(self) -> asyncio.Queue[DashboardEvent]:
        queue: asyncio.Queue[DashboardEvent] = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[DashboardEvent]) -> None:
        self._subscribers.discard(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def publish(self, event: DashboardEvent) -> None:
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning(f"Subscriber queue full, dropping {event.event} event")


class ThrottledBroadcaster:
    """Batches events per sensor instance and flushes each batch after a delay.

    The first event for a sensor schedules a flush ``interval`` seconds later;
    events arriving before then join the same batch. Batches are published to
    the wrapped broadcaster in arrival order.

    Only tasks still sleeping are kept in ``_flushes``; once a batch has been
    taken for publishing its task moves to ``_publishing`` and is never cancelled.
    """

    def __init__(self, inner, interval: float = BROADCAST_THROTTLE_SECONDS) -> None:
        self._inner = inner
        self._interval = interval
        self._batches: dict[int, list[DashboardEvent]] = defaultdict(list)
        self._flushes: dict[int, asyncio.Task] = {}
        self._publishing: set[asyncio.Task] = set()

    async def publish(self, event: DashboardEvent) -> None:
        key = event.sensor_instance_id
        self._batches[key].append(event)
        if key not in self._flushes:
            self._flushes[key] = asyncio.get_running_loop().create_task(self._flush_later(key))

    async def flush(self) -> None:
        """Publish every pending batch now and wait for batches already in flight."""
        for task in list(self._flushes.values()):
            task.cancel()
        self._flushes.clear()
        for key in list(self._batches):
            await self._publish_batch(key)
        if self._publishing:
            await asyncio.gather(*list(self._publishing), return_exceptions=True)

    async def _flush_later(self, key: int) -> None:
        await asyncio.sleep(self._interval)
        self._flushes.pop(key, None)
        task = asyncio.current_task()
        self._publishing.add(task)
        try:
            await self._publish_batch(key)
        finally:
            self._publishing.discard(task)

    async def _publish_batch(self, key: int) -> None:
        batch = self._batches.pop(key, [])
        if not batch:
            return
        logger.debug(f"Flushing {len(batch)} events for sensor {key}")
        for event in batch:
            try:
                await self._inner.publish(event)
            except Exception:
                logger.exception(f"Broadcast of {event.event} for sensor {key} failed")
