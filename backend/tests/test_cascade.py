"""Tests for the cascade notifier and the dashboard broadcasters."""

import asyncio
import logging
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from sensorhealth.domain import Status, Zone
from sensorhealth.schemas.events import ReadingCommittedEvent, SensorStatusChangedEvent
from sensorhealth.services.broadcast import EventBroadcaster, ThrottledBroadcaster
from sensorhealth.services.cascade import CascadeNotifier

SENSOR = SimpleNamespace(id=7, device_id="device-9")
READING = SimpleNamespace(
    sensor_id=7, value=21.0, zone="normal", timestamp=datetime(2026, 1, 29, 10, 0)
)


def _reading_event(sensor_id: int = 7, value: float = 21.0) -> ReadingCommittedEvent:
    return ReadingCommittedEvent(
        sensor_instance_id=sensor_id,
        value=value,
        zone=Zone.NORMAL,
        timestamp=datetime(2026, 1, 29, 10, 0),
    )


class TestCascadeNotifier:
    """Tests for CascadeNotifier."""

    @pytest.mark.asyncio
    async def test_reading_committed_is_broadcast(self):
        broadcaster = AsyncMock()
        notifier = CascadeNotifier(broadcaster=broadcaster)

        notifier.notify_reading_committed(READING)
        await notifier.drain()

        event = broadcaster.publish.await_args.args[0]
        assert event == _reading_event()

    @pytest.mark.asyncio
    async def test_status_change_broadcasts_and_triggers_device_recompute(self):
        broadcaster = AsyncMock()
        aggregator = AsyncMock()
        notifier = CascadeNotifier(broadcaster=broadcaster, aggregator=aggregator)

        notifier.notify_status_changed(SENSOR, Status.OK, Status.ERROR)
        await notifier.drain()

        event = broadcaster.publish.await_args.args[0]
        assert event == SensorStatusChangedEvent(
            sensor_instance_id=7,
            device_id="device-9",
            old_status=Status.OK,
            new_status=Status.ERROR,
        )
        aggregator.recompute_device_alert_status.assert_awaited_once_with("device-9")

    @pytest.mark.asyncio
    async def test_unchanged_status_is_suppressed(self):
        broadcaster = AsyncMock()
        aggregator = AsyncMock()
        notifier = CascadeNotifier(broadcaster=broadcaster, aggregator=aggregator)

        notifier.notify_status_changed(SENSOR, Status.WARNING, Status.WARNING)
        await notifier.drain()

        broadcaster.publish.assert_not_awaited()
        aggregator.recompute_device_alert_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_broadcast_failure_is_logged_not_raised(self, caplog):
        broadcaster = AsyncMock()
        broadcaster.publish.side_effect = ConnectionError("dashboard gone")
        notifier = CascadeNotifier(broadcaster=broadcaster)

        with caplog.at_level(logging.ERROR, logger="sensorhealth.services.cascade"):
            notifier.notify_reading_committed(READING)
            await notifier.drain()

        assert "Notification failed: reading_committed sensor=7" in caplog.text
        assert notifier.pending == 0

    @pytest.mark.asyncio
    async def test_aggregator_failure_does_not_block_broadcast(self):
        broadcaster = AsyncMock()
        aggregator = AsyncMock()
        aggregator.recompute_device_alert_status.side_effect = RuntimeError("store down")
        notifier = CascadeNotifier(broadcaster=broadcaster, aggregator=aggregator)

        notifier.notify_status_changed(SENSOR, Status.NO_DATA, Status.OK)
        await notifier.drain()

        broadcaster.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_notify_returns_before_broadcast_completes(self):
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_publish(event):
            started.set()
            await release.wait()

        broadcaster = AsyncMock()
        broadcaster.publish.side_effect = slow_publish
        notifier = CascadeNotifier(broadcaster=broadcaster)

        notifier.notify_reading_committed(READING)
        assert notifier.pending == 1

        await started.wait()
        release.set()
        await notifier.drain()
        assert notifier.pending == 0


class TestEventBroadcaster:
    """Tests for the in-process pub/sub broadcaster."""

    @pytest.mark.asyncio
    async def test_fans_out_to_all_subscribers(self):
        broadcaster = EventBroadcaster()
        first = broadcaster.subscribe()
        second = broadcaster.subscribe()

        await broadcaster.publish(_reading_event())

        assert first.get_nowait() == _reading_event()
        assert second.get_nowait() == _reading_event()

    @pytest.mark.asyncio
    async def test_unsubscribed_queue_receives_nothing(self):
        broadcaster = EventBroadcaster()
        queue = broadcaster.subscribe()
        broadcaster.unsubscribe(queue)

        await broadcaster.publish(_reading_event())

        assert queue.empty()
        assert broadcaster.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_full_queue_drops_event(self, caplog):
        broadcaster = EventBroadcaster(queue_size=1)
        queue = broadcaster.subscribe()

        await broadcaster.publish(_reading_event(value=1.0))
        with caplog.at_level(logging.WARNING, logger="sensorhealth.services.broadcast"):
            await broadcaster.publish(_reading_event(value=2.0))

        assert queue.qsize() == 1
        assert queue.get_nowait().value == 1.0
        assert "dropping reading_committed" in caplog.text


class TestThrottledBroadcaster:
    """Tests for per-sensor batching of dashboard events."""

    @pytest.mark.asyncio
    async def test_batches_are_published_after_interval_in_order(self):
        inner = AsyncMock()
        throttled = ThrottledBroadcaster(inner, interval=0.05)

        await throttled.publish(_reading_event(value=1.0))
        await throttled.publish(_reading_event(value=2.0))
        inner.publish.assert_not_awaited()

        await asyncio.sleep(0.15)

        values = [call.args[0].value for call in inner.publish.await_args_list]
        assert values == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_flush_publishes_pending_batches_immediately(self):
        inner = AsyncMock()
        throttled = ThrottledBroadcaster(inner, interval=60)

        await throttled.publish(_reading_event(sensor_id=1))
        await throttled.publish(_reading_event(sensor_id=2))
        await throttled.flush()

        sensor_ids = sorted(call.args[0].sensor_instance_id for call in inner.publish.await_args_list)
        assert sensor_ids == [1, 2]

    @pytest.mark.asyncio
    async def test_inner_failure_does_not_stop_batch(self):
        inner = AsyncMock()
        inner.publish.side_effect = [ConnectionError("gone"), None]
        throttled = ThrottledBroadcaster(inner, interval=60)

        await throttled.publish(_reading_event(value=1.0))
        await throttled.publish(_reading_event(value=2.0))
        await throttled.flush()

        assert inner.publish.await_count == 2

    @pytest.mark.asyncio
    async def test_flush_waits_for_batch_already_being_published(self):
        published = []

        async def slow_publish(event):
            await asyncio.sleep(0.05)
            published.append(event.value)

        inner = AsyncMock()
        inner.publish.side_effect = slow_publish
        throttled = ThrottledBroadcaster(inner, interval=0.01)

        await throttled.publish(_reading_event(value=1.0))
        await throttled.publish(_reading_event(value=2.0))
        await asyncio.sleep(0.03)  # timed flush is now inside the first publish

        await throttled.flush()

        assert published == [1.0, 2.0]
