import asyncio
from datetime import timedelta

import pytest

from syncpanel.panel import PollerState, SettingsServerError, SyncPoller, SyncSchedule


def _current_schedule(store):
    return SyncSchedule.from_settings(store.document["scheduling"])


def test_stops_once_next_sync_changes(store, now):
    schedule = _current_schedule(store)
    poller = SyncPoller(store, schedule, interval=0)
    store.simulate_sync(on_fetch=3, last_sync_at=now, next_sync_at=now + timedelta(hours=24))

    async def scenario():
        poller.start()
        await poller.wait()

    asyncio.run(scenario())
    assert poller.ticks == 3
    assert poller.state == PollerState.IDLE
    assert schedule.last_sync_at == now
    assert schedule.next_sync_at == now + timedelta(hours=24)


def test_fetch_errors_are_retried(store, now):
    schedule = _current_schedule(store)
    poller = SyncPoller(store, schedule, interval=0)
    store.fetch_errors = [SettingsServerError("down"), SettingsServerError("still down")]
    store.simulate_sync(on_fetch=1, last_sync_at=now, next_sync_at=now + timedelta(hours=24))

    async def scenario():
        poller.start()
        await poller.wait()

    asyncio.run(scenario())
    assert poller.ticks == 3
    assert schedule.next_sync_at == now + timedelta(hours=24)


@pytest.mark.parametrize("unreadable", [
    "{not json",
    "null",
    "[]",
    '{"subscribers": 5}',
    '{"subscribers": {"lastSyncAt": [1]}}',
])
def test_unreadable_schedule_is_retried(store, now, unreadable):
    schedule = _current_schedule(store)
    poller = SyncPoller(store, schedule, interval=0)
    original = store.document["scheduling"]
    store.document["scheduling"] = unreadable

    async def scenario():
        poller.start()
        while poller.ticks < 2:
            await asyncio.sleep(0)
        store.simulate_sync(on_fetch=0, last_sync_at=now, next_sync_at=now + timedelta(hours=24))
        await poller.wait()

    asyncio.run(scenario())
    assert original != store.document["scheduling"]
    assert schedule.last_sync_at == now


def test_cancel_stops_writes(store, now):
    schedule = _current_schedule(store)
    before = schedule.marker()
    poller = SyncPoller(store, schedule, interval=0)

    async def scenario():
        poller.start()
        while poller.ticks < 2:
            await asyncio.sleep(0)
        poller.cancel()
        ticks = poller.ticks
        store.simulate_sync(on_fetch=0, last_sync_at=now, next_sync_at=now + timedelta(hours=24))
        for _ in range(10):
            await asyncio.sleep(0)
        return ticks

    ticks = asyncio.run(scenario())
    assert poller.state == PollerState.IDLE
    assert poller.ticks == ticks
    assert schedule.marker() == before


def test_start_supersedes_previous_poll(store):
    poller = SyncPoller(store, _current_schedule(store), interval=0)

    async def scenario():
        first = poller.start()
        second = poller.start()
        await asyncio.sleep(0)
        cancelled = first.cancelled()
        poller.cancel()
        return cancelled, second

    cancelled, second = asyncio.run(scenario())
    assert cancelled is True


def test_schedule_reads_and_writes_settings_value(scheduling, now):
    schedule = SyncSchedule.from_settings(scheduling(now, now + timedelta(hours=24)))
    assert schedule.readonly is True
    assert schedule.next_sync_at - schedule.last_sync_at == timedelta(hours=24)
    assert SyncSchedule.from_settings(schedule.to_settings()).marker() == schedule.marker()


def test_missing_schedule_is_empty():
    assert SyncSchedule.from_settings(None).is_empty
    assert SyncSchedule.from_settings('{"readonly": true}').is_empty


@pytest.mark.parametrize("value", ["null", "[]", '{"subscribers": "soon"}'])
def test_schedule_that_is_not_an_object_is_rejected(value):
    with pytest.raises(ValueError):
        SyncSchedule.from_settings(value)


def test_closed_poller_does_not_start(store):
    poller = SyncPoller(store, _current_schedule(store), interval=0)

    async def scenario():
        poller.start()
        poller.close()
        return poller.start()

    assert asyncio.run(scenario()) is None
    assert poller.state == PollerState.IDLE
    assert store.fetch_count == 0
