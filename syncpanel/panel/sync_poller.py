"""Poll the settings store until the subscriber sync schedule moves."""
from __future__ import annotations

import asyncio
from datetime import datetime
from enum import Enum

from syncpanel.logging_config import get_logger
from syncpanel.panel.errors import SettingsStoreError
from syncpanel.panel.interfaces import SettingsStore
from syncpanel.panel.schedule import SyncSchedule

logger = get_logger("syncpanel.panel.sync_poller")

Marker = tuple[datetime | None, datetime | None]


class PollerState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"


class SyncPoller:
    """
    Repeating task bound to one panel.

    Every `interval` seconds the settings document is re-fetched and the
    shared `schedule` is overwritten with the server's values. Polling stops
    once last/next sync differ from the values recorded at `start()`. Fetch
    errors are logged and retried on the next tick; only `cancel()` ends a
    poll that never sees a change. After `close()` the poller never starts
    again.
    """

    def __init__(self, store: SettingsStore, schedule: SyncSchedule, interval: float = 5.0):
        self.store = store
        self.schedule = schedule
        self.interval = interval
        self.ticks = 0
        self.closed = False
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> PollerState:
        if self._task is not None and not self._task.done():
            return PollerState.POLLING
        return PollerState.IDLE

    def start(self, baseline: Marker | None = None) -> asyncio.Task | None:
        """Start polling, superseding any poll already running. No-op once closed."""
        self.cancel()
        if self.closed:
            logger.debug("Sync polling not started, poller is closed")
            return None
        if baseline is None:
            baseline = self.schedule.marker()
        self.ticks = 0
        self._task = asyncio.create_task(self._run(baseline))
        logger.info("Sync polling started (every %.1fs)", self.interval)
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Sync polling cancelled after %d ticks", self.ticks)
        self._task = None

    def close(self) -> None:
        """Cancel polling for good; later `start()` calls are ignored."""
        self.closed = True
        self.cancel()

    async def wait(self) -> None:
        """Wait for the current poll to finish (or be cancelled)."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _tick(self) -> SyncSchedule | None:
        try:
            document = await self.store.fetch()
            return SyncSchedule.from_settings(document.get("scheduling"))
        except (SettingsStoreError, ValueError) as e:
            logger.warning("Sync poll tick %d failed, retrying: %s", self.ticks, e)
            return None

    async def _run(self, baseline: Marker) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.ticks += 1
            latest = await self._tick()
            if latest is None:
                continue
            self.schedule.update_from(latest)
            if latest.marker() != baseline:
                logger.info(
                    "Sync schedule changed after %d ticks (next sync at %s)",
                    self.ticks,
                    latest.next_sync_at.isoformat() if latest.next_sync_at else None,
                )
                return
