"""Validated save with rollback on failure."""
from __future__ import annotations

import json
from enum import Enum

from syncpanel.logging_config import get_logger
from syncpanel.panel.errors import SettingsStoreError
from syncpanel.panel.integration import IntegrationConfig, IntegrationSnapshot
from syncpanel.panel.interfaces import Notifier, SettingsStore
from syncpanel.panel.sync_poller import SyncPoller

logger = get_logger("syncpanel.panel.save_coordinator")

SETTINGS_KEY = "mailchimp"


class SaveState(str, Enum):
    """State of the save control."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    SaveState.IDLE: "Save",
    SaveState.RUNNING: "Saving",
    SaveState.SUCCEEDED: "Saved",
    SaveState.FAILED: "Retry",
}


class SaveOutcome(str, Enum):
    SAVED = "saved"
    BLOCKED = "blocked"  # precondition failed, store never contacted
    FAILED = "failed"  # store rejected the save, model rolled back
    BUSY = "busy"  # another save from this panel is still in flight


def _list_id(snapshot: IntegrationSnapshot | None) -> str | None:
    if snapshot is None or snapshot.active_list is None:
        return None
    return snapshot.active_list.id


def should_poll(previous: IntegrationSnapshot | None, current: IntegrationSnapshot) -> bool:
    """Poll when the integration was just switched on, or stays on with a different list."""
    if not current.is_active:
        return False
    if previous is None or not previous.is_active:
        return True
    return _list_id(previous) != _list_id(current)


class SaveCoordinator:
    def __init__(
        self,
        model: IntegrationConfig,
        store: SettingsStore,
        notifier: Notifier,
        poller: SyncPoller,
        persisted: IntegrationSnapshot | None = None,
    ):
        self.model = model
        self.store = store
        self.notifier = notifier
        self.poller = poller
        # last state known to be stored remotely; decides whether a save starts polling
        self.persisted = persisted
        self.state = SaveState.IDLE

    @property
    def in_flight(self) -> bool:
        return self.state == SaveState.RUNNING

    def blocked_reason(self) -> str | None:
        """Why a save can't be sent right now, or None."""
        if not self.model.api_key:
            return "API key is required"
        if not self.model.validation.is_valid:
            return "API key has not been validated"
        if self.model.is_active and self.model.active_list is None:
            return "Select a list before enabling the integration"
        return None

    async def save(self) -> SaveOutcome:
        if self.in_flight:
            logger.debug("Save ignored, previous save still running")
            return SaveOutcome.BUSY

        reason = self.blocked_reason()
        if reason:
            logger.debug("Save blocked: %s", reason)
            self.state = SaveState.FAILED
            return SaveOutcome.BLOCKED

        self.state = SaveState.RUNNING
        snapshot = self.model.snapshot()
        baseline = self.poller.schedule.marker()
        payload = json.dumps(self.model.to_settings())

        try:
            document = await self.store.save(SETTINGS_KEY, payload)
        except SettingsStoreError as e:
            self.model.restore(snapshot)
            self.state = SaveState.FAILED
            logger.warning("Saving %s settings failed (%s): %s", SETTINGS_KEY, e.error_type, e.message)
            self.notifier.alert(e.message)
            return SaveOutcome.FAILED
        except BaseException:
            self.model.restore(snapshot)
            self.state = SaveState.FAILED
            raise

        current = self._stored_snapshot(document, snapshot)
        previous, self.persisted = self.persisted, current
        self.state = SaveState.SUCCEEDED
        logger.info(
            "Saved %s settings (active=%s, list=%s)",
            SETTINGS_KEY,
            current.is_active,
            _list_id(current),
        )

        if should_poll(previous, current):
            self.poller.start(baseline)
        elif not current.is_active:
            # no sync is coming for an inactive integration
            self.poller.cancel()
        return SaveOutcome.SAVED

    def _stored_snapshot(self, document: dict | None, sent: IntegrationSnapshot) -> IntegrationSnapshot:
        """What the store reports as saved; falls back to what was sent when unreadable."""
        stored = (document or {}).get(SETTINGS_KEY)
        if not stored:
            return sent
        try:
            return IntegrationConfig.from_settings(stored).snapshot()
        except ValueError as e:
            logger.warning("Store returned unreadable %s settings, keeping sent values: %s", SETTINGS_KEY, e)
            return sent
