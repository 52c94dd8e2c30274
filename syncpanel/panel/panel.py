"""Mailchimp settings panel: wires user triggers to the model, resolver, saver and poller."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from syncpanel.config import settings
from syncpanel.logging_config import get_logger
from syncpanel.panel.integration import IntegrationConfig, MailingList, Validation
from syncpanel.panel.interfaces import ListProvider, Notifier, SettingsStore
from syncpanel.panel.list_resolver import ListResolver
from syncpanel.panel.save_coordinator import SETTINGS_KEY, SaveCoordinator, SaveOutcome, SaveState
from syncpanel.panel.schedule import SyncSchedule
from syncpanel.panel.sync_poller import SyncPoller
from syncpanel.panel.time_format import SyncDescription, describe

logger = get_logger("syncpanel.panel")

SAVE_SHORTCUT_KEY = "s"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MailchimpSettingsPanel:
    """
    One open settings screen.

    Each instance owns its model, schedule, save state and poll task; nothing
    is shared between panels. All collaborators are passed in.
    """

    def __init__(
        self,
        store: SettingsStore,
        list_provider: ListProvider,
        notifier: Notifier,
        subscribers_enabled: bool | None = None,
        clock: Callable[[], datetime] = utcnow,
        poll_interval: float | None = None,
    ):
        self.store = store
        self.notifier = notifier
        self.clock = clock
        self.subscribers_enabled = (
            settings.subscribers_enabled if subscribers_enabled is None else subscribers_enabled
        )
        self.model = IntegrationConfig()
        self.schedule = SyncSchedule()
        self.poller = SyncPoller(
            store,
            self.schedule,
            interval=settings.sync_poll_interval if poll_interval is None else poll_interval,
        )
        self.resolver = ListResolver(self.model, list_provider)
        self.saver = SaveCoordinator(self.model, store, notifier, self.poller)
        self.sync_hidden = False
        self.destroyed = False

    async def load(self) -> None:
        """Hydrate from the store, then fetch lists for the stored key."""
        if self.destroyed:
            return
        document = await self.store.fetch()
        stored = IntegrationConfig.from_settings(document.get(SETTINGS_KEY))
        self.model.restore(stored.snapshot())
        self.schedule.update_from(SyncSchedule.from_settings(document.get("scheduling")))
        self.saver.persisted = stored.snapshot()
        self.sync_hidden = False
        logger.debug("Panel loaded (active=%s)", self.model.is_active)
        if self.model.api_key:
            await self.resolver.resolve()

    # triggers

    def toggle_active(self) -> bool:
        if self.destroyed:
            return False
        return self.model.set_is_active(not self.model.is_active)

    def edit_api_key(self, value: str) -> None:
        if self.destroyed:
            return
        self.model.set_api_key(value)

    async def blur_api_key(self) -> Validation:
        if self.destroyed:
            return self.model.validation
        return await self.resolver.resolve()

    def select_list(self, list_id: str) -> bool:
        if self.destroyed:
            return False
        selected = self.resolver.find(list_id)
        if selected is None:
            logger.debug("Ignoring selection of unknown list %s", list_id)
            return False
        self.model.set_active_list(selected)
        self.sync_hidden = True
        return True

    async def save(self) -> SaveOutcome:
        if self.destroyed:
            return SaveOutcome.BLOCKED
        outcome = await self.saver.save()
        if outcome == SaveOutcome.SAVED:
            self.sync_hidden = False
        return outcome

    async def handle_key(self, key: str, meta: bool = False, ctrl: bool = False) -> SaveOutcome | None:
        """Cmd-S / Ctrl-S saves; other keys are not handled."""
        if key.lower() == SAVE_SHORTCUT_KEY and (meta or ctrl):
            return await self.save()
        return None

    def destroy(self) -> None:
        """Tear down: stop polling so no tick writes into this panel again."""
        self.destroyed = True
        self.poller.close()
        logger.debug("Panel destroyed")

    # display state

    @property
    def available_lists(self) -> list[MailingList]:
        return self.resolver.available_lists

    @property
    def save_state(self) -> SaveState:
        return self.saver.state

    @property
    def save_label(self) -> str:
        return self.saver.state.label

    @property
    def can_save(self) -> bool:
        return not self.destroyed and not self.saver.in_flight and self.saver.blocked_reason() is None

    @property
    def show_subscribers_warning(self) -> bool:
        return not self.subscribers_enabled

    def sync_info(self, now: datetime | None = None) -> SyncDescription | None:
        """Sync status to render; None while hidden after a list change."""
        if self.sync_hidden:
            return None
        return describe(self.schedule, now or self.clock(), is_active=self.model.is_active)
