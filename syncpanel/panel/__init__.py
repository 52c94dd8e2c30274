"""Mailchimp settings panel core."""
from syncpanel.panel.errors import (
    ListProviderError,
    SettingsServerError,
    SettingsStoreError,
    SettingsValidationError,
)
from syncpanel.panel.integration import (
    IntegrationConfig,
    IntegrationSnapshot,
    MailingList,
    Validation,
    ValidationStatus,
)
from syncpanel.panel.list_resolver import ListResolver
from syncpanel.panel.panel import MailchimpSettingsPanel
from syncpanel.panel.save_coordinator import SaveCoordinator, SaveOutcome, SaveState
from syncpanel.panel.schedule import SyncSchedule
from syncpanel.panel.sync_poller import PollerState, SyncPoller
from syncpanel.panel.time_format import SyncDescription, describe

__all__ = [
    "ListProviderError",
    "SettingsServerError",
    "SettingsStoreError",
    "SettingsValidationError",
    "IntegrationConfig",
    "IntegrationSnapshot",
    "MailingList",
    "Validation",
    "ValidationStatus",
    "ListResolver",
    "MailchimpSettingsPanel",
    "SaveCoordinator",
    "SaveOutcome",
    "SaveState",
    "SyncSchedule",
    "PollerState",
    "SyncPoller",
    "SyncDescription",
    "describe",
]
