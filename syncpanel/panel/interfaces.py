"""Collaborators the panel depends on. Concrete versions live in syncpanel.services."""
from typing import Any, Protocol

from syncpanel.panel.integration import MailingList


class SettingsStore(Protocol):
    async def fetch(self) -> dict[str, Any]:
        """Return the whole settings document as a flat key -> value mapping."""
        ...

    async def save(self, key: str, value: Any) -> dict[str, Any]:
        """Persist one key and return the refreshed document.

        Raises SettingsValidationError or SettingsServerError.
        """
        ...


class ListProvider(Protocol):
    async def fetch_lists(self, api_key: str) -> list[MailingList]:
        """Ordered lists for the key. Raises ListProviderError."""
        ...


class Notifier(Protocol):
    def alert(self, message: str) -> None:
        ...
