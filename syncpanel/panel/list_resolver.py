"""Fetch the provider's lists for the current key and reconcile the selection."""
from __future__ import annotations

from syncpanel.logging_config import get_logger
from syncpanel.panel.errors import ListProviderError
from syncpanel.panel.integration import (
    UNVALIDATED,
    VALID,
    VALIDATING,
    IntegrationConfig,
    MailingList,
    Validation,
)
from syncpanel.panel.interfaces import ListProvider

logger = get_logger("syncpanel.panel.list_resolver")


def reconcile(current: MailingList | None, lists: list[MailingList]) -> MailingList | None:
    """Keep the current selection if it still exists (with its fresh name), else the first list."""
    if not lists:
        return None
    if current is not None:
        for item in lists:
            if item.id == current.id:
                return item
    return lists[0]


class ListResolver:
    """Runs on API key blur. Provider errors only mark the key invalid; they never alert."""

    def __init__(self, model: IntegrationConfig, provider: ListProvider):
        self.model = model
        self.provider = provider
        self.available_lists: list[MailingList] = []

    async def resolve(self) -> Validation:
        api_key = self.model.api_key
        if not api_key:
            self.model.validation = UNVALIDATED
            self.available_lists = []
            return self.model.validation

        self.model.validation = VALIDATING
        try:
            lists = await self.provider.fetch_lists(api_key)
        except ListProviderError as e:
            if self.model.api_key != api_key:
                logger.debug("Discarding list error for a superseded API key")
                return self.model.validation
            logger.info("List fetch failed: %s", e.reason)
            self.model.validation = Validation.invalid(e.reason)
            self.available_lists = []
            return self.model.validation

        if self.model.api_key != api_key:
            # key edited while the request was in flight
            logger.debug("Discarding lists for a superseded API key")
            return self.model.validation

        self.available_lists = list(lists)
        self.model.validation = VALID
        self.model.set_active_list(reconcile(self.model.active_list, self.available_lists))
        logger.debug(
            "Resolved %d lists, selected %s",
            len(self.available_lists),
            self.model.active_list.id if self.model.active_list else None,
        )
        return self.model.validation

    def find(self, list_id: str) -> MailingList | None:
        for item in self.available_lists:
            if item.id == list_id:
                return item
        return None
