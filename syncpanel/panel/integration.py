"""Editable Mailchimp integration state with snapshot/restore.

The panel owns exactly one `IntegrationConfig`. User input and the list
resolver mutate it in place; the save coordinator takes an
`IntegrationSnapshot` before every save and restores it when the save fails.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from syncpanel.logging_config import get_logger

logger = get_logger("syncpanel.panel.integration")


@dataclass(frozen=True)
class MailingList:
    """A mailing list as returned by the provider."""

    id: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name}


class ValidationStatus(str, Enum):
    """State of the last list fetch for the current API key."""

    UNVALIDATED = "unvalidated"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class Validation:
    status: ValidationStatus = ValidationStatus.UNVALIDATED
    reason: str | None = None

    @classmethod
    def invalid(cls, reason: str) -> Validation:
        return cls(ValidationStatus.INVALID, reason)

    @property
    def is_valid(self) -> bool:
        return self.status == ValidationStatus.VALID


UNVALIDATED = Validation(ValidationStatus.UNVALIDATED)
VALIDATING = Validation(ValidationStatus.VALIDATING)
VALID = Validation(ValidationStatus.VALID)


@dataclass(frozen=True)
class IntegrationSnapshot:
    """Immutable copy of every editable field."""

    is_active: bool
    api_key: str
    active_list: MailingList | None
    validation: Validation


def _parse_list(value: Any) -> MailingList | None:
    if not isinstance(value, dict) or not value.get("id"):
        return None
    return MailingList(id=str(value["id"]), name=str(value.get("name") or ""))


@dataclass
class IntegrationConfig:
    """Editable integration settings."""

    is_active: bool = False
    api_key: str = ""
    active_list: MailingList | None = None
    validation: Validation = field(default=UNVALIDATED)

    @classmethod
    def from_settings(cls, value: str | dict | None) -> IntegrationConfig:
        """Hydrate from the persisted `mailchimp` setting (JSON string or mapping)."""
        if not value:
            return cls()
        data = json.loads(value) if isinstance(value, str) else value
        if not isinstance(data, dict):
            raise ValueError(f"mailchimp setting must be an object, got {type(data).__name__}")
        return cls(
            is_active=bool(data.get("isActive", False)),
            api_key=data.get("apiKey") or "",
            active_list=_parse_list(data.get("activeList")),
        )

    def to_settings(self) -> dict[str, Any]:
        """Serialize to the persisted `mailchimp` shape. Validation is local only."""
        return {
            "isActive": self.is_active,
            "apiKey": self.api_key,
            "activeList": self.active_list.to_dict() if self.active_list else None,
        }

    def can_activate(self) -> bool:
        return bool(self.api_key) and self.validation.is_valid and self.active_list is not None

    def set_api_key(self, new_key: str) -> None:
        new_key = new_key or ""
        if new_key == self.api_key:
            return
        self.api_key = new_key
        self.validation = UNVALIDATED
        self.active_list = None

    def set_active_list(self, mailing_list: MailingList | None) -> None:
        self.active_list = mailing_list

    def set_is_active(self, flag: bool) -> bool:
        """Apply the active flag. Returns False (and changes nothing) if activation isn't allowed."""
        if flag and not self.can_activate():
            logger.debug(
                "Activation rejected (api_key=%s, validation=%s, list=%s)",
                bool(self.api_key),
                self.validation.status.value,
                self.active_list.id if self.active_list else None,
            )
            return False
        self.is_active = bool(flag)
        return True

    def snapshot(self) -> IntegrationSnapshot:
        return IntegrationSnapshot(
            is_active=self.is_active,
            api_key=self.api_key,
            active_list=self.active_list,
            validation=self.validation,
        )

    def restore(self, snapshot: IntegrationSnapshot) -> None:
        self.is_active = snapshot.is_active
        self.api_key = snapshot.api_key
        self.active_list = snapshot.active_list
        self.validation = snapshot.validation
