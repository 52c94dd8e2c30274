"""Server-reported subscriber sync schedule (`scheduling` setting)."""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

INTEGRATION_TYPE = "subscribers"


def from_epoch_ms(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"timestamp must be epoch milliseconds, got {value!r}")
    return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)


def to_epoch_ms(value: datetime | None) -> int | None:
    if value is None:
        return None
    return int(value.timestamp() * 1000)


@dataclass
class SyncSchedule:
    """Last/next sync run for one integration type. Never edited by the user."""

    last_sync_at: datetime | None = None
    next_sync_at: datetime | None = None
    readonly: bool = False

    @classmethod
    def from_settings(cls, value: str | dict | None, integration: str = INTEGRATION_TYPE) -> SyncSchedule:
        """Parse the `scheduling` setting; missing or empty values give an empty schedule."""
        if not value:
            return cls()
        data = json.loads(value) if isinstance(value, str) else value
        if not isinstance(data, dict):
            raise ValueError(f"scheduling setting must be an object, got {type(data).__name__}")
        entry = data.get(integration) or {}
        if not isinstance(entry, dict):
            raise ValueError(f"scheduling entry for {integration} must be an object")
        return cls(
            last_sync_at=from_epoch_ms(entry.get("lastSyncAt")),
            next_sync_at=from_epoch_ms(entry.get("nextSyncAt")),
            readonly=bool(data.get("readonly", False)),
        )

    @property
    def is_empty(self) -> bool:
        return self.last_sync_at is None and self.next_sync_at is None

    def marker(self) -> tuple[datetime | None, datetime | None]:
        """Values the poller compares between ticks."""
        return (self.last_sync_at, self.next_sync_at)

    def update_from(self, other: SyncSchedule) -> None:
        self.last_sync_at = other.last_sync_at
        self.next_sync_at = other.next_sync_at
        self.readonly = other.readonly

    def to_settings(self, integration: str = INTEGRATION_TYPE) -> dict[str, Any]:
        return {
            "readonly": self.readonly,
            integration: {
                "lastSyncAt": to_epoch_ms(self.last_sync_at),
                "nextSyncAt": to_epoch_ms(self.next_sync_at),
            },
        }
