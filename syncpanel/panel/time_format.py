"""
Relative-time text for the sync status line.

Last sync uses humanized phrases ("a few seconds ago", "an hour ago",
"4 minutes ago") with the same thresholds admins see elsewhere in the UI.
Next sync is always a whole number of hours (>= 1 hour left) or minutes,
never "0 minutes".
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from syncpanel.config import settings
from syncpanel.panel.schedule import SyncSchedule

# Humanize cut-offs: <=44s "a few seconds", <45m minutes, <22h hours, <26d days, <11mo months
SECONDS_THRESHOLD = 44
MINUTES_THRESHOLD = 45
HOURS_THRESHOLD = 22
DAYS_THRESHOLD = 26
MONTHS_THRESHOLD = 11
DAYS_PER_400_YEARS = 146097


def _round(value: float) -> int:
    """Round half up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def humanize(delta: timedelta) -> str:
    """Duration as a phrase without direction, e.g. "an hour", "4 minutes"."""
    total = abs(delta.total_seconds())
    seconds = _round(total)
    minutes = _round(total / 60)
    hours = _round(total / 3600)
    days = _round(total / 86400)
    months = _round(total / 86400 * 4800 / DAYS_PER_400_YEARS)
    years = _round(total / 86400 * 400 / DAYS_PER_400_YEARS)

    if seconds <= SECONDS_THRESHOLD:
        return "a few seconds"
    if minutes <= 1:
        return "a minute"
    if minutes < MINUTES_THRESHOLD:
        return f"{minutes} minutes"
    if hours <= 1:
        return "an hour"
    if hours < HOURS_THRESHOLD:
        return f"{hours} hours"
    if days <= 1:
        return "a day"
    if days < DAYS_THRESHOLD:
        return f"{days} days"
    if months <= 1:
        return "a month"
    if months < MONTHS_THRESHOLD:
        return f"{months} months"
    if years <= 1:
        return "a year"
    return f"{years} years"


def from_now(moment: datetime, now: datetime) -> str:
    """Past moments read "4 minutes ago", future ones "in 4 minutes"."""
    delta = moment - now
    phrase = humanize(delta)
    if delta.total_seconds() > 0:
        return f"in {phrase}"
    return f"{phrase} ago"


def time_until(moment: datetime, now: datetime) -> str:
    """Remaining time in whole hours when >= 1 hour, otherwise whole minutes (min 1)."""
    remaining = (moment - now).total_seconds()
    if remaining >= 3600:
        return _plural(_round(remaining / 3600), "hour")
    minutes = max(_round(remaining / 60), 1)
    return _plural(minutes, "minute")


@dataclass(frozen=True)
class SyncDescription:
    last_sync_text: str | None = None
    last_sync_recent: bool = False  # render in bold
    next_sync_text: str | None = None

    @property
    def is_blank(self) -> bool:
        return self.last_sync_text is None and self.next_sync_text is None

    def sentences(self) -> list[str]:
        lines = []
        if self.last_sync_text:
            lines.append(f"Last synced {self.last_sync_text}.")
        if self.next_sync_text:
            lines.append(f"Next sync in: {self.next_sync_text}.")
        return lines

    def __str__(self) -> str:
        return " ".join(self.sentences())


def describe(
    schedule: SyncSchedule,
    now: datetime,
    is_active: bool = True,
    emphasis_minutes: int | None = None,
) -> SyncDescription:
    """Build the sync status text for `schedule` as seen at `now`."""
    if schedule.is_empty:
        return SyncDescription()
    if emphasis_minutes is None:
        emphasis_minutes = settings.last_sync_emphasis_minutes

    last_text = None
    recent = False
    if schedule.last_sync_at is not None:
        last_text = from_now(schedule.last_sync_at, now)
        recent = (now - schedule.last_sync_at) < timedelta(minutes=emphasis_minutes)

    next_text = None
    if is_active and schedule.next_sync_at is not None:
        next_text = time_until(schedule.next_sync_at, now)

    return SyncDescription(last_sync_text=last_text, last_sync_recent=recent, next_sync_text=next_text)
