"""Shared fixtures: in-memory collaborators for the panel and an in-memory database for the API."""
import json
import os
from datetime import datetime, timedelta, timezone

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from syncpanel.database import engine, init_db
from syncpanel.main import app
from syncpanel.models import Base
from syncpanel.panel import ListProviderError, MailchimpSettingsPanel, MailingList
from syncpanel.services.notifications import AlertNotifier

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

LISTS = {
    "valid": [
        MailingList(id="test1", name="Test List One"),
        MailingList(id="test2", name="Test List Two"),
    ],
    "valid2": [
        MailingList(id="test3", name="Test List Three"),
        MailingList(id="test4", name="Test List Four"),
    ],
    "empty": [],
}


def ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def scheduling_value(last_sync_at=None, next_sync_at=None, readonly=True) -> str:
    return json.dumps({
        "readonly": readonly,
        "subscribers": {
            "lastSyncAt": ms(last_sync_at) if last_sync_at else None,
            "nextSyncAt": ms(next_sync_at) if next_sync_at else None,
        },
    })


def mailchimp_value(is_active=True, api_key="valid", list_id="test1", list_name="Test List One") -> str:
    active_list = {"id": list_id, "name": list_name} if list_id else None
    return json.dumps({"isActive": is_active, "apiKey": api_key, "activeList": active_list})


class FakeSettingsStore:
    """Settings document held in memory. Records saves; can fail saves or simulate a sync run."""

    def __init__(self, document=None):
        self.document = dict(document or {})
        self.fetch_count = 0
        self.saves = []
        self.save_error = None
        self.fetch_errors = []
        self.sync_on_fetch = None  # fetch number on which a background sync lands
        self.synced_schedule = None

    def simulate_sync(self, on_fetch: int, last_sync_at: datetime, next_sync_at: datetime) -> None:
        self.sync_on_fetch = on_fetch
        self.synced_schedule = scheduling_value(last_sync_at, next_sync_at)

    async def fetch(self):
        self.fetch_count += 1
        if self.fetch_errors:
            raise self.fetch_errors.pop(0)
        if self.sync_on_fetch is not None and self.fetch_count >= self.sync_on_fetch:
            self.document["scheduling"] = self.synced_schedule
        return dict(self.document)

    async def save(self, key, value):
        self.saves.append((key, value))
        if self.save_error is not None:
            raise self.save_error
        self.document[key] = value
        return dict(self.document)


class FakeListProvider:
    def __init__(self, lists=None):
        self.lists = dict(LISTS if lists is None else lists)
        self.calls = []

    async def fetch_lists(self, api_key):
        self.calls.append(api_key)
        if api_key not in self.lists:
            raise ListProviderError("API Key Invalid")
        return list(self.lists[api_key])


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def scheduling():
    return scheduling_value


@pytest.fixture
def mailchimp():
    return mailchimp_value


@pytest.fixture
def store(now):
    last_sync_at = now - timedelta(hours=1)
    return FakeSettingsStore({
        "mailchimp": mailchimp_value(),
        "scheduling": scheduling_value(last_sync_at, last_sync_at + timedelta(days=1)),
    })


@pytest.fixture
def provider():
    return FakeListProvider()


@pytest.fixture
def notifier():
    return AlertNotifier()


@pytest.fixture
def make_panel(store, provider, notifier, now):
    def _make(**kwargs):
        kwargs.setdefault("clock", lambda: now)
        kwargs.setdefault("poll_interval", 0)
        return MailchimpSettingsPanel(store, provider, notifier, **kwargs)
    return _make


@pytest.fixture
def db_tables():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    Base.metadata.drop_all(bind=engine)
