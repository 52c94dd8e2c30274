"""
Print the subscriber sync status the Mailchimp settings panel would show.

Run from the repository root: python -m scripts.sync_status

Usage:
    python -m scripts.sync_status                        # Uses SETTINGS_API_URL
    python -m scripts.sync_status --api-url http://...   # Another admin API
    python -m scripts.sync_status --watch                # Wait until the schedule changes
"""
import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from syncpanel.config import settings
from syncpanel.logging_config import setup_logging
from syncpanel.panel import IntegrationConfig, SettingsStoreError, SyncPoller, SyncSchedule, describe
from syncpanel.panel.panel import utcnow
from syncpanel.services.settings_client import ApiSettingsStore


def _print_status(config: IntegrationConfig, schedule: SyncSchedule) -> None:
    state = "enabled" if config.is_active else "disabled"
    list_name = config.active_list.name if config.active_list else "no list"
    print(f"Mailchimp {state} ({list_name})")
    description = describe(schedule, utcnow(), is_active=config.is_active)
    if description.is_blank:
        print("No sync scheduled.")
        return
    for line in description.sentences():
        print(f"  {line}")


async def run(api_url: str, watch: bool, interval: float) -> int:
    store = ApiSettingsStore(base_url=api_url)
    try:
        document = await store.fetch()
    except SettingsStoreError as e:
        print(f"Could not load settings: {e.message}")
        return 1
    config = IntegrationConfig.from_settings(document.get("mailchimp"))
    schedule = SyncSchedule.from_settings(document.get("scheduling"))
    _print_status(config, schedule)
    if watch:
        print(f"Waiting for the next sync (checking every {interval:.0f}s, Ctrl-C to stop)...")
        poller = SyncPoller(store, schedule, interval=interval)
        poller.start()
        try:
            await poller.wait()
        finally:
            poller.cancel()
        _print_status(config, schedule)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Show Mailchimp subscriber sync status")
    parser.add_argument("--api-url", default=settings.settings_api_url, help="Admin API base URL")
    parser.add_argument("--watch", action="store_true", help="Poll until the sync schedule changes")
    parser.add_argument("--interval", type=float, default=settings.sync_poll_interval, help="Seconds between polls")
    args = parser.parse_args()
    setup_logging()
    try:
        code = asyncio.run(run(args.api_url, args.watch, args.interval))
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
