"""
Record a finished subscriber sync in the local settings database.

Sets lastSyncAt to now and nextSyncAt to now + --hours, and marks the
schedule readonly. Useful in development, where no background sync job runs,
to let a polling settings panel observe the change.

Usage:
    python -m scripts.record_sync             # next sync in 24 hours
    python -m scripts.record_sync --hours 6
    python -m scripts.record_sync --dry-run   # Preview without updating DB
"""
import argparse
import json
import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from syncpanel.database import SessionLocal, init_db
from syncpanel.models import Setting
from syncpanel.panel import SyncSchedule
from syncpanel.panel.panel import utcnow


def main() -> None:
    parser = argparse.ArgumentParser(description="Record a finished subscriber sync")
    parser.add_argument("--hours", type=float, default=24, help="Hours until the next sync")
    parser.add_argument("--dry-run", action="store_true", help="Only preview, do not update DB")
    args = parser.parse_args()

    now = utcnow()
    schedule = SyncSchedule(last_sync_at=now, next_sync_at=now + timedelta(hours=args.hours), readonly=True)
    value = json.dumps(schedule.to_settings())
    print(f"scheduling = {value}")
    if args.dry_run:
        print("(Dry run - no DB updates)")
        return

    init_db()
    db = SessionLocal()
    try:
        setting = db.query(Setting).filter(Setting.key == "scheduling").first()
        if setting:
            setting.value = value
        else:
            db.add(Setting(key="scheduling", value=value))
        db.commit()
        print("Done.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
