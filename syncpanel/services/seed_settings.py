"""Seed default settings on startup."""
import json

from syncpanel.database import SessionLocal
from syncpanel.models import Setting

DEFAULT_SETTINGS = {
    "mailchimp": json.dumps({"isActive": False, "apiKey": "", "activeList": None}),
    "scheduling": json.dumps({
        "readonly": False,
        "subscribers": {"lastSyncAt": None, "nextSyncAt": None},
    }),
}


def seed_default_settings() -> None:
    """Insert any missing default setting. Existing values are left alone."""
    db = SessionLocal()
    try:
        existing = {s.key for s in db.query(Setting).all()}
        for key, value in DEFAULT_SETTINGS.items():
            if key not in existing:
                db.add(Setting(key=key, value=value))
        db.commit()
    finally:
        db.close()
