"""User-facing alerts raised by the settings panel."""
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.orm import Session, sessionmaker

from syncpanel.logging_config import get_logger
from syncpanel.models import Notification
from syncpanel.utils import generate_id

logger = get_logger("syncpanel.services.notifications")


@dataclass(frozen=True)
class Alert:
    message: str
    type: str = "error"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class AlertNotifier:
    """Collects alerts in order; optionally stores each one as a notification row."""

    def __init__(self, session_factory: sessionmaker | None = None):
        self.session_factory = session_factory
        self.alerts: list[Alert] = []

    def alert(self, message: str, type: str = "error") -> Alert:
        alert = Alert(message=message, type=type)
        self.alerts.append(alert)
        logger.warning("Alert (%s): %s", type, message)
        if self.session_factory is not None:
            self._persist(alert)
        return alert

    def _persist(self, alert: Alert) -> None:
        db: Session = self.session_factory()
        try:
            db.add(Notification(
                id=generate_id(),
                type=alert.type,
                title="Mailchimp settings",
                body=alert.message,
            ))
            db.commit()
        finally:
            db.close()

    def clear(self) -> None:
        self.alerts.clear()
