"""Database models."""
from syncpanel.models.base import Base
from syncpanel.models.setting import Setting
from syncpanel.models.notification import Notification

__all__ = [
    "Base",
    "Setting",
    "Notification",
]
