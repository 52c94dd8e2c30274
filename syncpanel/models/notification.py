"""Notification model. Alerts raised by admin screens."""
from sqlalchemy import Column, String, Boolean, DateTime, Text
from sqlalchemy.sql import func

from syncpanel.models.base import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, index=True)
    type = Column(String(64), nullable=False)
    title = Column(String(256), nullable=True)
    body = Column(Text, nullable=True)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
