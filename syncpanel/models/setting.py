"""Key/value settings model. Values are stored as opaque strings (usually JSON)."""
from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.sql import func

from syncpanel.models.base import Base


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(64), primary_key=True, index=True)
    value = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
