"""SQLAlchemy model for notification event types."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import expression

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class EventTypeModel(Base):
    """Database representation of a configured event type."""

    __tablename__ = "notification_event_type"

    id = Column(Integer, primary_key=True)
    key = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    source_module = Column(String(50), nullable=False, default="general")
    icon_name = Column(String(50), nullable=True)
    color = Column(String(20), nullable=True)
    position = Column(Integer, nullable=False, default=0)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["EventTypeModel"]
