"""SQLAlchemy model for emitted notification events."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import expression

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime

from ._types import json_type


class NotificationEventModel(Base):
    """Database representation of an accepted event emission."""

    __tablename__ = "notification_event"

    id = Column(Integer, primary_key=True)
    event_type_id = Column(
        Integer, ForeignKey("notification_event_type.id"), nullable=False, index=True
    )
    event_key = Column(String(100), nullable=False)
    sender_id = Column(String(64), nullable=False)
    sender_role = Column(String(50), nullable=True)
    payload = Column(json_type, nullable=False, default=dict)
    related_entity_type = Column(String(100), nullable=True)
    related_entity_id = Column(String(100), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    processed = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    processed_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationEventModel"]
