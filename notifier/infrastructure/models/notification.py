"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import expression

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime

from ._types import json_type


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    sender_id = Column(String(64), nullable=True)
    event_type_id = Column(
        Integer, ForeignKey("notification_event_type.id"), nullable=True, index=True
    )
    notification_type = Column(String(100), nullable=False)
    source_module = Column(String(50), nullable=True)
    title = Column(String(150), nullable=False)
    message = Column(Text, nullable=False, default="")
    link = Column(String(500), nullable=True)
    # ``metadata`` is reserved on declarative classes.
    metadata_ = Column("metadata", json_type, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    read_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
