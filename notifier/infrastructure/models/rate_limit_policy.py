"""SQLAlchemy model for per event type rate limits."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer
from sqlalchemy.sql import expression

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class RateLimitPolicyModel(Base):
    """Database representation of the limits applied to one event type."""

    __tablename__ = "notification_rate_limit"

    id = Column(Integer, primary_key=True)
    event_type_id = Column(
        Integer, ForeignKey("notification_event_type.id"), nullable=False, unique=True
    )
    cooldown_minutes = Column(Integer, nullable=False, default=5)
    max_per_hour = Column(Integer, nullable=True)
    max_per_day = Column(Integer, nullable=True)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["RateLimitPolicyModel"]
