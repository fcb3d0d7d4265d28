"""SQLAlchemy models for the delivery ledger and its per-key guard rows."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class DeliveryLogModel(Base):
    """Append-only record of a delivered notification."""

    __tablename__ = "notification_delivery_log"
    __table_args__ = (
        Index(
            "ix_notification_delivery_log_window",
            "user_id",
            "event_type_id",
            "delivered_at",
        ),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False)
    event_type_id = Column(
        Integer, ForeignKey("notification_event_type.id"), nullable=False
    )
    event_id = Column(Integer, ForeignKey("notification_event.id"), nullable=True)
    delivered_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


class DeliveryGuardModel(Base):
    """Row locked while a (user, event type) pair is checked and written."""

    __tablename__ = "notification_delivery_guard"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "event_type_id", name="uq_notification_delivery_guard_key"
        ),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False)
    event_type_id = Column(Integer, nullable=False)
    claimed_at = Column(DateTime(), nullable=True)


__all__ = ["DeliveryGuardModel", "DeliveryLogModel"]
