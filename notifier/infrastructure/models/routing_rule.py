"""SQLAlchemy model for role routing rules."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.sql import expression

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class RoutingRuleModel(Base):
    """Database representation of a (event type, source role, target role) route."""

    __tablename__ = "notification_routing_rule"
    __table_args__ = (
        UniqueConstraint(
            "event_type_id",
            "source_role",
            "target_role",
            name="uq_notification_routing_rule_triple",
        ),
    )

    id = Column(Integer, primary_key=True)
    event_type_id = Column(
        Integer, ForeignKey("notification_event_type.id"), nullable=False, index=True
    )
    source_role = Column(String(50), nullable=False)
    target_role = Column(String(50), nullable=False)
    is_enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["RoutingRuleModel"]
