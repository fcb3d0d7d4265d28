"""SQLAlchemy model for notification opt-outs."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint

from notifier.infrastructure.database import Base


class UserPreferenceModel(Base):
    """Database representation of a user's setting for one event type."""

    __tablename__ = "notification_user_preference"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "event_type_id", name="uq_notification_user_preference"
        ),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    event_type_id = Column(
        Integer, ForeignKey("notification_event_type.id"), nullable=False
    )
    is_enabled = Column(Boolean, nullable=False, default=True)


__all__ = ["UserPreferenceModel"]
