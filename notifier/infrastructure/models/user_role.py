"""SQLAlchemy model for role membership."""

from sqlalchemy import Column, Integer, String, UniqueConstraint

from notifier.infrastructure.database import Base


class UserRoleModel(Base):
    """Database representation of a user holding a role."""

    __tablename__ = "user_role"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_role"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    role = Column(String(50), nullable=False, index=True)


__all__ = ["UserRoleModel"]
