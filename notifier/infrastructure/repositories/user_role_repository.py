"""Persistence layer for role membership."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notifier.infrastructure.models import UserRoleModel
from notifier.utils import canonical_name


class UserRoleRepository:
    """Provide read access to the users holding each role."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def role_of(self, user_id: str) -> str | None:
        """Return the first role assigned to ``user_id``."""

        row = (
            self.session.query(UserRoleModel.role)
            .filter(UserRoleModel.user_id == user_id)
            .order_by(UserRoleModel.id)
            .first()
        )
        return row[0] if row else None

    def members_of(self, roles: Iterable[str]) -> set[str]:
        role_list = sorted({role for role in roles if role})
        if not role_list:
            return set()
        rows = (
            self.session.query(UserRoleModel.user_id)
            .filter(UserRoleModel.role.in_(role_list))
            .all()
        )
        return {user_id for (user_id,) in rows}

    def assign(self, user_id: str, role: str) -> None:
        """Grant ``role`` to ``user_id``; assigning twice is a no-op."""

        self.session.add(UserRoleModel(user_id=user_id, role=canonical_name(role)))
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()


__all__ = ["UserRoleRepository"]
