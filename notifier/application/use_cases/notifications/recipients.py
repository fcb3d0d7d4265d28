"""Expansion of target roles into recipient user identifiers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from sqlalchemy.orm import Session, sessionmaker

from notifier.infrastructure.repositories import UserRoleRepository


class RoleDirectory(Protocol):
    """Collaborator that knows which roles users hold."""

    def role_of(self, user_id: str) -> str | None:
        """Return the current role of ``user_id``, if any."""

    def members_of(self, roles: Iterable[str]) -> set[str]:
        """Return the users holding any of ``roles``."""


class SqlRoleDirectory:
    """:class:`RoleDirectory` backed by the ``user_role`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def role_of(self, user_id: str) -> str | None:
        with self._session_factory() as session:
            return UserRoleRepository(session).role_of(user_id)

    def members_of(self, roles: Iterable[str]) -> set[str]:
        with self._session_factory() as session:
            return UserRoleRepository(session).members_of(roles)


class RecipientResolver:
    """Turn target roles into the set of users to notify."""

    def __init__(self, directory: RoleDirectory) -> None:
        self._directory = directory

    def expand(self, target_roles: Iterable[str], *, exclude: str | None = None) -> set[str]:
        """Return members of ``target_roles`` without ``exclude`` (the sender)."""

        roles = {role for role in target_roles if role}
        if not roles:
            return set()
        members = set(self._directory.members_of(roles))
        members.discard(exclude)
        return members


__all__ = ["RecipientResolver", "RoleDirectory", "SqlRoleDirectory"]
