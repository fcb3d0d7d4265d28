"""Per-user opt-out check."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from notifier.infrastructure.cache import CacheNamespace, ConfigurationCache
from notifier.infrastructure.repositories import UserPreferenceRepository


class PreferenceFilter:
    """Report whether a user still accepts notifications of an event type."""

    def __init__(
        self, session_factory: sessionmaker[Session], cache: ConfigurationCache
    ) -> None:
        self._session_factory = session_factory
        self._cache = cache

    def is_enabled(self, user_id: str, event_type_id: int) -> bool:
        """Return ``False`` only when the user explicitly opted out."""

        return self._cache.get_or_load(
            CacheNamespace.PREFERENCES,
            (user_id, event_type_id),
            lambda: self._load(user_id, event_type_id),
        )

    def _load(self, user_id: str, event_type_id: int) -> bool:
        with self._session_factory() as session:
            preference = UserPreferenceRepository(session).get(user_id, event_type_id)
        return True if preference is None else preference.is_enabled


__all__ = ["PreferenceFilter"]
