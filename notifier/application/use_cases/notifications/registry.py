"""Lookup of active event type definitions."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from notifier.domain.entities import EventType
from notifier.infrastructure.cache import CacheNamespace, ConfigurationCache
from notifier.infrastructure.repositories import EventTypeRepository
from notifier.utils import canonical_name


class EventTypeRegistry:
    """Resolve event keys to their active :class:`EventType`."""

    def __init__(
        self, session_factory: sessionmaker[Session], cache: ConfigurationCache
    ) -> None:
        self._session_factory = session_factory
        self._cache = cache

    def resolve(self, event_key: str) -> EventType | None:
        """Return the active event type for ``event_key`` or ``None``.

        Unknown and inactive keys both resolve to ``None``; emitting such an
        event is a no-op rather than an error. Keys match case-insensitively.
        """

        key = canonical_name(event_key)
        if not key:
            return None
        return self._cache.get_or_load(
            CacheNamespace.EVENT_TYPES, (key,), lambda: self._load(key)
        )

    def _load(self, event_key: str) -> EventType | None:
        with self._session_factory() as session:
            return EventTypeRepository(session).get_active_by_key(event_key)


__all__ = ["EventTypeRegistry"]
