"""Resolution of routing rules into target roles."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from notifier.infrastructure.cache import CacheNamespace, ConfigurationCache
from notifier.infrastructure.repositories import RoutingRuleRepository
from notifier.utils import canonical_name


class RoutingTable:
    """Answer which roles a sender role may notify for an event type."""

    def __init__(
        self, session_factory: sessionmaker[Session], cache: ConfigurationCache
    ) -> None:
        self._session_factory = session_factory
        self._cache = cache

    def routes_for(self, event_type_id: int, source_role: str) -> frozenset[str]:
        """Return the target roles of the enabled rules, possibly empty."""

        role = canonical_name(source_role)
        return self._cache.get_or_load(
            CacheNamespace.ROUTES,
            (event_type_id, role),
            lambda: self._load(event_type_id, role),
        )

    def _load(self, event_type_id: int, source_role: str) -> frozenset[str]:
        with self._session_factory() as session:
            roles = RoutingRuleRepository(session).enabled_target_roles(
                event_type_id, source_role
            )
        return frozenset(roles)


__all__ = ["RoutingTable"]
