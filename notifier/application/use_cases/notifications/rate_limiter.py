"""Rate limiting of notifications per (user, event type)."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session, sessionmaker

from notifier.domain.entities import RateLimitDecision, RateLimitPolicy
from notifier.infrastructure.cache import CacheNamespace, ConfigurationCache
from notifier.infrastructure.repositories import (
    DeliveryLogRepository,
    RateLimitPolicyRepository,
)

logger = logging.getLogger(__name__)

HOURLY_WINDOW = timedelta(hours=1)
DAILY_WINDOW = timedelta(hours=24)


class RateLimiter:
    """Evaluate cooldown, hourly and daily caps against the delivery log.

    Counts always come from ``notification_delivery_log`` read through the
    session of the delivering transaction. Nothing is counted in memory, so
    decisions hold across restarts and across processes.
    """

    def __init__(
        self, session_factory: sessionmaker[Session], cache: ConfigurationCache
    ) -> None:
        self._session_factory = session_factory
        self._cache = cache

    def policy_for(self, event_type_id: int) -> RateLimitPolicy | None:
        """Return the active policy of ``event_type_id`` or ``None``."""

        return self._cache.get_or_load(
            CacheNamespace.POLICIES, (event_type_id,), lambda: self._load(event_type_id)
        )

    def evaluate(
        self,
        session: Session,
        user_id: str,
        event_type_id: int,
        policy: RateLimitPolicy | None,
        *,
        now: datetime,
    ) -> RateLimitDecision:
        """Apply the three gates of ``policy`` for ``user_id``."""

        if policy is None or not policy.is_active:
            return RateLimitDecision(allowed=True, reason="no_policy")

        log = DeliveryLogRepository(session)
        if policy.cooldown_minutes > 0:
            cooldown_start = now - timedelta(minutes=policy.cooldown_minutes)
            if log.exists_since(user_id, event_type_id, cooldown_start):
                return self._reject(user_id, event_type_id, "cooldown")

        if policy.max_per_hour is not None:
            hourly = log.count_since(user_id, event_type_id, now - HOURLY_WINDOW)
            if hourly >= policy.max_per_hour:
                return self._reject(user_id, event_type_id, "hourly_cap")

        if policy.max_per_day is not None:
            daily = log.count_since(user_id, event_type_id, now - DAILY_WINDOW)
            if daily >= policy.max_per_day:
                return self._reject(user_id, event_type_id, "daily_cap")

        return RateLimitDecision(allowed=True, reason="within_limits")

    def allow(
        self,
        session: Session,
        user_id: str,
        event_type_id: int,
        policy: RateLimitPolicy | None,
        *,
        now: datetime,
    ) -> bool:
        return self.evaluate(session, user_id, event_type_id, policy, now=now).allowed

    def _load(self, event_type_id: int) -> RateLimitPolicy | None:
        with self._session_factory() as session:
            policy = RateLimitPolicyRepository(session).get_for_event_type(event_type_id)
        if policy is None or not policy.is_active:
            return None
        return policy

    @staticmethod
    def _reject(user_id: str, event_type_id: int, reason: str) -> RateLimitDecision:
        logger.info(
            "Notification suppressed for user=%s event_type=%s: %s",
            user_id,
            event_type_id,
            reason,
        )
        return RateLimitDecision(allowed=False, reason=reason)


__all__ = ["DAILY_WINDOW", "HOURLY_WINDOW", "RateLimiter"]
