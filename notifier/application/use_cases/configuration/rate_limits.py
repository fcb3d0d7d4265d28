"""Use cases for administering rate-limit policies."""

from __future__ import annotations

from sqlalchemy.orm import Session

from notifier.domain.entities import RateLimitPolicy
from notifier.infrastructure.cache import CacheNamespace, ConfigurationCache
from notifier.infrastructure.repositories import RateLimitPolicyRepository

from .errors import ConfigurationNotFoundError
from .validators import get_event_type_or_raise


def get_rate_limit(session: Session, *, event_type_id: int) -> RateLimitPolicy:
    get_event_type_or_raise(session, event_type_id)
    policy = RateLimitPolicyRepository(session).get_for_event_type(event_type_id)
    if policy is None:
        msg = f"Event type {event_type_id} has no rate limit"
        raise ConfigurationNotFoundError(msg)
    return policy


def set_rate_limit(
    session: Session,
    *,
    event_type_id: int,
    cooldown_minutes: int = 5,
    max_per_hour: int | None = 10,
    max_per_day: int | None = 50,
    is_active: bool = True,
    cache: ConfigurationCache | None = None,
) -> RateLimitPolicy:
    """Create or replace the policy of ``event_type_id``."""

    get_event_type_or_raise(session, event_type_id)
    if cooldown_minutes < 0:
        raise ValueError("cooldown_minutes must be zero or positive.")
    for field_name, value in (("max_per_hour", max_per_hour), ("max_per_day", max_per_day)):
        if value is not None and value < 1:
            raise ValueError(f"{field_name} must be at least 1 or null for no cap.")

    policy = RateLimitPolicyRepository(session).upsert(
        RateLimitPolicy(
            id=None,
            event_type_id=event_type_id,
            cooldown_minutes=cooldown_minutes,
            max_per_hour=max_per_hour,
            max_per_day=max_per_day,
            is_active=is_active,
        )
    )
    if cache is not None:
        cache.invalidate(CacheNamespace.POLICIES)
    return policy


def delete_rate_limit(
    session: Session,
    *,
    event_type_id: int,
    cache: ConfigurationCache | None = None,
) -> None:
    """Remove the policy so the event type becomes unlimited."""

    get_event_type_or_raise(session, event_type_id)
    deleted = RateLimitPolicyRepository(session).delete_for_event_type(event_type_id)
    session.commit()
    if not deleted:
        msg = f"Event type {event_type_id} has no rate limit"
        raise ConfigurationNotFoundError(msg)
    if cache is not None:
        cache.invalidate(CacheNamespace.POLICIES)


__all__ = ["delete_rate_limit", "get_rate_limit", "set_rate_limit"]
