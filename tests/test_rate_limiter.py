"""Tests for the cooldown, hourly and daily gates."""

from contextlib import closing
from datetime import datetime, timedelta, timezone

import pytest

from notifier.domain.entities import DeliveryLogEntry, RateLimitPolicy
from notifier.infrastructure.cache import ConfigurationCache
from notifier.infrastructure.repositories import DeliveryLogRepository
from notifier.application.use_cases.notifications import RateLimiter

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def limiter(session_factory) -> RateLimiter:
    return RateLimiter(session_factory, ConfigurationCache(0))


def _log(session_factory, *ages: timedelta, user_id: str = "u1", event_type_id: int = 1) -> None:
    with closing(session_factory()) as session:
        repository = DeliveryLogRepository(session)
        for age in ages:
            repository.append(
                DeliveryLogEntry(
                    id=None,
                    user_id=user_id,
                    event_type_id=event_type_id,
                    delivered_at=NOW - age,
                )
            )
        session.commit()


def _policy(**overrides) -> RateLimitPolicy:
    values = {"cooldown_minutes": 0, "max_per_hour": None, "max_per_day": None}
    values.update(overrides)
    return RateLimitPolicy(id=1, event_type_id=1, **values)


def _evaluate(limiter, session_factory, policy, user_id="u1"):
    with closing(session_factory()) as session:
        return limiter.evaluate(session, user_id, 1, policy, now=NOW)


def test_missing_or_inactive_policy_is_unlimited(limiter, session_factory) -> None:
    _log(session_factory, *[timedelta(seconds=s) for s in range(20)])

    assert _evaluate(limiter, session_factory, None).reason == "no_policy"
    inactive = _policy(cooldown_minutes=5, max_per_hour=1, is_active=False)
    assert _evaluate(limiter, session_factory, inactive).allowed is True


def test_cooldown_rejects_a_recent_delivery(limiter, session_factory) -> None:
    _log(session_factory, timedelta(minutes=4))

    decision = _evaluate(limiter, session_factory, _policy(cooldown_minutes=5))

    assert decision.allowed is False
    assert decision.reason == "cooldown"


def test_cooldown_allows_after_the_window(limiter, session_factory) -> None:
    _log(session_factory, timedelta(minutes=6))

    decision = _evaluate(limiter, session_factory, _policy(cooldown_minutes=5))

    assert decision.allowed is True
    assert decision.reason == "within_limits"


def test_hourly_cap_counts_the_last_hour(limiter, session_factory) -> None:
    _log(session_factory, timedelta(minutes=10), timedelta(minutes=20), timedelta(minutes=90))
    policy = _policy(max_per_hour=3)
    assert _evaluate(limiter, session_factory, policy).allowed is True

    _log(session_factory, timedelta(minutes=30))
    decision = _evaluate(limiter, session_factory, policy)
    assert decision.reason == "hourly_cap"


def test_daily_cap_counts_the_last_24_hours(limiter, session_factory) -> None:
    _log(session_factory, *[timedelta(hours=2 * index + 1) for index in range(10)])
    _log(session_factory, timedelta(hours=30))

    decision = _evaluate(limiter, session_factory, _policy(max_per_day=10))

    assert decision.allowed is False
    assert decision.reason == "daily_cap"


def test_counts_are_per_user(limiter, session_factory) -> None:
    _log(session_factory, timedelta(minutes=1), user_id="someone-else")

    with closing(session_factory()) as session:
        assert limiter.allow(session, "u1", 1, _policy(cooldown_minutes=5), now=NOW) is True


def test_policy_for_hides_inactive_policies(limiter, seed) -> None:
    active = seed.event_type("contact_added")
    dormant = seed.event_type("deal_closed")
    seed.policy(active.id, cooldown_minutes=5)
    seed.policy(dormant.id, cooldown_minutes=5, is_active=False)

    assert limiter.policy_for(active.id).cooldown_minutes == 5
    assert limiter.policy_for(dormant.id) is None
    assert limiter.policy_for(9999) is None
