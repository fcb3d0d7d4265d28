"""Tests for the administration use cases."""

from datetime import datetime, timedelta, timezone

import pytest

from notifier.application.use_cases.configuration import (
    ConfigurationConflictError,
    ConfigurationNotFoundError,
    add_routing_rule,
    create_event_type,
    delete_event_type,
    delete_rate_limit,
    delete_routing_rule,
    get_rate_limit,
    list_event_types,
    list_notification_history,
    list_routing_rules,
    list_user_preferences,
    set_rate_limit,
    set_user_preference,
    update_event_type,
)
from notifier.domain.entities import EventType
from notifier.infrastructure.cache import CacheNamespace, ConfigurationCache
from notifier.infrastructure.models import (
    RateLimitPolicyModel,
    RoutingRuleModel,
    UserPreferenceModel,
)
from notifier.application.use_cases.notifications import NotificationWriter


def test_event_types_are_normalized_and_appended(session) -> None:
    first = create_event_type(session, key="  Contact_Added ", name="New contact")
    second = create_event_type(session, key="deal.closed", name="Deal closed", source_module="sales")

    assert first.key == "contact_added"
    assert first.source_module == "general"
    assert (first.position, second.position) == (0, 1)
    assert [event_type.key for event_type in list_event_types(session)] == [
        "contact_added",
        "deal.closed",
    ]


@pytest.mark.parametrize("key", ["", "   ", "has space", "-leading"])
def test_invalid_event_keys_are_rejected(session, key) -> None:
    with pytest.raises(ValueError):
        create_event_type(session, key=key, name="Broken")


def test_duplicate_event_keys_conflict(session) -> None:
    create_event_type(session, key="contact_added", name="New contact")

    with pytest.raises(ConfigurationConflictError):
        create_event_type(session, key="CONTACT_ADDED", name="Again")


def test_update_event_type_changes_only_given_fields(session) -> None:
    created = create_event_type(
        session, key="contact_added", name="New contact", description="Added", color="blue"
    )

    updated = update_event_type(
        session, event_type_id=created.id, is_active=False, description=None
    )

    assert updated.is_active is False
    assert updated.description is None
    assert updated.color == "blue"
    assert updated.name == "New contact"
    assert list_event_types(session, active_only=True) == []

    with pytest.raises(ConfigurationNotFoundError):
        update_event_type(session, event_type_id=999, name="Missing")


def test_writes_invalidate_the_matching_cache_namespace(session) -> None:
    cache = ConfigurationCache(300)
    cache.get_or_load(CacheNamespace.EVENT_TYPES, ("contact_added",), lambda: None)
    cache.get_or_load(CacheNamespace.ROUTES, (1, "partner"), frozenset)

    event_type = create_event_type(session, key="contact_added", name="New", cache=cache)
    assert len(cache) == 1

    add_routing_rule(
        session,
        event_type_id=event_type.id,
        source_role="partner",
        target_role="admin",
        cache=cache,
    )
    assert len(cache) == 0


def test_routing_rules_are_unique_per_triple(session) -> None:
    event_type = create_event_type(session, key="contact_added", name="New contact")
    rule = add_routing_rule(
        session, event_type_id=event_type.id, source_role=" Partner ", target_role="ADMIN"
    )

    assert (rule.source_role, rule.target_role) == ("partner", "admin")
    with pytest.raises(ConfigurationConflictError):
        add_routing_rule(
            session, event_type_id=event_type.id, source_role="partner", target_role="admin"
        )
    with pytest.raises(ConfigurationNotFoundError):
        add_routing_rule(session, event_type_id=999, source_role="partner", target_role="admin")

    delete_routing_rule(session, rule_id=rule.id)
    assert list_routing_rules(session, event_type_id=event_type.id) == []
    with pytest.raises(ConfigurationNotFoundError):
        delete_routing_rule(session, rule_id=rule.id)


def test_rate_limit_upsert_get_and_delete(session) -> None:
    event_type = create_event_type(session, key="contact_added", name="New contact")
    with pytest.raises(ConfigurationNotFoundError):
        get_rate_limit(session, event_type_id=event_type.id)

    set_rate_limit(session, event_type_id=event_type.id, cooldown_minutes=5)
    replaced = set_rate_limit(
        session, event_type_id=event_type.id, cooldown_minutes=0, max_per_hour=None, max_per_day=3
    )

    assert get_rate_limit(session, event_type_id=event_type.id) == replaced
    assert replaced.max_per_hour is None
    assert replaced.is_limiting() is True

    delete_rate_limit(session, event_type_id=event_type.id)
    with pytest.raises(ConfigurationNotFoundError):
        delete_rate_limit(session, event_type_id=event_type.id)


@pytest.mark.parametrize(
    "values",
    [{"cooldown_minutes": -1}, {"max_per_hour": 0}, {"max_per_day": -5}],
)
def test_invalid_rate_limits_are_rejected(session, values) -> None:
    event_type = create_event_type(session, key="contact_added", name="New contact")

    with pytest.raises(ValueError):
        set_rate_limit(session, event_type_id=event_type.id, **values)


def test_preferences_list_active_types_with_defaults(session, count_rows) -> None:
    create_event_type(session, key="contact_added", name="New contact")
    deal = create_event_type(session, key="deal_closed", name="Deal closed")
    create_event_type(session, key="retired", name="Retired", is_active=False)

    set_user_preference(session, user_id="a1", event_type_id=deal.id, is_enabled=False)
    settings = {s.event_type.key: s.is_enabled for s in list_user_preferences(session, user_id="a1")}

    assert settings == {"contact_added": True, "deal_closed": False}
    assert all(s.is_enabled for s in list_user_preferences(session, user_id="a2"))

    set_user_preference(session, user_id="a1", event_type_id=deal.id, is_enabled=True)
    assert count_rows(UserPreferenceModel) == 1
    with pytest.raises(ConfigurationNotFoundError):
        set_user_preference(session, user_id="a1", event_type_id=999, is_enabled=False)


def test_delete_cascades_configuration_of_unused_event_types(session, count_rows) -> None:
    event_type = create_event_type(session, key="contact_added", name="New contact")
    add_routing_rule(session, event_type_id=event_type.id, source_role="partner", target_role="admin")
    set_rate_limit(session, event_type_id=event_type.id)
    set_user_preference(session, user_id="a1", event_type_id=event_type.id, is_enabled=False)

    delete_event_type(session, event_type_id=event_type.id)

    assert list_event_types(session) == []
    assert count_rows(RoutingRuleModel) == 0
    assert count_rows(RateLimitPolicyModel) == 0
    assert count_rows(UserPreferenceModel) == 0
    with pytest.raises(ConfigurationNotFoundError):
        delete_event_type(session, event_type_id=event_type.id)


def test_delete_refuses_event_types_with_deliveries(session, session_factory) -> None:
    event_type = create_event_type(session, key="contact_added", name="New contact")
    _deliver(session_factory, event_type, "a1", datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))

    with pytest.raises(ConfigurationConflictError):
        delete_event_type(session, event_type_id=event_type.id)


def test_history_filters_by_date_and_text(session, session_factory) -> None:
    event_type = create_event_type(session, key="contact_added", name="New contact")
    start = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    _deliver(session_factory, event_type, "a1", start, message="Jane Doe added")
    _deliver(session_factory, event_type, "a2", start + timedelta(days=1), message="John Roe added")
    _deliver(session_factory, event_type, "a3", start + timedelta(days=2), message="Jane Roe added")

    newest_first = list_notification_history(session)
    assert [n.user_id for n in newest_first] == ["a3", "a2", "a1"]

    window = list_notification_history(
        session, date_from=start + timedelta(hours=12), date_to=start + timedelta(days=3)
    )
    assert [n.user_id for n in window] == ["a3", "a2"]

    assert [n.user_id for n in list_notification_history(session, search="jane")] == ["a3", "a1"]
    assert [n.user_id for n in list_notification_history(session, limit=1)] == ["a3"]

    with pytest.raises(ValueError):
        list_notification_history(session, date_from=start, date_to=start - timedelta(days=1))


def _deliver(session_factory, event_type: EventType, user_id: str, at: datetime, message="hi"):
    with session_factory.begin() as session:
        NotificationWriter().deliver(
            session,
            user_id=user_id,
            sender_id="p1",
            event_type=event_type,
            payload={"message": message},
            delivered_at=at,
        )
