"""Tests for the registry, routing table, recipient resolver and preference filter."""

from notifier.application.use_cases.configuration import set_routing_rule_enabled
from notifier.application.use_cases.notifications import (
    EventTypeRegistry,
    PreferenceFilter,
    RecipientResolver,
    RoutingTable,
    SqlRoleDirectory,
)
from notifier.infrastructure.cache import CacheNamespace, ConfigurationCache


def test_registry_resolves_only_active_event_types(session_factory, seed) -> None:
    seed.event_type("contact_added")
    seed.event_type("legacy_event", is_active=False)
    registry = EventTypeRegistry(session_factory, ConfigurationCache(0))

    assert registry.resolve("contact_added").key == "contact_added"
    assert registry.resolve("legacy_event") is None
    assert registry.resolve("missing") is None


def test_registry_serves_cached_definitions_until_invalidated(session_factory, seed) -> None:
    cache = ConfigurationCache(300)
    registry = EventTypeRegistry(session_factory, cache)
    assert registry.resolve("contact_added") is None

    seed.event_type("contact_added")
    assert registry.resolve("contact_added") is None

    cache.invalidate(CacheNamespace.EVENT_TYPES)
    assert registry.resolve("contact_added") is not None


def test_routing_returns_enabled_targets_for_the_source_role(session_factory, seed) -> None:
    event_type = seed.event_type("contact_added")
    seed.route(event_type.id, "partner", "admin")
    seed.route(event_type.id, "partner", "manager")
    disabled = seed.route(event_type.id, "partner", "auditor", is_enabled=False)
    seed.route(event_type.id, "client", "support")
    routing = RoutingTable(session_factory, ConfigurationCache(0))

    assert routing.routes_for(event_type.id, "partner") == frozenset({"admin", "manager"})
    assert routing.routes_for(event_type.id, "admin") == frozenset()

    with session_factory() as session:
        set_routing_rule_enabled(session, rule_id=disabled.id, is_enabled=True)
    assert "auditor" in routing.routes_for(event_type.id, "partner")


def test_resolver_expands_roles_and_excludes_the_sender(make_directory) -> None:
    directory = make_directory({"a1": "admin", "a2": "admin", "m1": "manager", "p1": "partner"})
    resolver = RecipientResolver(directory)

    assert resolver.expand({"admin", "manager"}) == {"a1", "a2", "m1"}
    assert resolver.expand({"admin"}, exclude="a1") == {"a2"}
    assert resolver.expand(set()) == set()


def test_sql_role_directory_reads_the_role_table(session_factory, seed) -> None:
    seed.role("a1", "admin")
    seed.role("a2", "admin")
    seed.role("p1", "partner")
    seed.role("p1", "partner")
    directory = SqlRoleDirectory(session_factory)

    assert directory.role_of("p1") == "partner"
    assert directory.role_of("nobody") is None
    assert directory.members_of({"admin"}) == {"a1", "a2"}
    assert directory.members_of([]) == set()


def test_preferences_default_to_enabled(session_factory, seed) -> None:
    event_type = seed.event_type("contact_added")
    seed.preference("a2", event_type.id, False)
    seed.preference("a3", event_type.id, True)
    preferences = PreferenceFilter(session_factory, ConfigurationCache(0))

    assert preferences.is_enabled("a1", event_type.id) is True
    assert preferences.is_enabled("a2", event_type.id) is False
    assert preferences.is_enabled("a3", event_type.id) is True
