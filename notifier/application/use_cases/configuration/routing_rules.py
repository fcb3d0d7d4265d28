"""Use cases for administering role routing rules."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notifier.domain.entities import RoutingRule
from notifier.infrastructure.cache import CacheNamespace, ConfigurationCache
from notifier.infrastructure.repositories import RoutingRuleRepository

from .errors import ConfigurationConflictError, ConfigurationNotFoundError
from .validators import get_event_type_or_raise, normalize_role


def list_routing_rules(session: Session, *, event_type_id: int) -> Sequence[RoutingRule]:
    get_event_type_or_raise(session, event_type_id)
    return RoutingRuleRepository(session).list_for_event_type(event_type_id)


def add_routing_rule(
    session: Session,
    *,
    event_type_id: int,
    source_role: str,
    target_role: str,
    is_enabled: bool = True,
    cache: ConfigurationCache | None = None,
) -> RoutingRule:
    """Allow ``source_role`` senders to notify ``target_role`` members."""

    get_event_type_or_raise(session, event_type_id)
    repository = RoutingRuleRepository(session)
    source = normalize_role(source_role)
    target = normalize_role(target_role)
    if repository.find(
        event_type_id=event_type_id, source_role=source, target_role=target
    ) is not None:
        msg = f"Route {source} -> {target} already exists for event type {event_type_id}"
        raise ConfigurationConflictError(msg)

    rule = repository.create(
        RoutingRule(
            id=None,
            event_type_id=event_type_id,
            source_role=source,
            target_role=target,
            is_enabled=is_enabled,
        )
    )
    if cache is not None:
        cache.invalidate(CacheNamespace.ROUTES)
    return rule


def set_routing_rule_enabled(
    session: Session,
    *,
    rule_id: int,
    is_enabled: bool,
    cache: ConfigurationCache | None = None,
) -> RoutingRule:
    repository = RoutingRuleRepository(session)
    if repository.get(rule_id) is None:
        raise ConfigurationNotFoundError(f"Routing rule with id {rule_id} not found")
    rule = repository.set_enabled(rule_id, is_enabled)
    if cache is not None:
        cache.invalidate(CacheNamespace.ROUTES)
    return rule


def delete_routing_rule(
    session: Session,
    *,
    rule_id: int,
    cache: ConfigurationCache | None = None,
) -> None:
    if not RoutingRuleRepository(session).delete(rule_id):
        raise ConfigurationNotFoundError(f"Routing rule with id {rule_id} not found")
    if cache is not None:
        cache.invalidate(CacheNamespace.ROUTES)


__all__ = [
    "add_routing_rule",
    "delete_routing_rule",
    "list_routing_rules",
    "set_routing_rule_enabled",
]
