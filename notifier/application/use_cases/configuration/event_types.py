"""Use cases for administering notification event types."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from notifier.domain.entities import EventType
from notifier.infrastructure.cache import CacheNamespace, ConfigurationCache
from notifier.infrastructure.repositories import (
    EventTypeRepository,
    RateLimitPolicyRepository,
    RoutingRuleRepository,
    UserPreferenceRepository,
)
from notifier.utils import now_in_app_timezone

from .errors import ConfigurationConflictError, ConfigurationNotFoundError
from .validators import get_event_type_or_raise, normalize_event_key, require_text

_UNSET = object()


def list_event_types(session: Session, *, active_only: bool = False) -> Sequence[EventType]:
    """Return event types ordered by display position."""

    return EventTypeRepository(session).list(active_only=active_only)


def create_event_type(
    session: Session,
    *,
    key: str,
    name: str,
    source_module: str = "general",
    description: str | None = None,
    icon_name: str | None = None,
    color: str | None = None,
    is_active: bool = True,
    cache: ConfigurationCache | None = None,
) -> EventType:
    """Register a new event type at the end of the display order."""

    repository = EventTypeRepository(session)
    normalized_key = normalize_event_key(key)
    if repository.get_by_key(normalized_key) is not None:
        raise ConfigurationConflictError(f"Event type '{normalized_key}' already exists")

    created = repository.create(
        EventType(
            id=None,
            key=normalized_key,
            name=require_text(name, "name"),
            source_module=require_text(source_module, "source_module"),
            description=description,
            icon_name=icon_name,
            color=color,
            is_active=is_active,
            position=repository.next_position(),
            created_at=now_in_app_timezone(),
        )
    )
    if cache is not None:
        cache.invalidate(CacheNamespace.EVENT_TYPES)
    return created


def update_event_type(
    session: Session,
    *,
    event_type_id: int,
    name: str | None = None,
    source_module: str | None = None,
    description: str | None | object = _UNSET,
    icon_name: str | None | object = _UNSET,
    color: str | None | object = _UNSET,
    is_active: bool | None = None,
    position: int | None = None,
    cache: ConfigurationCache | None = None,
) -> EventType:
    """Update the display data or the active flag of an event type.

    The ``key`` is immutable once created because emitters reference it.
    """

    current = get_event_type_or_raise(session, event_type_id)
    changes: dict[str, object] = {}
    if name is not None:
        changes["name"] = require_text(name, "name")
    if source_module is not None:
        changes["source_module"] = require_text(source_module, "source_module")
    if description is not _UNSET:
        changes["description"] = description
    if icon_name is not _UNSET:
        changes["icon_name"] = icon_name
    if color is not _UNSET:
        changes["color"] = color
    if is_active is not None:
        changes["is_active"] = is_active
    if position is not None:
        changes["position"] = position

    updated = EventTypeRepository(session).update(replace(current, **changes))
    if cache is not None:
        cache.invalidate(CacheNamespace.EVENT_TYPES)
    return updated


def delete_event_type(
    session: Session,
    *,
    event_type_id: int,
    cache: ConfigurationCache | None = None,
) -> None:
    """Delete an event type together with its rules, policy and preferences.

    Event types that were already emitted or delivered stay in place; they can
    be deactivated instead.
    """

    repository = EventTypeRepository(session)
    if repository.get(event_type_id) is None:
        raise ConfigurationNotFoundError(f"Event type with id {event_type_id} not found")
    if repository.is_referenced(event_type_id):
        raise ConfigurationConflictError(
            f"Event type {event_type_id} has emitted events; deactivate it instead"
        )

    RoutingRuleRepository(session).delete_for_event_type(event_type_id)
    RateLimitPolicyRepository(session).delete_for_event_type(event_type_id)
    UserPreferenceRepository(session).delete_for_event_type(event_type_id)
    repository.delete(event_type_id)
    if cache is not None:
        cache.invalidate()


__all__ = [
    "create_event_type",
    "delete_event_type",
    "list_event_types",
    "update_event_type",
]
