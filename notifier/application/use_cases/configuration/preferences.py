"""Use cases for the notification settings of a user."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from notifier.domain.entities import EventType, UserPreference
from notifier.infrastructure.cache import CacheNamespace, ConfigurationCache
from notifier.infrastructure.repositories import (
    EventTypeRepository,
    UserPreferenceRepository,
)

from .validators import get_event_type_or_raise


@dataclass(frozen=True)
class PreferenceSetting:
    """An active event type and whether the user receives it."""

    event_type: EventType
    is_enabled: bool


def list_user_preferences(session: Session, *, user_id: str) -> Sequence[PreferenceSetting]:
    """Return every active event type with the user's effective setting."""

    stored = {
        preference.event_type_id: preference.is_enabled
        for preference in UserPreferenceRepository(session).list_for_user(user_id)
    }
    return [
        PreferenceSetting(event_type=event_type, is_enabled=stored.get(event_type.id, True))
        for event_type in EventTypeRepository(session).list(active_only=True)
    ]


def set_user_preference(
    session: Session,
    *,
    user_id: str,
    event_type_id: int,
    is_enabled: bool,
    cache: ConfigurationCache | None = None,
) -> UserPreference:
    """Opt ``user_id`` in or out of ``event_type_id`` notifications."""

    if not user_id:
        raise ValueError("user_id is required.")
    get_event_type_or_raise(session, event_type_id)
    preference = UserPreferenceRepository(session).upsert(
        UserPreference(user_id=user_id, event_type_id=event_type_id, is_enabled=is_enabled)
    )
    if cache is not None:
        cache.invalidate(CacheNamespace.PREFERENCES)
    return preference


__all__ = ["PreferenceSetting", "list_user_preferences", "set_user_preference"]
