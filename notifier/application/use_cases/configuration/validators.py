"""Normalization helpers shared by the configuration use cases."""

from __future__ import annotations

import re

from sqlalchemy.orm import Session

from notifier.domain.entities import EventType
from notifier.infrastructure.repositories import EventTypeRepository
from notifier.utils import canonical_name

from .errors import ConfigurationNotFoundError

_EVENT_KEY_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_.\-]*$")


def normalize_event_key(value: str) -> str:
    """Return ``value`` stripped and lower-cased, rejecting invalid keys."""

    normalized = canonical_name(value)
    if not normalized:
        raise ValueError("Event key is required.")
    if not _EVENT_KEY_PATTERN.match(normalized):
        msg = f"Invalid event key '{value}': use lowercase letters, digits, '_', '.' or '-'."
        raise ValueError(msg)
    return normalized


def normalize_role(value: str) -> str:
    normalized = canonical_name(value)
    if not normalized:
        raise ValueError("Role names must be non-empty.")
    return normalized


def require_text(value: str | None, field_name: str) -> str:
    normalized = (value or "").strip()
    if not normalized:
        raise ValueError(f"{field_name} is required.")
    return normalized


def get_event_type_or_raise(session: Session, event_type_id: int) -> EventType:
    event_type = EventTypeRepository(session).get(event_type_id)
    if event_type is None:
        raise ConfigurationNotFoundError(f"Event type with id {event_type_id} not found")
    return event_type


__all__ = [
    "get_event_type_or_raise",
    "normalize_event_key",
    "normalize_role",
    "require_text",
]
