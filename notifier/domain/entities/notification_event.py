"""Domain entity recording an accepted event emission."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class NotificationEvent:
    """A single emitted event and whether its fan-out has finished."""

    id: int | None
    event_type_id: int
    event_key: str
    sender_id: str
    sender_role: str | None
    payload: dict[str, Any] = field(default_factory=dict)
    related_entity_type: str | None = None
    related_entity_id: str | None = None
    created_at: datetime | None = None
    processed: bool = False
    processed_at: datetime | None = None


__all__ = ["NotificationEvent"]
