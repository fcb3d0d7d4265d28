"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: str
    sender_id: str | None
    event_type_id: int | None
    notification_type: str
    title: str
    message: str
    source_module: str | None = None
    link: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    is_read: bool = False
    read_at: datetime | None = None


__all__ = ["Notification"]
