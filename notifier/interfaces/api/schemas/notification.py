"""Pydantic models describing delivered notifications."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification row in the delivery history."""

    id: int
    user_id: str
    sender_id: str | None = None
    event_type_id: int | None = None
    notification_type: str
    title: str
    message: str
    source_module: str | None = None
    link: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    is_read: bool = False
    read_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["NotificationRead"]
