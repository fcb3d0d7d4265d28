"""Domain entity describing a kind of notification event."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class EventType:
    """Configured event definition looked up by its stable ``key``."""

    id: int | None
    key: str
    name: str
    source_module: str
    is_active: bool = True
    description: str | None = None
    icon_name: str | None = None
    color: str | None = None
    position: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["EventType"]
