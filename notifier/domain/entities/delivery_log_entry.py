"""Domain entity for the append-only delivery ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class DeliveryLogEntry:
    """Record that ``user_id`` was notified about ``event_type_id``."""

    id: int | None
    user_id: str
    event_type_id: int
    delivered_at: datetime
    event_id: int | None = None


__all__ = ["DeliveryLogEntry"]
