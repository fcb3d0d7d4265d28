"""Domain entity holding the delivery limits of an event type."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class RateLimitPolicy:
    """Cooldown and rolling caps applied per (user, event type).

    ``None`` caps are unlimited and a ``cooldown_minutes`` of ``0`` disables
    the cooldown gate.
    """

    id: int | None
    event_type_id: int
    cooldown_minutes: int = 5
    max_per_hour: int | None = 10
    max_per_day: int | None = 50
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_limiting(self) -> bool:
        """Return ``True`` when at least one gate can reject a delivery."""

        return self.is_active and (
            self.cooldown_minutes > 0
            or self.max_per_hour is not None
            or self.max_per_day is not None
        )


__all__ = ["RateLimitPolicy"]
