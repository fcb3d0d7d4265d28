"""Domain entity mapping a sender role to a recipient role."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class RoutingRule:
    """Senders holding ``source_role`` may notify holders of ``target_role``."""

    id: int | None
    event_type_id: int
    source_role: str
    target_role: str
    is_enabled: bool = True
    created_at: datetime | None = None


__all__ = ["RoutingRule"]
