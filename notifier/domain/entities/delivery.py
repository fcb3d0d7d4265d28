"""Value objects describing the result of a fan-out."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DeliveryOutcome(str, Enum):
    """Per-recipient result of an emitted event."""

    DELIVERED = "delivered"
    OPTED_OUT = "opted_out"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class RateLimitDecision:
    """Result of evaluating the rate-limit gates for one recipient."""

    allowed: bool
    reason: str


@dataclass
class EmitReport:
    """Summary of a single ``emit`` call."""

    accepted: bool
    event_id: int | None = None
    outcomes: dict[str, DeliveryOutcome] = field(default_factory=dict)

    def recipients_with(self, outcome: DeliveryOutcome) -> set[str]:
        """Return the recipients that ended with ``outcome``."""

        return {user_id for user_id, value in self.outcomes.items() if value is outcome}


__all__ = ["DeliveryOutcome", "EmitReport", "RateLimitDecision"]
