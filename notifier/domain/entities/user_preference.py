"""Domain entity representing a per-user opt-out."""

from dataclasses import dataclass


@dataclass
class UserPreference:
    """Whether ``user_id`` wants notifications of ``event_type_id``."""

    user_id: str
    event_type_id: int
    is_enabled: bool


__all__ = ["UserPreference"]
