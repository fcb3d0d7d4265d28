"""Domain entities exposed by the application."""

from .delivery import DeliveryOutcome, EmitReport, RateLimitDecision
from .delivery_log_entry import DeliveryLogEntry
from .event_type import EventType
from .notification import Notification
from .notification_event import NotificationEvent
from .rate_limit_policy import RateLimitPolicy
from .routing_rule import RoutingRule
from .user_preference import UserPreference

__all__ = [
    "DeliveryLogEntry",
    "DeliveryOutcome",
    "EmitReport",
    "EventType",
    "Notification",
    "NotificationEvent",
    "RateLimitDecision",
    "RateLimitPolicy",
    "RoutingRule",
    "UserPreference",
]
