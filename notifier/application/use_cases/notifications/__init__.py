"""Event routing, rate limiting and delivery of notifications."""

from .engine import DeliveryTicket, NotificationEngine
from .preferences import PreferenceFilter
from .rate_limiter import RateLimiter
from .recipients import RecipientResolver, RoleDirectory, SqlRoleDirectory
from .registry import EventTypeRegistry
from .routing import RoutingTable
from .writer import NotificationWriter, build_notification

__all__ = [
    "DeliveryTicket",
    "EventTypeRegistry",
    "NotificationEngine",
    "NotificationWriter",
    "PreferenceFilter",
    "RateLimiter",
    "RecipientResolver",
    "RoleDirectory",
    "RoutingTable",
    "SqlRoleDirectory",
    "build_notification",
]
