from .event import EventEmitRequest, EventEmitResponse
from .event_type import EventTypeCreate, EventTypeRead, EventTypeUpdate
from .notification import NotificationRead
from .preference import PreferenceRead, PreferenceUpdate
from .rate_limit import RateLimitRead, RateLimitUpsert
from .routing_rule import RoutingRuleCreate, RoutingRuleRead, RoutingRuleToggle

__all__ = [
    "EventEmitRequest",
    "EventEmitResponse",
    "EventTypeCreate",
    "EventTypeRead",
    "EventTypeUpdate",
    "NotificationRead",
    "PreferenceRead",
    "PreferenceUpdate",
    "RateLimitRead",
    "RateLimitUpsert",
    "RoutingRuleCreate",
    "RoutingRuleRead",
    "RoutingRuleToggle",
]
