"""Repository implementations for infrastructure layer."""

from .delivery_log_repository import DeliveryLogRepository
from .event_type_repository import EventTypeRepository
from .notification_event_repository import NotificationEventRepository
from .notification_repository import NotificationRepository
from .rate_limit_policy_repository import RateLimitPolicyRepository
from .routing_rule_repository import RoutingRuleRepository
from .user_preference_repository import UserPreferenceRepository
from .user_role_repository import UserRoleRepository

__all__ = [
    "DeliveryLogRepository",
    "EventTypeRepository",
    "NotificationEventRepository",
    "NotificationRepository",
    "RateLimitPolicyRepository",
    "RoutingRuleRepository",
    "UserPreferenceRepository",
    "UserRoleRepository",
]
