"""ORM models used by the application infrastructure."""

from .delivery_log import DeliveryGuardModel, DeliveryLogModel
from .event_type import EventTypeModel
from .notification import NotificationModel
from .notification_event import NotificationEventModel
from .rate_limit_policy import RateLimitPolicyModel
from .routing_rule import RoutingRuleModel
from .user_preference import UserPreferenceModel
from .user_role import UserRoleModel

__all__ = [
    "DeliveryGuardModel",
    "DeliveryLogModel",
    "EventTypeModel",
    "NotificationEventModel",
    "NotificationModel",
    "RateLimitPolicyModel",
    "RoutingRuleModel",
    "UserPreferenceModel",
    "UserRoleModel",
]
