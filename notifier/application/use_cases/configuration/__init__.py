"""Administration of event types, routing rules, rate limits and preferences."""

from .errors import ConfigurationConflictError, ConfigurationNotFoundError
from .event_types import (
    create_event_type,
    delete_event_type,
    list_event_types,
    update_event_type,
)
from .history import list_notification_history
from .preferences import PreferenceSetting, list_user_preferences, set_user_preference
from .rate_limits import delete_rate_limit, get_rate_limit, set_rate_limit
from .routing_rules import (
    add_routing_rule,
    delete_routing_rule,
    list_routing_rules,
    set_routing_rule_enabled,
)

__all__ = [
    "ConfigurationConflictError",
    "ConfigurationNotFoundError",
    "PreferenceSetting",
    "add_routing_rule",
    "create_event_type",
    "delete_event_type",
    "delete_rate_limit",
    "delete_routing_rule",
    "get_rate_limit",
    "list_event_types",
    "list_notification_history",
    "list_routing_rules",
    "list_user_preferences",
    "set_rate_limit",
    "set_routing_rule_enabled",
    "set_user_preference",
    "update_event_type",
]
