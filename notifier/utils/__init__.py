"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
)
from .names import canonical_name

__all__ = [
    "canonical_name",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
]
