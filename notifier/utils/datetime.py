"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from notifier.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved from the ``APP_TIMEZONE`` environment variable (via
    ``Settings``). Values that cannot be resolved fall back to ``UTC``. Offsets
    such as ``UTC+02:00`` are accepted as fixed-offset zones.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Return the current localized time without attaching ``tzinfo``."""

    localized = ensure_app_naive_datetime(now_in_app_timezone())
    if localized is None:  # pragma: no cover - unreachable for a concrete datetime
        msg = "Failed to compute the application naive datetime"
        raise RuntimeError(msg)
    return localized


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` localized to the app timezone but without ``tzinfo``.

    Delivery windows are compared inside the database, so every timestamp is
    stored as the naive local representation. Domain code keeps working with
    aware datetimes and converts at the repository boundary.
    """

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` as an IANA zone, then as a fixed offset, else UTC."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return _parse_offset(tz_name) or timezone.utc


def _parse_offset(tz_name: str) -> tzinfo | None:
    match = _OFFSET_PATTERN.match(tz_name)
    if match is None:
        return None
    offset = timedelta(hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0))
    if match.group("sign") == "-":
        offset = -offset
    return timezone(offset)
