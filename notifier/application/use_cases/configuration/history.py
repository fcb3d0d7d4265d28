"""Use case listing delivered notifications for administrators."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from notifier.domain.entities import Notification
from notifier.infrastructure.repositories import NotificationRepository


def list_notification_history(
    session: Session,
    *,
    user_id: str | None = None,
    event_type_id: int | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    search: str | None = None,
    limit: int = 200,
) -> Sequence[Notification]:
    """Return the newest notifications matching the filters."""

    if date_from is not None and date_to is not None and date_from > date_to:
        raise ValueError("date_from must not be later than date_to.")
    return NotificationRepository(session).list_history(
        user_id=user_id,
        event_type_id=event_type_id,
        date_from=date_from,
        date_to=date_to,
        search=search,
        limit=limit,
    )


__all__ = ["list_notification_history"]
