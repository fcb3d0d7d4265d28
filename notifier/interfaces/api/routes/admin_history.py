"""Administrator endpoint listing the delivery history."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from notifier.application.use_cases.configuration import list_notification_history
from notifier.infrastructure.database import get_db
from notifier.interfaces.api.dependencies import require_admin
from notifier.interfaces.api.schemas import NotificationRead

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/notifications", response_model=list[NotificationRead])
def list_notifications(
    date_from: datetime | None = Query(default=None),
    date_to: datetime | None = Query(default=None),
    search: str | None = Query(default=None, max_length=200),
    user_id: str | None = Query(default=None),
    event_type_id: int | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> list[NotificationRead]:
    """Return delivered notifications, newest first."""

    try:
        notifications = list_notification_history(
            db,
            user_id=user_id,
            event_type_id=event_type_id,
            date_from=date_from,
            date_to=date_to,
            search=search,
            limit=limit,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [NotificationRead.model_validate(notification) for notification in notifications]
