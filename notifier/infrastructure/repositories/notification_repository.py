"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from notifier.domain.entities import Notification
from notifier.infrastructure.models import NotificationModel
from notifier.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Write and query :class:`Notification` rows.

    ``add`` only flushes: notifications are written inside the transaction
    that also appends the delivery log entry, and the caller commits.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def list_history(
        self,
        *,
        user_id: str | None = None,
        event_type_id: int | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        search: str | None = None,
        limit: int | None = 200,
    ) -> Sequence[Notification]:
        """Return notifications, newest first, filtered for the history view."""

        query = self.session.query(NotificationModel)
        if user_id is not None:
            query = query.filter(NotificationModel.user_id == user_id)
        if event_type_id is not None:
            query = query.filter(NotificationModel.event_type_id == event_type_id)
        if date_from is not None:
            query = query.filter(
                NotificationModel.created_at >= ensure_app_naive_datetime(date_from)
            )
        if date_to is not None:
            query = query.filter(
                NotificationModel.created_at <= ensure_app_naive_datetime(date_to)
            )
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    NotificationModel.title.ilike(pattern),
                    NotificationModel.message.ilike(pattern),
                )
            )
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        model.user_id = notification.user_id
        model.sender_id = notification.sender_id
        model.event_type_id = notification.event_type_id
        model.notification_type = notification.notification_type
        model.source_module = notification.source_module
        model.title = notification.title
        model.message = notification.message
        model.link = notification.link
        model.metadata_ = notification.metadata or {}
        model.is_read = notification.is_read
        model.read_at = ensure_app_naive_datetime(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            sender_id=model.sender_id,
            event_type_id=model.event_type_id,
            notification_type=model.notification_type,
            source_module=model.source_module,
            title=model.title,
            message=model.message,
            link=model.link,
            metadata=model.metadata_ or {},
            created_at=ensure_app_timezone(model.created_at),
            is_read=bool(model.is_read),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["NotificationRepository"]
