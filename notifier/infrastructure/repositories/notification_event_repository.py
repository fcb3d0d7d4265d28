"""Persistence helpers for emitted notification events."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from notifier.domain.entities import NotificationEvent
from notifier.infrastructure.models import NotificationEventModel
from notifier.utils import ensure_app_naive_datetime, ensure_app_timezone


class NotificationEventRepository:
    """Record emissions and mark them processed once fan-out completes."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_id: int) -> NotificationEvent | None:
        model = self.session.get(NotificationEventModel, event_id)
        return self._to_entity(model) if model else None

    def create(self, event: NotificationEvent) -> NotificationEvent:
        model = NotificationEventModel(
            event_type_id=event.event_type_id,
            event_key=event.event_key,
            sender_id=event.sender_id,
            sender_role=event.sender_role,
            payload=event.payload or {},
            related_entity_type=event.related_entity_type,
            related_entity_id=event.related_entity_id,
            created_at=ensure_app_naive_datetime(event.created_at),
            processed=False,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_processed(self, event_id: int, *, processed_at: datetime) -> None:
        self.session.query(NotificationEventModel).filter(
            NotificationEventModel.id == event_id
        ).update(
            {
                NotificationEventModel.processed: True,
                NotificationEventModel.processed_at: ensure_app_naive_datetime(
                    processed_at
                ),
            },
            synchronize_session=False,
        )
        self.session.commit()

    @staticmethod
    def _to_entity(model: NotificationEventModel) -> NotificationEvent:
        return NotificationEvent(
            id=model.id,
            event_type_id=model.event_type_id,
            event_key=model.event_key,
            sender_id=model.sender_id,
            sender_role=model.sender_role,
            payload=model.payload or {},
            related_entity_type=model.related_entity_type,
            related_entity_id=model.related_entity_id,
            created_at=ensure_app_timezone(model.created_at),
            processed=bool(model.processed),
            processed_at=ensure_app_timezone(model.processed_at),
        )


__all__ = ["NotificationEventRepository"]
