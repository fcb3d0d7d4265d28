"""Persistence helpers for the append-only delivery log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from notifier.domain.entities import DeliveryLogEntry
from notifier.infrastructure.models import DeliveryLogModel
from notifier.utils import ensure_app_naive_datetime, ensure_app_timezone


class DeliveryLogRepository:
    """Append and count :class:`DeliveryLogEntry` rows.

    Entries are never updated or deleted here. Retention runs outside this
    service.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(self, entry: DeliveryLogEntry) -> DeliveryLogEntry:
        model = DeliveryLogModel(
            user_id=entry.user_id,
            event_type_id=entry.event_type_id,
            event_id=entry.event_id,
            delivered_at=ensure_app_naive_datetime(entry.delivered_at),
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def exists_since(self, user_id: str, event_type_id: int, since: datetime) -> bool:
        row = (
            self._window(user_id, event_type_id, since)
            .with_entities(DeliveryLogModel.id)
            .first()
        )
        return row is not None

    def count_since(self, user_id: str, event_type_id: int, since: datetime) -> int:
        return (
            self._window(user_id, event_type_id, since)
            .with_entities(func.count(DeliveryLogModel.id))
            .scalar()
            or 0
        )

    def list_for(self, user_id: str, event_type_id: int) -> Sequence[DeliveryLogEntry]:
        query = (
            self.session.query(DeliveryLogModel)
            .filter(DeliveryLogModel.user_id == user_id)
            .filter(DeliveryLogModel.event_type_id == event_type_id)
            .order_by(DeliveryLogModel.delivered_at, DeliveryLogModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def _window(self, user_id: str, event_type_id: int, since: datetime):
        return (
            self.session.query(DeliveryLogModel)
            .filter(DeliveryLogModel.user_id == user_id)
            .filter(DeliveryLogModel.event_type_id == event_type_id)
            .filter(DeliveryLogModel.delivered_at >= ensure_app_naive_datetime(since))
        )

    @staticmethod
    def _to_entity(model: DeliveryLogModel) -> DeliveryLogEntry:
        return DeliveryLogEntry(
            id=model.id,
            user_id=model.user_id,
            event_type_id=model.event_type_id,
            event_id=model.event_id,
            delivered_at=ensure_app_timezone(model.delivered_at),
        )


__all__ = ["DeliveryLogRepository"]
