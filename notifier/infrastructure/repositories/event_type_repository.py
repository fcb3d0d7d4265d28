"""Persistence layer for notification event types."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, true
from sqlalchemy.orm import Session

from notifier.domain.entities import EventType
from notifier.infrastructure.models import (
    DeliveryLogModel,
    EventTypeModel,
    NotificationEventModel,
)
from notifier.utils import ensure_app_naive_datetime, ensure_app_timezone


class EventTypeRepository:
    """Provide CRUD operations for :class:`EventType` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_type_id: int) -> EventType | None:
        model = self.session.get(EventTypeModel, event_type_id)
        return self._to_entity(model) if model else None

    def get_by_key(self, key: str) -> EventType | None:
        model = self.session.query(EventTypeModel).filter_by(key=key).first()
        return self._to_entity(model) if model else None

    def get_active_by_key(self, key: str) -> EventType | None:
        """Return the event type for ``key`` only when it is active."""

        model = (
            self.session.query(EventTypeModel)
            .filter(EventTypeModel.key == key)
            .filter(EventTypeModel.is_active == true())
            .first()
        )
        return self._to_entity(model) if model else None

    def list(self, *, active_only: bool = False) -> Sequence[EventType]:
        query = self.session.query(EventTypeModel)
        if active_only:
            query = query.filter(EventTypeModel.is_active == true())
        query = query.order_by(EventTypeModel.position, EventTypeModel.id)
        return [self._to_entity(model) for model in query.all()]

    def next_position(self) -> int:
        current = self.session.query(func.max(EventTypeModel.position)).scalar()
        return 0 if current is None else current + 1

    def create(self, event_type: EventType) -> EventType:
        model = EventTypeModel()
        self._apply_entity_to_model(model, event_type)
        if event_type.created_at is not None:
            model.created_at = ensure_app_naive_datetime(event_type.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, event_type: EventType) -> EventType:
        if event_type.id is None:
            raise ValueError("Event type id is required for updates")
        model = self.session.get(EventTypeModel, event_type.id)
        if model is None:
            msg = f"Event type with id {event_type.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, event_type)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def is_referenced(self, event_type_id: int) -> bool:
        """Return ``True`` when emitted events or deliveries point at the type."""

        delivered = (
            self.session.query(DeliveryLogModel.id)
            .filter(DeliveryLogModel.event_type_id == event_type_id)
            .first()
        )
        if delivered is not None:
            return True
        emitted = (
            self.session.query(NotificationEventModel.id)
            .filter(NotificationEventModel.event_type_id == event_type_id)
            .first()
        )
        return emitted is not None

    def delete(self, event_type_id: int) -> bool:
        model = self.session.get(EventTypeModel, event_type_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _apply_entity_to_model(model: EventTypeModel, event_type: EventType) -> None:
        model.key = event_type.key
        model.name = event_type.name
        model.description = event_type.description
        model.source_module = event_type.source_module
        model.icon_name = event_type.icon_name
        model.color = event_type.color
        model.position = event_type.position
        model.is_active = event_type.is_active

    @staticmethod
    def _to_entity(model: EventTypeModel) -> EventType:
        return EventType(
            id=model.id,
            key=model.key,
            name=model.name,
            description=model.description,
            source_module=model.source_module,
            icon_name=model.icon_name,
            color=model.color,
            position=model.position or 0,
            is_active=bool(model.is_active),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["EventTypeRepository"]
