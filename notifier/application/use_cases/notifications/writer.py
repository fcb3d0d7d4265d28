"""Creation of notifications and their delivery log entries."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from notifier.domain.entities import DeliveryLogEntry, EventType, Notification
from notifier.infrastructure.repositories import (
    DeliveryLogRepository,
    NotificationRepository,
)


class NotificationWriter:
    """Only writer of ``notification`` and ``notification_delivery_log`` rows."""

    def deliver(
        self,
        session: Session,
        *,
        user_id: str,
        sender_id: str | None,
        event_type: EventType,
        payload: dict[str, Any],
        delivered_at: datetime,
        event_id: int | None = None,
        related_entity_type: str | None = None,
        related_entity_id: str | None = None,
    ) -> int:
        """Add the notification and its log entry to the open transaction.

        Nothing is committed here; the caller commits both rows together with
        the rate-limit check that allowed them.
        """

        if event_type.id is None:
            raise ValueError("Event type must be persisted before delivery")

        notification = NotificationRepository(session).add(
            build_notification(
                user_id=user_id,
                sender_id=sender_id,
                event_type=event_type,
                payload=payload,
                created_at=delivered_at,
                related_entity_type=related_entity_type,
                related_entity_id=related_entity_id,
            )
        )
        DeliveryLogRepository(session).append(
            DeliveryLogEntry(
                id=None,
                user_id=user_id,
                event_type_id=event_type.id,
                event_id=event_id,
                delivered_at=delivered_at,
            )
        )
        if notification.id is None:  # pragma: no cover - flush always assigns ids
            raise RuntimeError("Notification id was not assigned")
        return notification.id


def build_notification(
    *,
    user_id: str,
    sender_id: str | None,
    event_type: EventType,
    payload: dict[str, Any],
    created_at: datetime,
    related_entity_type: str | None = None,
    related_entity_id: str | None = None,
) -> Notification:
    """Render the notification a recipient sees for ``event_type``."""

    message = payload.get("message") or event_type.description or ""
    link = payload.get("link")
    metadata = {
        **payload,
        "event_type_id": event_type.id,
        "related_entity_type": related_entity_type,
        "related_entity_id": related_entity_id,
    }
    return Notification(
        id=None,
        user_id=user_id,
        sender_id=sender_id,
        event_type_id=event_type.id,
        notification_type=event_type.key,
        source_module=event_type.source_module,
        title=event_type.name,
        message=str(message),
        link=str(link) if link else None,
        metadata=metadata,
        created_at=created_at,
    )


__all__ = ["NotificationWriter", "build_notification"]
