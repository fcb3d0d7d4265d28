"""Endpoint for emitting events as the calling user."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from notifier.application.use_cases import NotificationEngine
from notifier.interfaces.api.dependencies import get_current_user_id, get_engine
from notifier.interfaces.api.schemas import EventEmitRequest, EventEmitResponse

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventEmitResponse, status_code=status.HTTP_202_ACCEPTED)
async def emit_event(
    event_in: EventEmitRequest,
    user_id: str = Depends(get_current_user_id),
    engine: NotificationEngine = Depends(get_engine),
) -> EventEmitResponse:
    """Route the event to its recipients; the caller's role picks the routes."""

    accepted = await run_in_threadpool(
        engine.emit_event,
        event_in.event_key,
        user_id,
        payload=event_in.payload,
        related_entity_type=event_in.related_entity_type,
        related_entity_id=event_in.related_entity_id,
    )
    return EventEmitResponse(accepted=accepted)
