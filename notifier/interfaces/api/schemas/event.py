"""Schemas for emitting events over HTTP."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class EventEmitRequest(BaseModel):
    """An occurrence reported by the calling user."""

    event_key: str = Field(..., min_length=1, max_length=100)
    payload: dict[str, Any] = Field(default_factory=dict)
    related_entity_type: str | None = Field(default=None, max_length=100)
    related_entity_id: str | None = Field(default=None, max_length=100)


class EventEmitResponse(BaseModel):
    accepted: bool


__all__ = ["EventEmitRequest", "EventEmitResponse"]
