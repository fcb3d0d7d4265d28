"""Schemas for the notification settings of the calling user."""

from __future__ import annotations

from pydantic import BaseModel


class PreferenceUpdate(BaseModel):
    is_enabled: bool


class PreferenceRead(BaseModel):
    """An active event type and whether the caller receives it."""

    event_type_id: int
    event_key: str
    name: str
    source_module: str
    description: str | None = None
    icon_name: str | None = None
    color: str | None = None
    is_enabled: bool


__all__ = ["PreferenceRead", "PreferenceUpdate"]
