"""Schemas for event type administration endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EventTypeCreate(BaseModel):
    """Payload required to register an event type."""

    key: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=200)
    source_module: str = Field(default="general", min_length=1, max_length=100)
    description: str | None = None
    icon_name: str | None = Field(default=None, max_length=100)
    color: str | None = Field(default=None, max_length=50)
    is_active: bool = True


class EventTypeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    source_module: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    icon_name: str | None = Field(default=None, max_length=100)
    color: str | None = Field(default=None, max_length=50)
    is_active: bool | None = None
    position: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")


class EventTypeRead(BaseModel):
    id: int
    key: str
    name: str
    source_module: str
    description: str | None = None
    icon_name: str | None = None
    color: str | None = None
    is_active: bool
    position: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["EventTypeCreate", "EventTypeRead", "EventTypeUpdate"]
