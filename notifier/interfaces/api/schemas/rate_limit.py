"""Schemas for rate-limit policy endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RateLimitUpsert(BaseModel):
    """Policy values; a null cap means the window is not limited."""

    cooldown_minutes: int = Field(default=5, ge=0)
    max_per_hour: int | None = Field(default=10, ge=1)
    max_per_day: int | None = Field(default=50, ge=1)
    is_active: bool = True


class RateLimitRead(BaseModel):
    id: int
    event_type_id: int
    cooldown_minutes: int
    max_per_hour: int | None
    max_per_day: int | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["RateLimitRead", "RateLimitUpsert"]
