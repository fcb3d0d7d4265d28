"""Schemas for routing rule endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RoutingRuleCreate(BaseModel):
    source_role: str = Field(..., min_length=1, max_length=50)
    target_role: str = Field(..., min_length=1, max_length=50)
    is_enabled: bool = True


class RoutingRuleToggle(BaseModel):
    is_enabled: bool

    model_config = ConfigDict(extra="forbid")


class RoutingRuleRead(BaseModel):
    id: int
    event_type_id: int
    source_role: str
    target_role: str
    is_enabled: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["RoutingRuleCreate", "RoutingRuleRead", "RoutingRuleToggle"]
