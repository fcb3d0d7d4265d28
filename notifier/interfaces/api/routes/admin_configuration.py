"""Administrator endpoints for event types, routing rules and rate limits."""

from __future__ import annotations

import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from notifier.application.use_cases.configuration import (
    ConfigurationConflictError,
    ConfigurationNotFoundError,
    add_routing_rule as add_routing_rule_uc,
    create_event_type as create_event_type_uc,
    delete_event_type as delete_event_type_uc,
    delete_rate_limit as delete_rate_limit_uc,
    delete_routing_rule as delete_routing_rule_uc,
    get_rate_limit as get_rate_limit_uc,
    list_event_types as list_event_types_uc,
    list_routing_rules as list_routing_rules_uc,
    set_rate_limit as set_rate_limit_uc,
    set_routing_rule_enabled as set_routing_rule_enabled_uc,
    update_event_type as update_event_type_uc,
)
from notifier.infrastructure.cache import ConfigurationCache
from notifier.infrastructure.database import get_db
from notifier.interfaces.api.dependencies import get_config_cache, require_admin
from notifier.interfaces.api.schemas import (
    EventTypeCreate,
    EventTypeRead,
    EventTypeUpdate,
    RateLimitRead,
    RateLimitUpsert,
    RoutingRuleCreate,
    RoutingRuleRead,
    RoutingRuleToggle,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _raise_http(exc: ValueError) -> NoReturn:
    """Translate a configuration error into the matching HTTP status."""

    if isinstance(exc, ConfigurationNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConfigurationConflictError):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    raise HTTPException(status_code=status_code, detail=str(exc)) from exc


@router.get("/event-types", response_model=list[EventTypeRead])
def list_event_types(
    active_only: bool = Query(default=False),
    db: Session = Depends(get_db),
) -> list[EventTypeRead]:
    event_types = list_event_types_uc(db, active_only=active_only)
    return [EventTypeRead.model_validate(event_type) for event_type in event_types]


@router.post("/event-types", response_model=EventTypeRead, status_code=status.HTTP_201_CREATED)
def create_event_type(
    event_type_in: EventTypeCreate,
    db: Session = Depends(get_db),
    cache: ConfigurationCache = Depends(get_config_cache),
) -> EventTypeRead:
    try:
        event_type = create_event_type_uc(db, **event_type_in.model_dump(), cache=cache)
    except ValueError as exc:
        _raise_http(exc)
    logger.info("Created event type %s", event_type.key)
    return EventTypeRead.model_validate(event_type)


@router.put("/event-types/{event_type_id}", response_model=EventTypeRead)
def update_event_type(
    event_type_id: int,
    event_type_in: EventTypeUpdate,
    db: Session = Depends(get_db),
    cache: ConfigurationCache = Depends(get_config_cache),
) -> EventTypeRead:
    """Update display data or (de)activate an event type."""

    try:
        event_type = update_event_type_uc(
            db,
            event_type_id=event_type_id,
            **event_type_in.model_dump(exclude_unset=True),
            cache=cache,
        )
    except ValueError as exc:
        _raise_http(exc)
    return EventTypeRead.model_validate(event_type)


@router.delete("/event-types/{event_type_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event_type(
    event_type_id: int,
    db: Session = Depends(get_db),
    cache: ConfigurationCache = Depends(get_config_cache),
) -> Response:
    """Delete an event type that was never emitted, with its configuration."""

    try:
        delete_event_type_uc(db, event_type_id=event_type_id, cache=cache)
    except ValueError as exc:
        _raise_http(exc)
    logger.info("Deleted event type %s", event_type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/event-types/{event_type_id}/routes", response_model=list[RoutingRuleRead])
def list_routing_rules(
    event_type_id: int,
    db: Session = Depends(get_db),
) -> list[RoutingRuleRead]:
    try:
        rules = list_routing_rules_uc(db, event_type_id=event_type_id)
    except ValueError as exc:
        _raise_http(exc)
    return [RoutingRuleRead.model_validate(rule) for rule in rules]


@router.post(
    "/event-types/{event_type_id}/routes",
    response_model=RoutingRuleRead,
    status_code=status.HTTP_201_CREATED,
)
def add_routing_rule(
    event_type_id: int,
    rule_in: RoutingRuleCreate,
    db: Session = Depends(get_db),
    cache: ConfigurationCache = Depends(get_config_cache),
) -> RoutingRuleRead:
    try:
        rule = add_routing_rule_uc(
            db,
            event_type_id=event_type_id,
            source_role=rule_in.source_role,
            target_role=rule_in.target_role,
            is_enabled=rule_in.is_enabled,
            cache=cache,
        )
    except ValueError as exc:
        _raise_http(exc)
    return RoutingRuleRead.model_validate(rule)


@router.patch("/routes/{rule_id}", response_model=RoutingRuleRead)
def toggle_routing_rule(
    rule_id: int,
    toggle_in: RoutingRuleToggle,
    db: Session = Depends(get_db),
    cache: ConfigurationCache = Depends(get_config_cache),
) -> RoutingRuleRead:
    try:
        rule = set_routing_rule_enabled_uc(
            db, rule_id=rule_id, is_enabled=toggle_in.is_enabled, cache=cache
        )
    except ValueError as exc:
        _raise_http(exc)
    return RoutingRuleRead.model_validate(rule)


@router.delete("/routes/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_routing_rule(
    rule_id: int,
    db: Session = Depends(get_db),
    cache: ConfigurationCache = Depends(get_config_cache),
) -> Response:
    try:
        delete_routing_rule_uc(db, rule_id=rule_id, cache=cache)
    except ValueError as exc:
        _raise_http(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/event-types/{event_type_id}/rate-limit", response_model=RateLimitRead)
def get_rate_limit(
    event_type_id: int,
    db: Session = Depends(get_db),
) -> RateLimitRead:
    try:
        policy = get_rate_limit_uc(db, event_type_id=event_type_id)
    except ValueError as exc:
        _raise_http(exc)
    return RateLimitRead.model_validate(policy)


@router.put("/event-types/{event_type_id}/rate-limit", response_model=RateLimitRead)
def set_rate_limit(
    event_type_id: int,
    policy_in: RateLimitUpsert,
    db: Session = Depends(get_db),
    cache: ConfigurationCache = Depends(get_config_cache),
) -> RateLimitRead:
    """Create or replace the rate-limit policy of an event type."""

    try:
        policy = set_rate_limit_uc(
            db, event_type_id=event_type_id, **policy_in.model_dump(), cache=cache
        )
    except ValueError as exc:
        _raise_http(exc)
    return RateLimitRead.model_validate(policy)


@router.delete("/event-types/{event_type_id}/rate-limit", status_code=status.HTTP_204_NO_CONTENT)
def delete_rate_limit(
    event_type_id: int,
    db: Session = Depends(get_db),
    cache: ConfigurationCache = Depends(get_config_cache),
) -> Response:
    try:
        delete_rate_limit_uc(db, event_type_id=event_type_id, cache=cache)
    except ValueError as exc:
        _raise_http(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
