"""Endpoints for the caller's notification settings."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from notifier.application.use_cases.configuration import (
    ConfigurationNotFoundError,
    PreferenceSetting,
    list_user_preferences,
    set_user_preference,
)
from notifier.infrastructure.cache import ConfigurationCache
from notifier.infrastructure.database import get_db
from notifier.infrastructure.repositories import EventTypeRepository
from notifier.interfaces.api.dependencies import get_config_cache, get_current_user_id
from notifier.interfaces.api.schemas import PreferenceRead, PreferenceUpdate

router = APIRouter(prefix="/preferences", tags=["preferences"])


def _to_read_model(setting: PreferenceSetting) -> PreferenceRead:
    event_type = setting.event_type
    return PreferenceRead(
        event_type_id=event_type.id or 0,
        event_key=event_type.key,
        name=event_type.name,
        source_module=event_type.source_module,
        description=event_type.description,
        icon_name=event_type.icon_name,
        color=event_type.color,
        is_enabled=setting.is_enabled,
    )


@router.get("", response_model=list[PreferenceRead])
def list_preferences(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> list[PreferenceRead]:
    return [_to_read_model(setting) for setting in list_user_preferences(db, user_id=user_id)]


@router.put("/{event_type_id}", response_model=PreferenceRead)
def update_preference(
    event_type_id: int,
    preference_in: PreferenceUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    cache: ConfigurationCache = Depends(get_config_cache),
) -> PreferenceRead:
    """Opt the caller in or out of one event type."""

    try:
        preference = set_user_preference(
            db,
            user_id=user_id,
            event_type_id=event_type_id,
            is_enabled=preference_in.is_enabled,
            cache=cache,
        )
    except ConfigurationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    event_type = EventTypeRepository(db).get(event_type_id)
    setting = PreferenceSetting(event_type=event_type, is_enabled=preference.is_enabled)
    return _to_read_model(setting)
