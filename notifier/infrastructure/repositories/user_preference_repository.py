"""Persistence layer for user notification preferences."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notifier.domain.entities import UserPreference
from notifier.infrastructure.models import UserPreferenceModel


class UserPreferenceRepository:
    """Provide read and upsert access to :class:`UserPreference` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str, event_type_id: int) -> UserPreference | None:
        model = self._get_model(user_id, event_type_id)
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: str) -> Sequence[UserPreference]:
        query = self.session.query(UserPreferenceModel).filter(
            UserPreferenceModel.user_id == user_id
        )
        return [self._to_entity(model) for model in query.all()]

    def upsert(self, preference: UserPreference) -> UserPreference:
        model = self._get_model(preference.user_id, preference.event_type_id)
        if model is None:
            model = UserPreferenceModel(
                user_id=preference.user_id, event_type_id=preference.event_type_id
            )
        model.is_enabled = preference.is_enabled
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_for_event_type(self, event_type_id: int) -> int:
        """Remove every preference of ``event_type_id`` without committing."""

        return (
            self.session.query(UserPreferenceModel)
            .filter(UserPreferenceModel.event_type_id == event_type_id)
            .delete(synchronize_session=False)
        )

    def _get_model(self, user_id: str, event_type_id: int) -> UserPreferenceModel | None:
        return (
            self.session.query(UserPreferenceModel)
            .filter_by(user_id=user_id, event_type_id=event_type_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: UserPreferenceModel) -> UserPreference:
        return UserPreference(
            user_id=model.user_id,
            event_type_id=model.event_type_id,
            is_enabled=bool(model.is_enabled),
        )


__all__ = ["UserPreferenceRepository"]
