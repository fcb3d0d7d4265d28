"""Persistence layer for rate-limit policies."""

from __future__ import annotations

from sqlalchemy.orm import Session

from notifier.domain.entities import RateLimitPolicy
from notifier.infrastructure.models import RateLimitPolicyModel
from notifier.utils import ensure_app_timezone


class RateLimitPolicyRepository:
    """Provide read and upsert access to :class:`RateLimitPolicy` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_event_type(self, event_type_id: int) -> RateLimitPolicy | None:
        model = self._get_model(event_type_id)
        return self._to_entity(model) if model else None

    def upsert(self, policy: RateLimitPolicy) -> RateLimitPolicy:
        """Create or replace the single policy of ``policy.event_type_id``."""

        model = self._get_model(policy.event_type_id)
        if model is None:
            model = RateLimitPolicyModel(event_type_id=policy.event_type_id)
        model.cooldown_minutes = policy.cooldown_minutes
        model.max_per_hour = policy.max_per_hour
        model.max_per_day = policy.max_per_day
        model.is_active = policy.is_active
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_for_event_type(self, event_type_id: int) -> int:
        """Remove the policy of ``event_type_id`` without committing."""

        return (
            self.session.query(RateLimitPolicyModel)
            .filter(RateLimitPolicyModel.event_type_id == event_type_id)
            .delete(synchronize_session=False)
        )

    def _get_model(self, event_type_id: int) -> RateLimitPolicyModel | None:
        return (
            self.session.query(RateLimitPolicyModel)
            .filter(RateLimitPolicyModel.event_type_id == event_type_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: RateLimitPolicyModel) -> RateLimitPolicy:
        return RateLimitPolicy(
            id=model.id,
            event_type_id=model.event_type_id,
            cooldown_minutes=model.cooldown_minutes or 0,
            max_per_hour=model.max_per_hour,
            max_per_day=model.max_per_day,
            is_active=bool(model.is_active),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["RateLimitPolicyRepository"]
