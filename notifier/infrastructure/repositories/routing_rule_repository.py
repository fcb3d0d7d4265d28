"""Persistence layer for role routing rules."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import true
from sqlalchemy.orm import Session

from notifier.domain.entities import RoutingRule
from notifier.infrastructure.models import RoutingRuleModel
from notifier.utils import ensure_app_timezone


class RoutingRuleRepository:
    """Provide CRUD operations for :class:`RoutingRule` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, rule_id: int) -> RoutingRule | None:
        model = self.session.get(RoutingRuleModel, rule_id)
        return self._to_entity(model) if model else None

    def find(
        self, *, event_type_id: int, source_role: str, target_role: str
    ) -> RoutingRule | None:
        model = (
            self.session.query(RoutingRuleModel)
            .filter_by(
                event_type_id=event_type_id,
                source_role=source_role,
                target_role=target_role,
            )
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_event_type(self, event_type_id: int) -> Sequence[RoutingRule]:
        query = (
            self.session.query(RoutingRuleModel)
            .filter(RoutingRuleModel.event_type_id == event_type_id)
            .order_by(RoutingRuleModel.source_role, RoutingRuleModel.target_role)
        )
        return [self._to_entity(model) for model in query.all()]

    def enabled_target_roles(self, event_type_id: int, source_role: str) -> set[str]:
        """Return the target roles of enabled rules for ``source_role``."""

        rows = (
            self.session.query(RoutingRuleModel.target_role)
            .filter(RoutingRuleModel.event_type_id == event_type_id)
            .filter(RoutingRuleModel.source_role == source_role)
            .filter(RoutingRuleModel.is_enabled == true())
            .all()
        )
        return {target_role for (target_role,) in rows}

    def create(self, rule: RoutingRule) -> RoutingRule:
        model = RoutingRuleModel(
            event_type_id=rule.event_type_id,
            source_role=rule.source_role,
            target_role=rule.target_role,
            is_enabled=rule.is_enabled,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_enabled(self, rule_id: int, is_enabled: bool) -> RoutingRule:
        model = self.session.get(RoutingRuleModel, rule_id)
        if model is None:
            msg = f"Routing rule with id {rule_id} not found"
            raise ValueError(msg)
        model.is_enabled = is_enabled
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, rule_id: int) -> bool:
        model = self.session.get(RoutingRuleModel, rule_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def delete_for_event_type(self, event_type_id: int) -> int:
        """Remove every rule of ``event_type_id`` without committing."""

        return (
            self.session.query(RoutingRuleModel)
            .filter(RoutingRuleModel.event_type_id == event_type_id)
            .delete(synchronize_session=False)
        )

    @staticmethod
    def _to_entity(model: RoutingRuleModel) -> RoutingRule:
        return RoutingRule(
            id=model.id,
            event_type_id=model.event_type_id,
            source_role=model.source_role,
            target_role=model.target_role,
            is_enabled=bool(model.is_enabled),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["RoutingRuleRepository"]
