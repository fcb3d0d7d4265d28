"""Shared fixtures: a file-backed SQLite database per test and seeding helpers."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import closing
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func

from notifier.application.use_cases import NotificationEngine
from notifier.application.use_cases.configuration import (
    add_routing_rule,
    create_event_type,
    set_rate_limit,
    set_user_preference,
)
from notifier.config import Settings
from notifier.domain.entities import EventType, RateLimitPolicy
from notifier.infrastructure.database import (
    build_engine,
    create_session_factory,
    initialize_database,
)
from notifier.infrastructure.repositories import UserRoleRepository


class FixedClock:
    """Callable clock that only moves when a test advances it."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


class StaticRoleDirectory:
    """In-memory role directory keyed by user id."""

    def __init__(self, roles: dict[str, str] | None = None) -> None:
        self.roles = dict(roles or {})

    def role_of(self, user_id: str) -> str | None:
        return self.roles.get(user_id)

    def members_of(self, roles: Iterable[str]) -> set[str]:
        wanted = set(roles)
        return {user_id for user_id, role in self.roles.items() if role in wanted}


class ConfigSeeder:
    """Write notification configuration through the administration use cases."""

    def __init__(self, session_factory) -> None:
        self._session_factory = session_factory

    def event_type(self, key: str, name: str | None = None, **fields) -> EventType:
        with closing(self._session_factory()) as session:
            return create_event_type(
                session, key=key, name=name or key.replace("_", " ").title(), **fields
            )

    def route(self, event_type_id: int, source_role: str, target_role: str, **fields):
        with closing(self._session_factory()) as session:
            return add_routing_rule(
                session,
                event_type_id=event_type_id,
                source_role=source_role,
                target_role=target_role,
                **fields,
            )

    def policy(self, event_type_id: int, **fields) -> RateLimitPolicy:
        with closing(self._session_factory()) as session:
            return set_rate_limit(session, event_type_id=event_type_id, **fields)

    def role(self, user_id: str, role: str) -> None:
        with closing(self._session_factory()) as session:
            UserRoleRepository(session).assign(user_id, role)

    def preference(self, user_id: str, event_type_id: int, is_enabled: bool) -> None:
        with closing(self._session_factory()) as session:
            set_user_preference(
                session, user_id=user_id, event_type_id=event_type_id, is_enabled=is_enabled
            )


def _count_rows(session_factory, model, **filters) -> int:
    with closing(session_factory()) as session:
        query = session.query(func.count()).select_from(model)
        for column, value in filters.items():
            query = query.filter(getattr(model, column) == value)
        return query.scalar() or 0


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'notifier.db'}",
        config_cache_ttl_seconds=0,
        emit_max_workers=4,
        recipient_timeout_seconds=5.0,
        role_lookup_timeout_seconds=5.0,
        sqlite_busy_timeout_seconds=30.0,
    )


@pytest.fixture()
def db_engine(settings):
    engine = build_engine(settings=settings)
    initialize_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture()
def session(session_factory):
    with closing(session_factory()) as db:
        yield db


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture()
def seed(session_factory) -> ConfigSeeder:
    return ConfigSeeder(session_factory)


@pytest.fixture()
def count_rows(session_factory):
    """Return a helper counting the ``model`` rows that match ``filters``."""

    def count(model, **filters) -> int:
        return _count_rows(session_factory, model, **filters)

    return count


@pytest.fixture()
def make_directory():
    """Return a factory of in-memory role directories."""

    return StaticRoleDirectory


@pytest.fixture()
def notification_engine(session_factory, settings, clock):
    engine = NotificationEngine(session_factory, settings=settings, clock=clock)
    yield engine
    engine.shutdown()
