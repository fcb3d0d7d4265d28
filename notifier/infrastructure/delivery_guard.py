"""Serialization of the rate-limit check and delivery write per recipient.

Two layers cooperate. :class:`KeyedLock` serializes threads of this process
that target the same ``(user_id, event_type_id)``. :func:`claim_delivery_slot`
takes a row lock on the matching ``notification_delivery_guard`` row inside
the caller's transaction, so other processes sharing the database wait until
that transaction commits before they read the delivery log.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notifier.infrastructure.models import DeliveryGuardModel
from notifier.utils import ensure_app_naive_datetime

logger = logging.getLogger(__name__)

_GUARD_KEY_COLUMNS = ["user_id", "event_type_id"]

# Dialects that can insert the guard row without failing on a duplicate key.
_CONFLICT_FREE_INSERTS: dict[str, Callable[..., Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class KeyedLock:
    """Hand out one :class:`threading.Lock` per key while it is in use."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Hashable, list[Any]] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        lock: threading.Lock = entry[0]
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    self._locks.pop(key, None)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


def claim_delivery_slot(
    session: Session,
    *,
    user_id: str,
    event_type_id: int,
    claimed_at: datetime,
) -> None:
    """Lock the guard row of ``(user_id, event_type_id)`` until commit."""

    _ensure_guard_row(session, user_id=user_id, event_type_id=event_type_id)
    session.execute(
        update(DeliveryGuardModel)
        .where(DeliveryGuardModel.user_id == user_id)
        .where(DeliveryGuardModel.event_type_id == event_type_id)
        .values(claimed_at=ensure_app_naive_datetime(claimed_at))
    )


def _ensure_guard_row(session: Session, *, user_id: str, event_type_id: int) -> None:
    dialect_name = session.get_bind().dialect.name
    insert_builder = _CONFLICT_FREE_INSERTS.get(dialect_name)
    if insert_builder is not None:
        statement = (
            insert_builder(DeliveryGuardModel)
            .values(user_id=user_id, event_type_id=event_type_id)
            .on_conflict_do_nothing(index_elements=_GUARD_KEY_COLUMNS)
        )
        session.execute(statement)
        return

    existing = (
        session.query(DeliveryGuardModel.id)
        .filter_by(user_id=user_id, event_type_id=event_type_id)
        .first()
    )
    if existing is not None:
        return
    try:
        with session.begin_nested():
            session.add(DeliveryGuardModel(user_id=user_id, event_type_id=event_type_id))
    except IntegrityError:
        logger.debug(
            "Guard row for user=%s event_type=%s created concurrently",
            user_id,
            event_type_id,
        )


__all__ = ["KeyedLock", "claim_delivery_slot"]
