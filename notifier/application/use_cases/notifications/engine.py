"""Fan-out of emitted events to the users that should hear about them."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from contextlib import nullcontext
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from notifier.config import Settings, get_settings
from notifier.domain.entities import (
    DeliveryOutcome,
    EmitReport,
    EventType,
    NotificationEvent,
    RateLimitPolicy,
)
from notifier.infrastructure.cache import ConfigurationCache
from notifier.infrastructure.delivery_guard import KeyedLock, claim_delivery_slot
from notifier.infrastructure.repositories import NotificationEventRepository
from notifier.utils import canonical_name, now_in_app_timezone

from .preferences import PreferenceFilter
from .rate_limiter import RateLimiter
from .recipients import RecipientResolver, RoleDirectory, SqlRoleDirectory
from .registry import EventTypeRegistry
from .routing import RoutingTable
from .writer import NotificationWriter

logger = logging.getLogger(__name__)


class DeliveryTicket:
    """Arbitrate between a recipient's commit and the fan-out timing it out.

    Whichever of :meth:`settle` (the worker, right before commit) and
    :meth:`abandon` (the collector, on timeout) runs first wins.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._abandoned = False
        self._settled = False

    @property
    def abandoned(self) -> bool:
        with self._lock:
            return self._abandoned

    def settle(self) -> bool:
        """Return ``True`` when the delivery may commit."""

        with self._lock:
            if not self._abandoned:
                self._settled = True
            return self._settled

    def abandon(self) -> bool:
        """Return ``True`` when the delivery will not commit."""

        with self._lock:
            if not self._settled:
                self._abandoned = True
            return self._abandoned


class _DeliveryAbandoned(Exception):
    pass


class NotificationEngine:
    """Compose the routing pipeline and run it for each emitted event.

    The engine owns its configuration cache, its per-key locks and two bounded
    worker pools: one for role directory lookups and one for deliveries, so a
    backlog of deliveries never delays the lookups of a new event. Each
    recipient is an independent unit of work: a failure or timeout for one
    recipient is logged and does not affect the others.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        role_directory: RoleDirectory | None = None,
        settings: Settings | None = None,
        cache: ConfigurationCache | None = None,
        locks: KeyedLock | None = None,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._settings = settings or get_settings()
        self._session_factory = session_factory
        self._clock = clock
        self.cache = cache or ConfigurationCache(self._settings.config_cache_ttl_seconds)
        self.role_directory = role_directory or SqlRoleDirectory(session_factory)
        self.registry = EventTypeRegistry(session_factory, self.cache)
        self.routing = RoutingTable(session_factory, self.cache)
        self.resolver = RecipientResolver(self.role_directory)
        self.preferences = PreferenceFilter(session_factory, self.cache)
        self.rate_limiter = RateLimiter(session_factory, self.cache)
        self.writer = NotificationWriter()
        self._locks = locks or KeyedLock()
        self._lookups = ThreadPoolExecutor(
            max_workers=self._settings.role_lookup_max_workers,
            thread_name_prefix="notifier-roles",
        )
        self._executor = ThreadPoolExecutor(
            max_workers=self._settings.emit_max_workers,
            thread_name_prefix="notifier-fanout",
        )

    def emit_event(
        self,
        event_key: str,
        sender_id: str,
        sender_role: str | None = None,
        payload: dict[str, Any] | None = None,
        related_entity_type: str | None = None,
        related_entity_id: str | None = None,
    ) -> bool:
        """Emit ``event_key`` on behalf of ``sender_id``.

        Returns whether the event was accepted. Unknown or inactive event types
        and systemic failures (store or role directory unavailable) return
        ``False``. This method never raises.
        """

        try:
            report = self.dispatch(
                event_key,
                sender_id,
                sender_role=sender_role,
                payload=payload,
                related_entity_type=related_entity_type,
                related_entity_id=related_entity_id,
            )
        except Exception:
            logger.exception("Error emitting event %s from %s", event_key, sender_id)
            return False
        return report.accepted

    def dispatch(
        self,
        event_key: str,
        sender_id: str,
        *,
        sender_role: str | None = None,
        payload: dict[str, Any] | None = None,
        related_entity_type: str | None = None,
        related_entity_id: str | None = None,
    ) -> EmitReport:
        """Run the fan-out and report the outcome of every candidate."""

        payload = dict(payload or {})
        event_type = self.registry.resolve(event_key)
        if event_type is None or event_type.id is None:
            logger.warning("Event type not found or inactive: %s", event_key)
            return EmitReport(accepted=False)

        try:
            role = self._sender_role(sender_id, sender_role)
        except FuturesTimeoutError:
            logger.error(
                "Role lookup for sender %s timed out after %.1fs",
                sender_id,
                self._settings.role_lookup_timeout_seconds,
            )
            return EmitReport(accepted=False)
        except Exception:
            logger.exception("Could not look up the role of sender %s", sender_id)
            return EmitReport(accepted=False)

        event = self._record_event(
            event_type,
            sender_id=sender_id,
            sender_role=role,
            payload=payload,
            related_entity_type=related_entity_type,
            related_entity_id=related_entity_id,
        )
        report = EmitReport(accepted=True, event_id=event.id)

        target_roles = self.routing.routes_for(event_type.id, role)
        if not target_roles:
            logger.info("No enabled routes for event %s from role %s", event_type.key, role)
            self._mark_processed(event.id)
            return report

        try:
            candidates = self._lookup(self.resolver.expand, target_roles, exclude=sender_id)
        except FuturesTimeoutError:
            logger.error(
                "Role lookup for %s timed out after %.1fs",
                sorted(target_roles),
                self._settings.role_lookup_timeout_seconds,
            )
            report.accepted = False
            return report
        except Exception:
            logger.exception("Role lookup for %s failed", sorted(target_roles))
            report.accepted = False
            return report

        policy = self.rate_limiter.policy_for(event_type.id)
        pending: dict[str, tuple[Future[DeliveryOutcome], DeliveryTicket]] = {}
        for user_id in sorted(candidates):
            ticket = DeliveryTicket()
            future = self._executor.submit(
                self.deliver_to,
                user_id,
                event_type=event_type,
                sender_id=sender_id,
                payload=payload,
                policy=policy,
                event_id=event.id,
                related_entity_type=related_entity_type,
                related_entity_id=related_entity_id,
                ticket=ticket,
            )
            pending[user_id] = (future, ticket)
        for user_id, (future, ticket) in pending.items():
            report.outcomes[user_id] = self._collect(user_id, event_type.key, future, ticket)

        logger.debug(
            "Event %s (%s) fanned out to %d candidates: %d delivered",
            event_type.key,
            event.id,
            len(pending),
            len(report.recipients_with(DeliveryOutcome.DELIVERED)),
        )
        self._mark_processed(event.id)
        return report

    def deliver_to(
        self,
        user_id: str,
        *,
        event_type: EventType,
        sender_id: str | None,
        payload: dict[str, Any],
        policy: RateLimitPolicy | None,
        event_id: int | None = None,
        related_entity_type: str | None = None,
        related_entity_id: str | None = None,
        ticket: DeliveryTicket | None = None,
    ) -> DeliveryOutcome:
        """Gate and write the notification of a single recipient.

        The rate-limit check and the two inserts run in one transaction. When a
        policy can reject deliveries, the transaction also holds the keyed lock
        and the guard row of ``(user_id, event_type.id)`` until it commits.
        With a ``ticket``, the transaction is rolled back instead of committed
        once the caller has given up on this recipient.
        """

        if event_type.id is None:
            raise ValueError("Event type must be persisted before delivery")
        if ticket is not None and ticket.abandoned:
            return DeliveryOutcome.TIMED_OUT
        if not self.preferences.is_enabled(user_id, event_type.id):
            logger.debug("User %s opted out of %s", user_id, event_type.key)
            return DeliveryOutcome.OPTED_OUT

        guarded = policy is not None and policy.is_limiting()
        key = (user_id, event_type.id)
        try:
            with self._locks.hold(key) if guarded else nullcontext():
                with self._session_factory.begin() as session:
                    now = self._clock()
                    if guarded:
                        claim_delivery_slot(
                            session,
                            user_id=user_id,
                            event_type_id=event_type.id,
                            claimed_at=now,
                        )
                    decision = self.rate_limiter.evaluate(
                        session, user_id, event_type.id, policy, now=now
                    )
                    if not decision.allowed:
                        return DeliveryOutcome.RATE_LIMITED
                    self.writer.deliver(
                        session,
                        user_id=user_id,
                        sender_id=sender_id,
                        event_type=event_type,
                        payload=payload,
                        delivered_at=now,
                        event_id=event_id,
                        related_entity_type=related_entity_type,
                        related_entity_id=related_entity_id,
                    )
                    if ticket is not None and not ticket.settle():
                        raise _DeliveryAbandoned
        except _DeliveryAbandoned:
            logger.warning(
                "Delivery of %s to %s rolled back after timing out", event_type.key, user_id
            )
            return DeliveryOutcome.TIMED_OUT
        return DeliveryOutcome.DELIVERED

    def shutdown(self, *, wait: bool = True) -> None:
        """Stop both worker pools."""

        self._lookups.shutdown(wait=wait, cancel_futures=True)
        self._executor.shutdown(wait=wait)

    def _lookup(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        future = self._lookups.submit(fn, *args, **kwargs)
        try:
            return future.result(timeout=self._settings.role_lookup_timeout_seconds)
        except FuturesTimeoutError:
            future.cancel()
            raise

    def _sender_role(self, sender_id: str, sender_role: str | None) -> str:
        role = sender_role
        if not canonical_name(role):
            role = self._lookup(self.role_directory.role_of, sender_id)
        return canonical_name(role) or canonical_name(self._settings.default_sender_role)

    def _collect(
        self,
        user_id: str,
        event_key: str,
        future: Future[DeliveryOutcome],
        ticket: DeliveryTicket,
    ) -> DeliveryOutcome:
        try:
            try:
                return future.result(timeout=self._settings.recipient_timeout_seconds)
            except FuturesTimeoutError:
                if not ticket.abandon():
                    # Already committing; report how the commit ends.
                    return future.result()
                future.cancel()
                logger.error(
                    "Delivery of %s to %s timed out after %.1fs",
                    event_key,
                    user_id,
                    self._settings.recipient_timeout_seconds,
                )
                return DeliveryOutcome.TIMED_OUT
        except Exception:
            logger.exception("Delivery of %s to %s failed", event_key, user_id)
            return DeliveryOutcome.FAILED

    def _record_event(
        self,
        event_type: EventType,
        *,
        sender_id: str,
        sender_role: str,
        payload: dict[str, Any],
        related_entity_type: str | None,
        related_entity_id: str | None,
    ) -> NotificationEvent:
        with self._session_factory() as session:
            return NotificationEventRepository(session).create(
                NotificationEvent(
                    id=None,
                    event_type_id=event_type.id,
                    event_key=event_type.key,
                    sender_id=sender_id,
                    sender_role=sender_role,
                    payload=payload,
                    related_entity_type=related_entity_type,
                    related_entity_id=related_entity_id,
                    created_at=self._clock(),
                )
            )

    def _mark_processed(self, event_id: int | None) -> None:
        if event_id is None:
            return
        try:
            with self._session_factory() as session:
                NotificationEventRepository(session).mark_processed(
                    event_id, processed_at=self._clock()
                )
        except SQLAlchemyError:
            logger.exception("Could not mark event %s as processed", event_id)


__all__ = ["DeliveryTicket", "NotificationEngine"]
