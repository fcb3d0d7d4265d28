"""Utility script to register an event type with its routes and rate limit."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from notifier.application.use_cases.configuration import (
    ConfigurationConflictError,
    add_routing_rule,
    create_event_type,
    set_rate_limit,
)
from notifier.infrastructure.database import (
    build_engine,
    create_session_factory,
    initialize_database,
)
from notifier.infrastructure.repositories import UserRoleRepository


def _route(value: str) -> tuple[str, str]:
    source, separator, target = value.partition(":")
    if not separator or not source or not target:
        raise argparse.ArgumentTypeError("Routes must look like SOURCE_ROLE:TARGET_ROLE")
    return source, target


def _cap(value: str) -> int | None:
    if value.lower() in {"none", "null", "unlimited"}:
        return None
    return int(value)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the seed."""

    parser = argparse.ArgumentParser(
        description="Register a notification event type with routing rules and a rate limit.",
    )
    parser.add_argument("key", help="Event key used by emitters, e.g. contact_added")
    parser.add_argument("--name", required=True, help="Display name, used as notification title")
    parser.add_argument("--source-module", default="general", help="Owning feature area")
    parser.add_argument("--description", default=None, help="Fallback notification message")
    parser.add_argument(
        "--route",
        action="append",
        type=_route,
        default=[],
        metavar="SOURCE:TARGET",
        help="Routing rule; repeat for several rules",
    )
    parser.add_argument("--cooldown-minutes", type=int, default=None)
    parser.add_argument("--max-per-hour", type=_cap, default=10)
    parser.add_argument("--max-per-day", type=_cap, default=50)
    parser.add_argument(
        "--assign-role",
        action="append",
        default=[],
        metavar="USER_ID:ROLE",
        type=_route,
        help="Grant a role to a user; repeat for several users",
    )
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    return parser.parse_args()


def main() -> None:
    """Create the event type described by the command line arguments."""

    args = parse_args()

    engine = build_engine(args.database_url)
    initialize_database(engine)
    session = create_session_factory(engine)()
    try:
        event_type = create_event_type(
            session,
            key=args.key,
            name=args.name,
            source_module=args.source_module,
            description=args.description,
        )
        for source_role, target_role in args.route:
            try:
                add_routing_rule(
                    session,
                    event_type_id=event_type.id,
                    source_role=source_role,
                    target_role=target_role,
                )
            except ConfigurationConflictError as exc:
                print(f"Skipped: {exc}")
        if args.cooldown_minutes is not None:
            set_rate_limit(
                session,
                event_type_id=event_type.id,
                cooldown_minutes=args.cooldown_minutes,
                max_per_hour=args.max_per_hour,
                max_per_day=args.max_per_day,
            )
        roles = UserRoleRepository(session)
        for user_id, role in args.assign_role:
            roles.assign(user_id, role)
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not seed the event type: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error saving the configuration: {exc}") from exc
    else:
        print(
            "Event type created:\n"
            f"  ID: {event_type.id}\n"
            f"  Key: {event_type.key}\n"
            f"  Routes: {len(args.route)}"
        )
    finally:
        session.close()
        engine.dispose()


if __name__ == "__main__":
    main()
