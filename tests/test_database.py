"""Tests for schema creation."""

from collections import Counter

from sqlalchemy import inspect

from notifier.infrastructure.database import Base, build_engine, initialize_database

EXPECTED_TABLES = {
    "notification",
    "notification_delivery_guard",
    "notification_delivery_log",
    "notification_event",
    "notification_event_type",
    "notification_rate_limit",
    "notification_routing_rule",
    "notification_user_preference",
    "user_role",
}


def test_index_names_are_unique_across_the_schema() -> None:
    names = Counter(
        index.name for table in Base.metadata.sorted_tables for index in table.indexes
    )

    assert [name for name, count in names.items() if count > 1] == []


def test_initialize_database_creates_every_table_and_is_repeatable(settings) -> None:
    engine = build_engine(settings=settings)
    try:
        initialize_database(engine)
        initialize_database(engine)

        inspector = inspect(engine)
        assert EXPECTED_TABLES <= set(inspector.get_table_names())
        created = Counter(
            index["name"]
            for table in EXPECTED_TABLES
            for index in inspector.get_indexes(table)
        )
        assert "ix_notification_event_type_id" in created
        assert all(count == 1 for count in created.values())
    finally:
        engine.dispose()
