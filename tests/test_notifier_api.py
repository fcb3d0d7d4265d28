"""Integration tests for the HTTP API."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from main import create_app

ADMIN = {"X-User-Id": "a1"}
PARTNER = {"X-User-Id": "p1"}


@pytest.fixture()
def directory(make_directory):
    return make_directory({"a1": "admin", "a2": "admin", "p1": "partner"})


@pytest.fixture()
def client(settings, directory):
    app = create_app(settings, role_directory=directory)
    with TestClient(app) as test_client:
        yield test_client


def _create_contact_added(client: TestClient) -> int:
    response = client.post(
        "/admin/event-types",
        json={
            "key": "contact_added",
            "name": "New contact",
            "source_module": "crm",
            "description": "A partner added a contact",
        },
        headers=ADMIN,
    )
    assert response.status_code == 201
    return response.json()["id"]


def test_admin_configures_and_partner_emits(client: TestClient) -> None:
    event_type_id = _create_contact_added(client)

    route_response = client.post(
        f"/admin/event-types/{event_type_id}/routes",
        json={"source_role": "partner", "target_role": "admin"},
        headers=ADMIN,
    )
    assert route_response.status_code == 201

    limit_response = client.put(
        f"/admin/event-types/{event_type_id}/rate-limit",
        json={"cooldown_minutes": 5, "max_per_hour": 10, "max_per_day": None},
        headers=ADMIN,
    )
    assert limit_response.status_code == 200
    assert limit_response.json()["max_per_day"] is None

    emit_response = client.post(
        "/events",
        json={"event_key": "contact_added", "payload": {"message": "Jane Doe"}},
        headers=PARTNER,
    )
    assert emit_response.status_code == 202
    assert emit_response.json() == {"accepted": True}

    second = client.post("/events", json={"event_key": "contact_added"}, headers=PARTNER)
    assert second.json() == {"accepted": True}

    history = client.get("/admin/notifications", params={"search": "jane"}, headers=ADMIN)
    assert history.status_code == 200
    rows = history.json()
    assert sorted(row["user_id"] for row in rows) == ["a1", "a2"]
    assert {row["sender_id"] for row in rows} == {"p1"}
    assert {row["event_type_id"] for row in rows} == {event_type_id}
    assert len(client.get("/admin/notifications", headers=ADMIN).json()) == 2


def test_unknown_events_are_not_accepted(client: TestClient) -> None:
    response = client.post("/events", json={"event_key": "nope"}, headers=PARTNER)

    assert response.status_code == 202
    assert response.json() == {"accepted": False}


def test_caller_identity_and_admin_role_are_required(client: TestClient) -> None:
    assert client.post("/events", json={"event_key": "x"}).status_code == 401
    assert client.get("/preferences").status_code == 401
    assert client.get("/admin/event-types", headers=PARTNER).status_code == 403
    assert client.get("/admin/notifications", headers={"X-User-Id": "stranger"}).status_code == 403


def test_configuration_errors_map_to_http_statuses(client: TestClient) -> None:
    event_type_id = _create_contact_added(client)

    duplicate = client.post(
        "/admin/event-types", json={"key": "contact_added", "name": "Again"}, headers=ADMIN
    )
    assert duplicate.status_code == 409

    invalid = client.post(
        "/admin/event-types", json={"key": "bad key", "name": "Bad"}, headers=ADMIN
    )
    assert invalid.status_code == 400

    assert client.put("/admin/event-types/999", json={"name": "x"}, headers=ADMIN).status_code == 404
    assert client.get(
        f"/admin/event-types/{event_type_id}/rate-limit", headers=ADMIN
    ).status_code == 404
    assert client.patch(
        "/admin/routes/999", json={"is_enabled": False}, headers=ADMIN
    ).status_code == 404


def test_routes_can_be_toggled_and_deleted(client: TestClient) -> None:
    event_type_id = _create_contact_added(client)
    rule = client.post(
        f"/admin/event-types/{event_type_id}/routes",
        json={"source_role": "partner", "target_role": "admin"},
        headers=ADMIN,
    ).json()

    toggled = client.patch(f"/admin/routes/{rule['id']}", json={"is_enabled": False}, headers=ADMIN)
    assert toggled.status_code == 200
    assert toggled.json()["is_enabled"] is False

    client.post("/events", json={"event_key": "contact_added"}, headers=PARTNER)
    assert client.get("/admin/notifications", headers=ADMIN).json() == []

    assert client.delete(f"/admin/routes/{rule['id']}", headers=ADMIN).status_code == 204
    listed = client.get(f"/admin/event-types/{event_type_id}/routes", headers=ADMIN)
    assert listed.json() == []


def test_event_type_lifecycle(client: TestClient) -> None:
    event_type_id = _create_contact_added(client)

    updated = client.put(
        f"/admin/event-types/{event_type_id}",
        json={"name": "Contact created", "is_active": False},
        headers=ADMIN,
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Contact created"
    assert updated.json()["key"] == "contact_added"

    active = client.get("/admin/event-types", params={"active_only": True}, headers=ADMIN)
    assert active.json() == []

    assert client.delete(f"/admin/event-types/{event_type_id}", headers=ADMIN).status_code == 204
    assert client.get("/admin/event-types", headers=ADMIN).json() == []


def test_emitted_event_types_cannot_be_deleted(client: TestClient) -> None:
    event_type_id = _create_contact_added(client)
    client.post("/events", json={"event_key": "contact_added"}, headers=PARTNER)

    response = client.delete(f"/admin/event-types/{event_type_id}", headers=ADMIN)

    assert response.status_code == 409


def test_users_manage_their_preferences(client: TestClient) -> None:
    event_type_id = _create_contact_added(client)
    client.post(
        f"/admin/event-types/{event_type_id}/routes",
        json={"source_role": "partner", "target_role": "admin"},
        headers=ADMIN,
    )

    listed = client.get("/preferences", headers={"X-User-Id": "a2"})
    assert listed.status_code == 200
    assert listed.json()[0]["event_key"] == "contact_added"
    assert listed.json()[0]["is_enabled"] is True

    opted_out = client.put(
        f"/preferences/{event_type_id}", json={"is_enabled": False}, headers={"X-User-Id": "a2"}
    )
    assert opted_out.status_code == 200
    assert opted_out.json()["is_enabled"] is False
    assert client.put(
        "/preferences/999", json={"is_enabled": False}, headers={"X-User-Id": "a2"}
    ).status_code == 404

    client.post("/events", json={"event_key": "contact_added"}, headers=PARTNER)
    rows = client.get("/admin/notifications", headers=ADMIN).json()
    assert [row["user_id"] for row in rows] == ["a1"]
