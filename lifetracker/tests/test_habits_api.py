"""Habits API tests.

- GET /api/habits - list_habits
- POST /api/habits - create_habit
- GET /api/habits/<id> - habit_detail
- PUT /api/habits/<id> - update_habit
- DELETE /api/habits/<id> - delete_habit
"""

from __future__ import annotations

import pytest

from lifetracker.domains.habits import services as habit_services

pytestmark = pytest.mark.integration


def _create_habit(client, headers, **overrides):
    payload = {"name": "Meditate", "frequency": "daily"}
    payload.update(overrides)
    resp = client.post("/api/habits", json=payload, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["habit"]


# ==================== List Habits Tests ====================


def test_list_habits_empty(client, auth_headers):
    """Should return an empty page when user has no habits."""
    body = client.get("/api/habits", headers=auth_headers).get_json()
    assert body == {"ok": True, "items": [], "total": 0, "limit": 50, "offset": 0}


def test_list_habits_with_data(client, auth_headers, other_headers):
    """Should list only the caller's habits."""
    _create_habit(client, auth_headers, name="Read")
    _create_habit(client, auth_headers, name="Stretch")
    _create_habit(client, other_headers, name="Not mine")
    body = client.get("/api/habits", headers=auth_headers).get_json()
    assert body["total"] == 2
    assert {h["name"] for h in body["items"]} == {"Read", "Stretch"}


# ==================== Create Habit Tests ====================


def test_create_habit_defaults(client, auth_headers):
    """Should default the streak to zero and trim the name."""
    habit = _create_habit(client, auth_headers, name="  Journal  ", description="")
    assert habit["name"] == "Journal"
    assert habit["streak"] == 0
    assert habit["frequency"] == "daily"
    assert habit["description"] is None


def test_create_habit_validation(client, auth_headers):
    """Should reject blank names and unknown frequencies."""
    assert client.post("/api/habits", json={"name": ""}, headers=auth_headers).status_code == 400
    assert client.post("/api/habits", json={"name": "   "}, headers=auth_headers).status_code == 400
    assert client.post("/api/habits", json={"name": "x", "frequency": "hourly"}, headers=auth_headers).status_code == 400


# ==================== Update / Delete Habit Tests ====================


def test_update_habit(client, auth_headers):
    """Should update the given fields only."""
    habit = _create_habit(client, auth_headers)
    resp = client.put(f"/api/habits/{habit['id']}", json={"streak": 5}, headers=auth_headers)
    assert resp.status_code == 200
    updated = resp.get_json()["habit"]
    assert updated["streak"] == 5
    assert updated["name"] == "Meditate"
    assert updated["createdAt"] == habit["createdAt"]


def test_update_habit_rejects_blank_name(client, auth_headers):
    """Should reject renaming a habit to whitespace."""
    habit = _create_habit(client, auth_headers)
    assert client.put(f"/api/habits/{habit['id']}", json={"name": "  "}, headers=auth_headers).status_code == 400


def test_update_missing_habit(client, auth_headers, other_headers):
    """Should return 404 for unknown or foreign habits."""
    habit = _create_habit(client, auth_headers)
    assert client.put("/api/habits/missing", json={"streak": 1}, headers=auth_headers).status_code == 404
    assert client.put(f"/api/habits/{habit['id']}", json={"streak": 1}, headers=other_headers).status_code == 404


def test_delete_habit(client, auth_headers):
    """Should delete and then report not found."""
    habit = _create_habit(client, auth_headers)
    assert client.delete(f"/api/habits/{habit['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/habits/{habit['id']}", headers=auth_headers).status_code == 404
    assert client.delete(f"/api/habits/{habit['id']}", headers=auth_headers).status_code == 404


# ==================== Service Tests ====================


def test_service_rejects_unknown_frequency(app):
    """Should validate frequency at the service layer too."""
    with pytest.raises(ValueError):
        habit_services.create_habit("user-1", name="x", frequency="yearly")
