"""Fitness API and model tests.

Covers workouts, measurements, targets, typed and date-range listings,
the latest-measurement lookup, updates, deletes and ownership checks.
"""

from __future__ import annotations

import pytest
from jwt.exceptions import PyJWKClientError

from lifetracker.core.auth import tokens
from lifetracker.core.errors import ApiError
from lifetracker.domains.fitness.models.fitness_model import FitnessModel

pytestmark = pytest.mark.integration


def _log_workout(client, headers, **overrides):
    payload = {"activity": "Running", "duration": 30, "calories": 250, "date": "2024-03-10T08:00:00Z"}
    payload.update(overrides)
    return client.post("/api/fitness/workout", json=payload, headers=headers)


# ==================== Auth Tests ====================


def test_requires_bearer_token(client):
    """Should reject requests without a token when mock auth is off."""
    resp = client.get("/api/fitness")
    assert resp.status_code == 401
    assert resp.get_json()["ok"] is False


def test_rejects_garbage_token(client):
    """Should reject malformed bearer tokens."""
    resp = client.get("/api/fitness", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_unknown_signing_key_is_unauthorized(app, client, auth_headers, monkeypatch):
    """Should answer 401 when the key id is missing from the tenant key set."""

    class _KeySet:
        def get_signing_key(self, kid):
            raise PyJWKClientError("Unable to find a signing key that matches")

    app.config["AZURE_AUTHORITY"] = "https://login.example/tenant"
    monkeypatch.setattr(tokens, "_jwks_client", lambda authority: _KeySet())

    resp = client.get("/api/fitness", headers=auth_headers)
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "invalid_token"


def test_mock_auth_uses_dev_user(app, client):
    """Should act as the development user when mock auth is on and no token is sent."""
    app.config["MOCK_AUTH"] = True
    resp = _log_workout(client, {})
    assert resp.status_code == 201
    assert resp.get_json()["record"]["userId"] == "dev-user-123"


# ==================== Create Tests ====================


def test_log_workout_round_trip(client, auth_headers):
    """Should create a workout and read it back by id."""
    resp = _log_workout(client, auth_headers)
    assert resp.status_code == 201
    record = resp.get_json()["record"]
    assert record["type"] == "workout"
    assert record["userId"] == "user-1"
    assert record["activity"] == "Running"
    assert record["date"] == "2024-03-10T08:00:00.000Z"
    assert record["createdAt"] == record["updatedAt"]

    detail = client.get(f"/api/fitness/{record['id']}", headers=auth_headers)
    assert detail.status_code == 200
    assert detail.get_json()["record"] == record


def test_log_workout_defaults_date_to_now(client, auth_headers):
    """Should stamp the current time when no date is sent."""
    resp = client.post("/api/fitness/workout", json={"activity": "Yoga", "duration": 20}, headers=auth_headers)
    record = resp.get_json()["record"]
    assert record["date"].endswith("Z")
    assert "calories" not in record


def test_log_workout_validation(client, auth_headers):
    """Should reject workouts without a positive duration."""
    resp = client.post("/api/fitness/workout", json={"activity": "Run", "duration": 0}, headers=auth_headers)
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "validation_error"
    assert body["details"]


def test_log_measurement_and_latest(client, auth_headers):
    """Should return the newest measurement of the requested type."""
    for value, day in ((80.5, "2024-03-01"), (79.0, "2024-03-08"), (81.0, "2024-02-20")):
        resp = client.post(
            "/api/fitness/measurement",
            json={"measurementType": "weight", "value": value, "unit": "kg", "date": day},
            headers=auth_headers,
        )
        assert resp.status_code == 201
    client.post(
        "/api/fitness/measurement",
        json={"measurementType": "bodyFat", "value": 18, "unit": "%", "date": "2024-03-09"},
        headers=auth_headers,
    )

    resp = client.get("/api/fitness/measurements/latest/weight", headers=auth_headers)
    assert resp.status_code == 200
    record = resp.get_json()["record"]
    assert record["value"] == 79.0
    assert record["measurementType"] == "weight"

    missing = client.get("/api/fitness/measurements/latest/height", headers=auth_headers)
    assert missing.status_code == 404


def test_create_goal_starts_incomplete(client, auth_headers):
    """Should create targets as not completed and dated by their deadline."""
    resp = client.post(
        "/api/fitness/goal",
        json={"goalType": "weight", "targetValue": 75, "deadline": "2024-06-01"},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    record = resp.get_json()["record"]
    assert record["type"] == "goal"
    assert record["completed"] is False
    assert record["targetValue"] == 75
    assert record["date"] == "2024-06-01T00:00:00.000Z"


# ==================== List Tests ====================


def test_list_filters_by_type_and_sorts_by_date(client, auth_headers):
    """Should list the caller's records newest first, optionally by type."""
    _log_workout(client, auth_headers, date="2024-03-01")
    _log_workout(client, auth_headers, date="2024-03-05")
    client.post(
        "/api/fitness/measurement",
        json={"measurementType": "weight", "value": 80, "unit": "kg", "date": "2024-03-03"},
        headers=auth_headers,
    )

    records = client.get("/api/fitness", headers=auth_headers).get_json()["records"]
    assert [r["date"][:10] for r in records] == ["2024-03-05", "2024-03-03", "2024-03-01"]

    workouts = client.get("/api/fitness/type/workout", headers=auth_headers).get_json()["records"]
    assert {r["type"] for r in workouts} == {"workout"}
    assert len(workouts) == 2

    by_query = client.get("/api/fitness?type=measurement", headers=auth_headers).get_json()["records"]
    assert len(by_query) == 1


def test_invalid_type_rejected(client, auth_headers):
    """Should reject unknown record types."""
    assert client.get("/api/fitness/type/nap", headers=auth_headers).status_code == 400


def test_date_range_is_inclusive(client, auth_headers):
    """Should return exactly the records inside the range."""
    for day in ("2024-01-01", "2024-01-15", "2024-01-31", "2024-02-01"):
        _log_workout(client, auth_headers, date=day)

    resp = client.get(
        "/api/fitness/daterange?start=2024-01-01T00:00:00Z&end=2024-01-31T00:00:00Z",
        headers=auth_headers,
    )
    assert resp.status_code == 200
    days = [r["date"][:10] for r in resp.get_json()["records"]]
    assert days == ["2024-01-31", "2024-01-15", "2024-01-01"]


def test_date_range_requires_valid_bounds(client, auth_headers):
    """Should reject missing or unparseable bounds."""
    assert client.get("/api/fitness/daterange?start=2024-01-01", headers=auth_headers).status_code == 400
    resp = client.get("/api/fitness/daterange?start=yesterday&end=today", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_date_range"


def test_lists_are_isolated_per_user(client, auth_headers, other_headers):
    """Should never list another user's records."""
    _log_workout(client, auth_headers)
    assert client.get("/api/fitness", headers=other_headers).get_json()["records"] == []


# ==================== Update / Delete Tests ====================


def test_update_merges_fields_and_bumps_updated_at(client, auth_headers):
    """Should change only the sent fields and keep identity fields."""
    record = _log_workout(client, auth_headers).get_json()["record"]
    resp = client.put(
        f"/api/fitness/{record['id']}",
        json={"duration": 45, "notes": "felt strong"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    updated = resp.get_json()["record"]
    assert updated["duration"] == 45
    assert updated["notes"] == "felt strong"
    assert updated["activity"] == "Running"
    assert updated["createdAt"] == record["createdAt"]
    assert updated["updatedAt"] >= record["updatedAt"]


def test_update_rejects_null_for_required_fields(client, auth_headers):
    """Should refuse explicit nulls for the record type and core values."""
    record = _log_workout(client, auth_headers).get_json()["record"]
    for field in ("type", "date", "activity", "duration"):
        resp = client.put(f"/api/fitness/{record['id']}", json={field: None}, headers=auth_headers)
        assert resp.status_code == 400, field

    stored = client.get(f"/api/fitness/{record['id']}", headers=auth_headers).get_json()["record"]
    assert stored["type"] == "workout"
    assert stored["duration"] == 30
    listed = client.get("/api/fitness?type=workout", headers=auth_headers).get_json()
    assert [item["id"] for item in listed["records"]] == [record["id"]]


def test_update_allows_clearing_notes(client, auth_headers):
    """Should accept null for optional fields."""
    record = _log_workout(client, auth_headers, notes="easy").get_json()["record"]
    resp = client.put(f"/api/fitness/{record['id']}", json={"notes": None}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["record"]["notes"] is None


def test_update_missing_record_returns_404(client, auth_headers):
    """Should answer 404 for unknown ids."""
    assert client.put("/api/fitness/missing", json={"duration": 5}, headers=auth_headers).status_code == 404


def test_other_users_record_is_forbidden(client, auth_headers, other_headers):
    """Should refuse reads, updates and deletes of another user's record."""
    record = _log_workout(client, auth_headers).get_json()["record"]
    assert client.get(f"/api/fitness/{record['id']}", headers=other_headers).status_code == 403
    assert client.put(f"/api/fitness/{record['id']}", json={"duration": 1}, headers=other_headers).status_code == 403
    assert client.delete(f"/api/fitness/{record['id']}", headers=other_headers).status_code == 403
    assert client.get(f"/api/fitness/{record['id']}", headers=auth_headers).status_code == 200


def test_delete_then_read_is_not_found(client, auth_headers):
    """Should remove the record."""
    record = _log_workout(client, auth_headers).get_json()["record"]
    assert client.delete(f"/api/fitness/{record['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/fitness/{record['id']}", headers=auth_headers).status_code == 404


# ==================== Model Tests ====================


def test_model_update_missing_raises(app):
    """Should raise a 404 ApiError when updating an unknown record."""
    with pytest.raises(ApiError) as excinfo:
        FitnessModel().update_fitness_record("missing", "user-1", {"duration": 5})
    assert excinfo.value.status == 404


def test_model_delete_missing_raises(app):
    """Should raise a 404 ApiError when deleting an unknown record."""
    with pytest.raises(ApiError) as excinfo:
        FitnessModel().delete_fitness_record("missing", "user-1")
    assert excinfo.value.status == 404


def test_model_get_by_id_respects_partition(app):
    """Should not return records owned by another user."""
    model = FitnessModel()
    record = model.log_workout("user-1", activity="Row", duration=10)
    assert model.get_fitness_record_by_id(record["id"], "user-1")["id"] == record["id"]
    assert model.get_fitness_record_by_id(record["id"], "user-2") is None


def test_model_create_ignores_managed_fields(app):
    """Should not let callers choose id, owner or timestamps."""
    record = FitnessModel().create_fitness_record(
        "user-1", {"type": "workout", "id": "chosen", "userId": "x", "createdAt": "2000-01-01"}
    )
    assert record["id"] != "chosen"
    assert record["userId"] == "user-1"
    assert record["createdAt"] != "2000-01-01"
