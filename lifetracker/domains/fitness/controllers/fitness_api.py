"""Fitness JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from lifetracker.core.auth.identity import current_user_id, user_required
from lifetracker.domains.fitness.models.fitness_model import RECORD_TYPES, FitnessModel
from lifetracker.domains.fitness.schemas.fitness_schemas import (
    FitnessGoalCreate,
    FitnessRecordUpdate,
    MeasurementCreate,
    WorkoutCreate,
)

fitness_api_bp = Blueprint("fitness_api", __name__)


def _owned_record(model: FitnessModel, record_id: str):
    """Return ``(record, error_response)`` for a record the caller must own."""
    record = model.find_record(record_id)
    if not record:
        return None, (jsonify({"ok": False, "error": "not_found"}), 404)
    if record.get("userId") != current_user_id():
        return None, (jsonify({"ok": False, "error": "forbidden"}), 403)
    return record, None


@fitness_api_bp.get("")
@user_required
def list_records():
    model = FitnessModel()
    record_type = request.args.get("type")
    if record_type:
        records = model.get_records_by_type(current_user_id(), record_type)
    else:
        records = model.get_user_fitness_records(current_user_id())
    return jsonify({"ok": True, "records": records})


@fitness_api_bp.get("/type/<record_type>")
@user_required
def records_by_type(record_type: str):
    if record_type not in RECORD_TYPES:
        return jsonify({"ok": False, "error": "invalid_type"}), 400
    records = FitnessModel().get_records_by_type(current_user_id(), record_type)
    return jsonify({"ok": True, "records": records})


@fitness_api_bp.get("/daterange")
@user_required
def records_in_range():
    start = request.args.get("start")
    end = request.args.get("end")
    if not start or not end:
        return jsonify({"ok": False, "error": "start_and_end_required"}), 400
    records = FitnessModel().get_records_by_date_range(current_user_id(), start, end)
    return jsonify({"ok": True, "records": records})


@fitness_api_bp.get("/measurements/latest/<measurement_type>")
@user_required
def latest_measurement(measurement_type: str):
    record = FitnessModel().get_latest_measurement(current_user_id(), measurement_type)
    if not record:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "record": record})


@fitness_api_bp.get("/<record_id>")
@user_required
def record_detail(record_id: str):
    record, error = _owned_record(FitnessModel(), record_id)
    if error:
        return error
    return jsonify({"ok": True, "record": record})


@fitness_api_bp.post("/workout")
@user_required
def log_workout():
    payload = request.get_json(silent=True) or {}
    try:
        data = WorkoutCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    record = FitnessModel().log_workout(current_user_id(), **data.model_dump())
    return jsonify({"ok": True, "record": record}), 201


@fitness_api_bp.post("/measurement")
@user_required
def log_measurement():
    payload = request.get_json(silent=True) or {}
    try:
        data = MeasurementCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    record = FitnessModel().log_measurement(current_user_id(), **data.model_dump())
    return jsonify({"ok": True, "record": record}), 201


@fitness_api_bp.post("/goal")
@user_required
def create_goal():
    payload = request.get_json(silent=True) or {}
    try:
        data = FitnessGoalCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    record = FitnessModel().create_goal(current_user_id(), **data.model_dump())
    return jsonify({"ok": True, "record": record}), 201


@fitness_api_bp.put("/<record_id>")
@user_required
def update_record(record_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        data = FitnessRecordUpdate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    model = FitnessModel()
    _, error = _owned_record(model, record_id)
    if error:
        return error
    updates = data.model_dump(by_alias=True, exclude_unset=True)
    record = model.update_fitness_record(record_id, current_user_id(), updates)
    return jsonify({"ok": True, "record": record})


@fitness_api_bp.delete("/<record_id>")
@user_required
def delete_record(record_id: str):
    model = FitnessModel()
    _, error = _owned_record(model, record_id)
    if error:
        return error
    model.delete_fitness_record(record_id, current_user_id())
    return jsonify({"ok": True})
