"""Habits JSON API controllers (thin, schema-validated)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from lifetracker.core.auth.identity import current_user_id, user_required
from lifetracker.core.utils.validation import ListWindow
from lifetracker.domains.habits import services as habit_services
from lifetracker.domains.habits.schemas.habit_schemas import HabitCreate, HabitUpdate

habit_api_bp = Blueprint("habit_api", __name__)


@habit_api_bp.get("")
@user_required
def list_habits():
    try:
        window = ListWindow.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    page = habit_services.list_habits(current_user_id(), limit=window.limit, offset=window.offset)
    return jsonify({"ok": True, **page})


@habit_api_bp.post("")
@user_required
def create_habit():
    payload = request.get_json(silent=True) or {}
    try:
        data = HabitCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    try:
        habit = habit_services.create_habit(current_user_id(), **data.model_dump())
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "habit": habit}), 201


@habit_api_bp.get("/<habit_id>")
@user_required
def habit_detail(habit_id: str):
    habit = habit_services.get_habit(current_user_id(), habit_id)
    if not habit:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "habit": habit})


@habit_api_bp.put("/<habit_id>")
@user_required
def update_habit(habit_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        data = HabitUpdate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    try:
        habit = habit_services.update_habit(current_user_id(), habit_id, **data.model_dump(exclude_unset=True))
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    if not habit:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "habit": habit})


@habit_api_bp.delete("/<habit_id>")
@user_required
def delete_habit(habit_id: str):
    deleted = habit_services.delete_habit(current_user_id(), habit_id)
    if not deleted:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True})
