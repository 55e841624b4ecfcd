"""Fitness goal JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from lifetracker.core.auth.identity import current_user_id, user_required
from lifetracker.core.utils.validation import ListWindow
from lifetracker.domains.goals.schemas.goal_schemas import GoalCreate, GoalUpdate
from lifetracker.domains.goals.services import goal_service

goal_api_bp = Blueprint("goal_api", __name__)


@goal_api_bp.get("")
@user_required
def list_goals():
    try:
        window = ListWindow.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    page = goal_service.list_goals(current_user_id(), limit=window.limit, offset=window.offset)
    return jsonify({"ok": True, **page})


@goal_api_bp.post("")
@user_required
def create_goal():
    payload = request.get_json(silent=True) or {}
    try:
        data = GoalCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    try:
        goal = goal_service.create_goal(current_user_id(), **data.model_dump())
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "goal": goal}), 201


@goal_api_bp.get("/<goal_id>")
@user_required
def goal_detail(goal_id: str):
    goal = goal_service.get_goal(current_user_id(), goal_id)
    if not goal:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "goal": goal})


@goal_api_bp.put("/<goal_id>")
@user_required
def update_goal(goal_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        data = GoalUpdate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    goal = goal_service.update_goal(current_user_id(), goal_id, **data.model_dump(by_alias=True, exclude_unset=True))
    if not goal:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "goal": goal})


@goal_api_bp.delete("/<goal_id>")
@user_required
def delete_goal(goal_id: str):
    if not goal_service.delete_goal(current_user_id(), goal_id):
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True})
