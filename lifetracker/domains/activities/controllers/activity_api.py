"""Activity JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from lifetracker.core.auth.identity import current_user_id, user_required
from lifetracker.domains.activities.schemas.activity_schemas import (
    ActivityCreate,
    ActivityListFilter,
    ActivityUpdate,
)
from lifetracker.domains.activities.services import activity_service

activity_api_bp = Blueprint("activity_api", __name__)


@activity_api_bp.get("")
@user_required
def list_activities():
    try:
        filters = ActivityListFilter.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    page = activity_service.get_activities_by_user_id(current_user_id(), **filters.model_dump())
    return jsonify({"ok": True, **page})


@activity_api_bp.post("")
@user_required
def create_activity():
    payload = request.get_json(silent=True) or {}
    try:
        data = ActivityCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    try:
        activity = activity_service.create_activity(current_user_id(), **data.model_dump())
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "activity": activity}), 201


@activity_api_bp.get("/<activity_id>")
@user_required
def activity_detail(activity_id: str):
    activity = activity_service.get_activity_by_id(current_user_id(), activity_id)
    if not activity:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "activity": activity})


@activity_api_bp.put("/<activity_id>")
@user_required
def update_activity(activity_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        data = ActivityUpdate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    activity = activity_service.update_activity(
        current_user_id(), activity_id, **data.model_dump(exclude_unset=True)
    )
    if not activity:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "activity": activity})


@activity_api_bp.delete("/<activity_id>")
@user_required
def delete_activity(activity_id: str):
    if not activity_service.delete_activity(current_user_id(), activity_id):
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True})
