"""User profile controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt
from pydantic import ValidationError

from lifetracker.core.auth.identity import current_user_id, user_required
from lifetracker.domains.users.schemas.user_schemas import ProfileUpdateRequest, serialize_profile
from lifetracker.domains.users.services import profile_service

user_api_bp = Blueprint("user_api", __name__)


@user_api_bp.get("/me")
@user_required
def api_me():
    claims = get_jwt() or {}
    profile = profile_service.get_or_create_profile(
        current_user_id(),
        email=claims.get("email") or claims.get("preferred_username"),
        display_name=claims.get("name"),
    )
    return jsonify({"ok": True, "user": serialize_profile(profile)})


@user_api_bp.put("/me")
@user_required
def api_update_me():
    payload = request.get_json(silent=True) or {}
    try:
        data = ProfileUpdateRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    profile = profile_service.update_profile(current_user_id(), **data.model_dump(by_alias=True, exclude_unset=True))
    return jsonify({"ok": True, "user": serialize_profile(profile)})
