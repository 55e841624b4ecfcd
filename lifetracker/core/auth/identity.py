"""Resolve the calling user for API views."""

from __future__ import annotations

from functools import wraps
from typing import Callable, Optional, TypeVar

from flask import current_app, g, jsonify
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException

F = TypeVar("F", bound=Callable)


def _identity_from_claims(claims: dict) -> Optional[str]:
    user_id = claims.get("sub") or claims.get("oid")
    return str(user_id) if user_id else None


def user_required(fn: F) -> F:
    """Require a bearer token and expose its user id as ``g.user_id``.

    With ``MOCK_AUTH`` on, a request without a token runs as ``DEV_USER_ID``.
    """

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        mock_auth = bool(current_app.config.get("MOCK_AUTH"))
        try:
            verify_jwt_in_request(optional=mock_auth)
        except JWTExtendedException:
            return jsonify({"ok": False, "error": "unauthorized"}), 401
        user_id = _identity_from_claims(get_jwt() or {})
        if not user_id and mock_auth:
            user_id = current_app.config.get("DEV_USER_ID", "dev-user-123")
        if not user_id:
            return jsonify({"ok": False, "error": "unauthorized"}), 401
        g.user_id = user_id
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> str:
    return g.user_id
