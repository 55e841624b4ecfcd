"""Bearer token validation settings and JWT error responses.

With ``AZURE_AUTHORITY`` configured, access tokens are RS256 tokens issued by
Azure AD and the signing key is looked up in the tenant's JWKS document by
``kid``. Without it, tokens are HS256 tokens signed with ``JWT_SECRET_KEY``
(development and tests).
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from flask import Flask, current_app, jsonify
from jwt import InvalidTokenError, PyJWKClient
from jwt.exceptions import PyJWKClientError

logger = logging.getLogger(__name__)

_jwks_clients: Dict[str, PyJWKClient] = {}


def _jwks_client(authority: str) -> PyJWKClient:
    url = f"{authority}/discovery/v2.0/keys"
    client = _jwks_clients.get(url)
    if client is None:
        client = PyJWKClient(url, cache_keys=True)
        _jwks_clients[url] = client
    return client


def configure_token_validation(app: Flask) -> None:
    """Switch flask-jwt-extended to Azure AD validation when an authority is set."""
    authority: Optional[str] = app.config.get("AZURE_AUTHORITY")
    if not authority:
        app.config.setdefault("JWT_ALGORITHM", "HS256")
        return
    app.config["JWT_DECODE_ALGORITHMS"] = ["RS256"]
    app.config["JWT_DECODE_AUDIENCE"] = app.config.get("AZURE_CLIENT_ID") or None
    app.config["JWT_DECODE_ISSUER"] = app.config.get("AZURE_TOKEN_ISSUER") or f"{authority}/v2.0"
    logger.info("Validating bearer tokens against %s", authority)


def register_token_handlers(jwt) -> None:
    """Attach key resolution and JSON error envelopes to the JWTManager."""

    @jwt.decode_key_loader
    def _decode_key(jwt_header, jwt_payload):
        authority = current_app.config.get("AZURE_AUTHORITY")
        if not authority:
            return current_app.config["JWT_SECRET_KEY"]
        kid = jwt_header.get("kid")
        try:
            return _jwks_client(authority).get_signing_key(kid).key
        except PyJWKClientError as exc:
            logger.warning("No signing key found for kid=%s", kid)
            raise InvalidTokenError(str(exc)) from exc

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return jsonify({"ok": False, "error": "unauthorized", "message": reason}), 401

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return jsonify({"ok": False, "error": "invalid_token", "message": reason}), 401

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return jsonify({"ok": False, "error": "token_expired"}), 401
