"""Application error type carrying an HTTP status."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ApiError(Exception):
    """Error surfaced to API callers as ``{"ok": false, "error": message}``."""

    def __init__(self, message: str, status: int = 500, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"ok": False, "error": self.message}
        if self.data is not None:
            body["details"] = self.data
        return body

    @classmethod
    def not_found(cls, message: str = "not_found", data: Optional[Any] = None) -> "ApiError":
        return cls(message, 404, data)

    @classmethod
    def bad_request(cls, message: str = "bad_request", data: Optional[Any] = None) -> "ApiError":
        return cls(message, 400, data)

    @classmethod
    def unauthorized(cls, message: str = "unauthorized", data: Optional[Any] = None) -> "ApiError":
        return cls(message, 401, data)

    @classmethod
    def forbidden(cls, message: str = "forbidden", data: Optional[Any] = None) -> "ApiError":
        return cls(message, 403, data)

    @classmethod
    def conflict(cls, message: str = "conflict", data: Optional[Any] = None) -> "ApiError":
        return cls(message, 409, data)

    @classmethod
    def internal(cls, message: str = "internal_error", data: Optional[Any] = None) -> "ApiError":
        return cls(message, 500, data)
