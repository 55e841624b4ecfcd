"""HTTP client for the LifeTracker REST API."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

import requests

from lifetracker.core.errors import ApiError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10

TokenProvider = Callable[[], Optional[str]]


class ApiClient:
    """JSON-over-HTTP client; non-2xx responses raise :class:`ApiError`.

    ``token_provider`` is called before every request and may return ``None``
    to send the request without an ``Authorization`` header.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.token_provider() if self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            resp = self.session.request(
                method,
                url,
                params=clean_params or None,
                json=json,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(f"Network error: {exc}", 0) from exc

        body = _decode(resp)
        if not resp.ok:
            message = None
            if isinstance(body, dict):
                message = body.get("message") or body.get("error")
            raise ApiError(message or resp.reason or "Request failed", resp.status_code, body)
        return body

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


def _decode(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text
