"""Sign-in and token acquisition over MSAL or a development session.

``create_auth_provider`` picks the provider for a platform and
``AuthContext`` exposes the uniform surface used by API clients:
``is_authenticated``, ``user``, ``login()``, ``logout()`` and
``acquire_token()``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import msal

logger = logging.getLogger(__name__)

DEFAULT_SCOPES = ("User.Read",)
DEV_USER_ID = "dev-user-123"


class AuthError(Exception):
    """Sign-in or token acquisition failed."""


class InteractionRequiredAuthError(AuthError):
    """Silent acquisition is impossible; the user has to sign in again."""


@dataclass
class AuthUser:
    id: str
    username: str
    name: Optional[str] = None

    @classmethod
    def from_account(cls, account: Dict[str, Any]) -> "AuthUser":
        claims = account.get("id_token_claims") or {}
        return cls(
            id=account.get("local_account_id") or account.get("home_account_id") or claims.get("oid", ""),
            username=account.get("username") or claims.get("preferred_username", ""),
            name=claims.get("name") or account.get("name"),
        )


class AuthProvider(ABC):
    @abstractmethod
    def current_user(self) -> Optional[AuthUser]:
        ...

    @abstractmethod
    def login(self) -> AuthUser:
        ...

    @abstractmethod
    def logout(self) -> None:
        ...

    @abstractmethod
    def acquire_token_silent(self) -> Optional[str]:
        """Return a cached or refreshed token, or raise :class:`InteractionRequiredAuthError`."""

    @abstractmethod
    def acquire_token_interactive(self) -> Optional[str]:
        ...


class MockAuthProvider(AuthProvider):
    """Development session; the API runs with MOCK_AUTH so no token is sent."""

    def __init__(self, user: Optional[AuthUser] = None, signed_in: bool = True) -> None:
        self._user = user or AuthUser(id=DEV_USER_ID, username="dev@example.com", name="Dev User")
        self._signed_in = signed_in

    def current_user(self) -> Optional[AuthUser]:
        return self._user if self._signed_in else None

    def login(self) -> AuthUser:
        self._signed_in = True
        return self._user

    def logout(self) -> None:
        self._signed_in = False

    def acquire_token_silent(self) -> Optional[str]:
        if not self._signed_in:
            raise InteractionRequiredAuthError("Not signed in")
        return None

    def acquire_token_interactive(self) -> Optional[str]:
        self._signed_in = True
        return None


class MsalAuthProvider(AuthProvider):
    """Shared MSAL public-client plumbing; subclasses supply the interactive flow."""

    def __init__(
        self,
        client_id: str,
        authority: str,
        scopes: Sequence[str] = DEFAULT_SCOPES,
        app: Optional[msal.PublicClientApplication] = None,
    ) -> None:
        self.scopes: List[str] = list(scopes)
        self.app = app or msal.PublicClientApplication(client_id, authority=authority)

    def _account(self) -> Optional[Dict[str, Any]]:
        accounts = self.app.get_accounts()
        return accounts[0] if accounts else None

    def current_user(self) -> Optional[AuthUser]:
        account = self._account()
        return AuthUser.from_account(account) if account else None

    def login(self) -> AuthUser:
        result = self._interactive()
        return self._user_from_result(result)

    def logout(self) -> None:
        for account in self.app.get_accounts():
            self.app.remove_account(account)

    def acquire_token_silent(self) -> Optional[str]:
        account = self._account()
        if account is None:
            raise InteractionRequiredAuthError("No signed-in account")
        result = self.app.acquire_token_silent(self.scopes, account=account)
        if not result or "access_token" not in result:
            reason = (result or {}).get("error_description") or (result or {}).get("error") or "no cached token"
            raise InteractionRequiredAuthError(reason)
        return result["access_token"]

    def acquire_token_interactive(self) -> Optional[str]:
        return self._interactive()["access_token"]

    def _user_from_result(self, result: Dict[str, Any]) -> AuthUser:
        account = self._account()
        if account:
            return AuthUser.from_account(account)
        claims = result.get("id_token_claims") or {}
        return AuthUser(
            id=claims.get("oid") or claims.get("sub", ""),
            username=claims.get("preferred_username", ""),
            name=claims.get("name"),
        )

    def _interactive(self) -> Dict[str, Any]:
        result = self._run_interactive_flow()
        if "access_token" not in result:
            raise AuthError(result.get("error_description") or result.get("error") or "Sign-in failed")
        return result

    @abstractmethod
    def _run_interactive_flow(self) -> Dict[str, Any]:
        ...


class MsalWebAuthProvider(MsalAuthProvider):
    """Browser sign-in through the system browser and a loopback redirect."""

    def _run_interactive_flow(self) -> Dict[str, Any]:
        return self.app.acquire_token_interactive(self.scopes, prompt="select_account")


class MsalMobileAuthProvider(MsalAuthProvider):
    """Device code sign-in for devices without an embedded browser."""

    def __init__(self, *args: Any, prompt: Optional[Callable[[str], None]] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.prompt = prompt or (lambda message: logger.info(message))

    def _run_interactive_flow(self) -> Dict[str, Any]:
        flow = self.app.initiate_device_flow(scopes=self.scopes)
        if "user_code" not in flow:
            raise AuthError(flow.get("error_description") or "Could not start device code flow")
        self.prompt(flow["message"])
        return self.app.acquire_token_by_device_flow(flow)


PLATFORM_PROVIDERS = {
    "web": MsalWebAuthProvider,
    "mobile": MsalMobileAuthProvider,
}


def create_auth_provider(
    platform: str = "web",
    *,
    client_id: Optional[str] = None,
    authority: Optional[str] = None,
    scopes: Sequence[str] = DEFAULT_SCOPES,
    use_mock: bool = False,
    **kwargs: Any,
) -> AuthProvider:
    """Mock provider when requested or unconfigured, else the MSAL flow for ``platform``."""
    if use_mock or not client_id or not authority:
        if not use_mock:
            logger.warning("MSAL client id/authority not configured; using development session")
        return MockAuthProvider()
    try:
        provider_cls = PLATFORM_PROVIDERS[platform]
    except KeyError:
        raise ValueError(f"Unsupported platform: {platform}") from None
    return provider_cls(client_id, authority, scopes=scopes, **kwargs)


class AuthContext:
    def __init__(self, provider: AuthProvider) -> None:
        self.provider = provider

    @property
    def user(self) -> Optional[AuthUser]:
        return self.provider.current_user()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def login(self) -> AuthUser:
        user = self.provider.login()
        logger.info("Signed in as %s", user.username)
        return user

    def logout(self) -> None:
        self.provider.logout()

    def acquire_token(self) -> Optional[str]:
        """Silent acquisition first, interactive when the provider requires it."""
        try:
            return self.provider.acquire_token_silent()
        except InteractionRequiredAuthError as exc:
            logger.info("Silent token acquisition failed (%s); falling back to interactive", exc)
            return self.provider.acquire_token_interactive()
