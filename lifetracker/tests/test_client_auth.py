"""Client sign-in wrapper over MSAL."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from lifetracker.client.auth import (
    AuthContext,
    AuthError,
    InteractionRequiredAuthError,
    MockAuthProvider,
    MsalMobileAuthProvider,
    MsalWebAuthProvider,
    create_auth_provider,
)

pytestmark = pytest.mark.unit

ACCOUNT = {
    "home_account_id": "home-1",
    "local_account_id": "oid-1",
    "username": "ada@example.com",
    "id_token_claims": {"name": "Ada"},
}


def _msal_app(accounts=None):
    app = MagicMock()
    app.get_accounts.return_value = list(accounts or [])
    return app


# ==================== Factory Tests ====================


def test_factory_returns_mock_when_requested():
    """Should use the development session when mock is requested."""
    assert isinstance(create_auth_provider("web", use_mock=True), MockAuthProvider)


def test_factory_returns_mock_when_unconfigured():
    """Should fall back to the development session without MSAL settings."""
    assert isinstance(create_auth_provider("mobile"), MockAuthProvider)


def test_factory_selects_platform_provider():
    """Should pick the interactive flow for web and device code for mobile."""
    kwargs = {"client_id": "cid", "authority": "https://login.example/tenant", "app": _msal_app()}
    assert isinstance(create_auth_provider("web", **kwargs), MsalWebAuthProvider)
    assert isinstance(create_auth_provider("mobile", **kwargs), MsalMobileAuthProvider)
    with pytest.raises(ValueError):
        create_auth_provider("desktop", **kwargs)


# ==================== Mock Provider Tests ====================


def test_mock_session_is_dev_user_without_token():
    """Should sign in as the development user and send no token."""
    context = AuthContext(MockAuthProvider())
    assert context.is_authenticated is True
    assert context.user.id == "dev-user-123"
    assert context.acquire_token() is None
    context.logout()
    assert context.is_authenticated is False
    context.login()
    assert context.is_authenticated is True


# ==================== MSAL Provider Tests ====================


def test_user_comes_from_cached_account():
    """Should expose the first cached account as the user."""
    provider = MsalWebAuthProvider("cid", "https://authority", app=_msal_app([ACCOUNT]))
    user = AuthContext(provider).user
    assert user.id == "oid-1"
    assert user.username == "ada@example.com"
    assert user.name == "Ada"


def test_not_authenticated_without_accounts():
    """Should report signed out when MSAL has no accounts."""
    provider = MsalWebAuthProvider("cid", "https://authority", app=_msal_app())
    assert AuthContext(provider).is_authenticated is False


def test_silent_token_used_when_available():
    """Should return the cached token without prompting."""
    app = _msal_app([ACCOUNT])
    app.acquire_token_silent.return_value = {"access_token": "silent-token"}
    provider = MsalWebAuthProvider("cid", "https://authority", scopes=["api://x/.default"], app=app)

    assert AuthContext(provider).acquire_token() == "silent-token"
    app.acquire_token_silent.assert_called_once_with(["api://x/.default"], account=ACCOUNT)
    app.acquire_token_interactive.assert_not_called()


def test_silent_failure_falls_back_to_interactive():
    """Should prompt interactively when silent acquisition needs interaction."""
    app = _msal_app([ACCOUNT])
    app.acquire_token_silent.return_value = {"error": "interaction_required"}
    app.acquire_token_interactive.return_value = {"access_token": "fresh-token"}
    provider = MsalWebAuthProvider("cid", "https://authority", app=app)

    assert AuthContext(provider).acquire_token() == "fresh-token"
    app.acquire_token_interactive.assert_called_once()


def test_no_account_falls_back_to_interactive():
    """Should prompt interactively when nobody is signed in."""
    app = _msal_app()
    app.acquire_token_interactive.return_value = {"access_token": "first-token"}
    provider = MsalWebAuthProvider("cid", "https://authority", app=app)
    with pytest.raises(InteractionRequiredAuthError):
        provider.acquire_token_silent()
    assert AuthContext(provider).acquire_token() == "first-token"


def test_interactive_error_raises_auth_error():
    """Should raise when the interactive flow returns an error."""
    app = _msal_app()
    app.acquire_token_interactive.return_value = {"error": "access_denied", "error_description": "User cancelled"}
    provider = MsalWebAuthProvider("cid", "https://authority", app=app)
    with pytest.raises(AuthError, match="User cancelled"):
        AuthContext(provider).login()


def test_device_code_flow_prompts_user():
    """Should show the device code message and wait for completion."""
    app = _msal_app()
    flow = {"user_code": "ABC", "message": "Go to https://microsoft.com/devicelogin and enter ABC"}
    app.initiate_device_flow.return_value = flow
    app.acquire_token_by_device_flow.return_value = {
        "access_token": "device-token",
        "id_token_claims": {"oid": "oid-2", "preferred_username": "bob@example.com", "name": "Bob"},
    }
    prompts = []
    provider = MsalMobileAuthProvider("cid", "https://authority", app=app, prompt=prompts.append)

    user = AuthContext(provider).login()

    assert prompts == [flow["message"]]
    app.acquire_token_by_device_flow.assert_called_once_with(flow)
    assert user.id == "oid-2"
    assert user.username == "bob@example.com"


def test_device_code_flow_start_failure():
    """Should raise when the device flow cannot start."""
    app = _msal_app()
    app.initiate_device_flow.return_value = {"error": "invalid_client", "error_description": "bad client"}
    provider = MsalMobileAuthProvider("cid", "https://authority", app=app)
    with pytest.raises(AuthError, match="bad client"):
        provider.acquire_token_interactive()


def test_logout_removes_accounts():
    """Should remove every cached account."""
    app = _msal_app([ACCOUNT])
    provider = MsalWebAuthProvider("cid", "https://authority", app=app)
    AuthContext(provider).logout()
    app.remove_account.assert_called_once_with(ACCOUNT)
