# =============================================================================
# Identity Provider Client Tests
# =============================================================================
"""
Tests for SupabaseAuthClient over a mocked supabase client.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from supabase import AuthApiError, AuthRetryableError

from resume_api.services.identity_client import (
    IdentityProviderError,
    SupabaseAuthClient,
)

from fakes import SUPABASE_URL, identity_payload, session_payload


class Reply:
    """Stand-in for the library's pydantic reply models."""

    def __init__(self, payload: dict) -> None:
        self.payload = payload

    def model_dump(self, mode: str = "python") -> dict:
        return self.payload


def auth_response(user=None, session=None) -> SimpleNamespace:
    return SimpleNamespace(
        user=Reply(user) if user else None,
        session=Reply(session) if session else None,
    )


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def auth() -> AsyncMock:
    auth = AsyncMock()
    auth.admin = AsyncMock()
    return auth


@pytest.fixture
def factory(auth) -> AsyncMock:
    return AsyncMock(return_value=SimpleNamespace(auth=auth))


@pytest.fixture
def client(factory) -> SupabaseAuthClient:
    return SupabaseAuthClient(SUPABASE_URL + "/", "anon-key", client_factory=factory)


# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------
class TestClientLifecycle:
    """Tests for lazy creation and close()."""

    async def test_created_once_without_session_storage(self, client, factory, auth):
        auth.get_user.return_value = SimpleNamespace(user=Reply(identity_payload()))

        await client.get_user("a")
        await client.get_user("b")

        factory.assert_awaited_once()
        args, kwargs = factory.await_args
        assert args == (SUPABASE_URL, "anon-key")
        assert kwargs["options"].auto_refresh_token is False
        assert kwargs["options"].persist_session is False

    async def test_close_drops_client(self, client, factory, auth):
        auth.get_user.return_value = SimpleNamespace(user=Reply(identity_payload()))

        await client.get_user("a")
        await client.close()
        await client.get_user("a")

        assert factory.await_count == 2

    async def test_missing_configuration(self, factory):
        client = SupabaseAuthClient("", "", client_factory=factory)

        with pytest.raises(IdentityProviderError, match="not configured"):
            await client.get_user("token")

        factory.assert_not_awaited()

    async def test_factory_failure(self, client, factory):
        factory.side_effect = Exception("Invalid API key")

        with pytest.raises(IdentityProviderError) as exc_info:
            await client.get_user("token")

        assert "Failed to initialize Supabase client" in exc_info.value.message
        assert exc_info.value.status_code == 0


class TestCalls:
    """Tests for the arguments passed to the auth API and reply handling."""

    async def test_get_user(self, client, auth):
        user_id = uuid4()
        auth.get_user.return_value = SimpleNamespace(user=Reply(identity_payload(user_id)))

        user = await client.get_user("user-token")

        assert user.id == user_id
        auth.get_user.assert_awaited_once_with("user-token")

    async def test_get_user_without_reply(self, client, auth):
        auth.get_user.return_value = None

        with pytest.raises(IdentityProviderError) as exc_info:
            await client.get_user("user-token")

        assert exc_info.value.status_code == 401

    async def test_sign_in_splits_session_and_user(self, client, auth):
        user = identity_payload(uuid4(), "ada@example.com")
        tokens = session_payload(user)
        auth.sign_in_with_password.return_value = auth_response(user, tokens)

        result = await client.sign_in_with_password("ada@example.com", "secret123")

        assert result.user == user
        assert result.session == tokens
        auth.sign_in_with_password.assert_awaited_once_with(
            {"email": "ada@example.com", "password": "secret123"}
        )

    async def test_sign_up_without_session(self, client, auth):
        user = identity_payload(uuid4(), "new@example.com", confirmed=False)
        auth.sign_up.return_value = auth_response(user)

        result = await client.sign_up(
            "new@example.com",
            "secret123",
            full_name="New Person",
            redirect_to="https://app.example.com/auth/confirm",
        )

        assert result.session is None
        assert result.identity_user.email == "new@example.com"
        assert result.identity_user.email_confirmed_at is None
        auth.sign_up.assert_awaited_once_with(
            {
                "email": "new@example.com",
                "password": "secret123",
                "options": {
                    "data": {"full_name": "New Person"},
                    "email_redirect_to": "https://app.example.com/auth/confirm",
                },
            }
        )

    async def test_sign_up_without_redirect(self, client, auth):
        auth.sign_up.return_value = auth_response(identity_payload())

        await client.sign_up("new@example.com", "secret123")

        options = auth.sign_up.await_args.args[0]["options"]
        assert options == {"data": {"full_name": None}}

    async def test_code_exchange(self, client, auth):
        user = identity_payload(uuid4())
        auth.exchange_code_for_session.return_value = auth_response(user, session_payload(user))

        result = await client.exchange_code_for_session("code-1", "verifier-1")

        assert result.identity_user.id is not None
        auth.exchange_code_for_session.assert_awaited_once_with(
            {"auth_code": "code-1", "code_verifier": "verifier-1"}
        )

    async def test_code_exchange_without_verifier(self, client, auth):
        auth.exchange_code_for_session.return_value = auth_response(identity_payload())

        await client.exchange_code_for_session("code-1")

        auth.exchange_code_for_session.assert_awaited_once_with({"auth_code": "code-1"})

    async def test_refresh(self, client, auth):
        user = identity_payload(uuid4())
        auth.refresh_session.return_value = auth_response(user, session_payload(user))

        result = await client.refresh_session("refresh-1")

        assert result.session is not None
        auth.refresh_session.assert_awaited_once_with("refresh-1")

    async def test_sign_out_revokes_given_token(self, client, auth):
        assert await client.sign_out("user-token") is None

        auth.admin.sign_out.assert_awaited_once_with("user-token")
        auth.sign_out.assert_not_awaited()

    async def test_reset_password(self, client, auth):
        await client.reset_password_for_email(
            "a@example.com", redirect_to="https://app.example.com/reset-password"
        )
        await client.reset_password_for_email("b@example.com")

        calls = [call.args for call in auth.reset_password_for_email.await_args_list]
        assert calls == [
            ("a@example.com", {"redirect_to": "https://app.example.com/reset-password"}),
            ("b@example.com", {}),
        ]


class TestAuthorizeUrl:
    """Tests for authorize_url()."""

    async def test_returns_provider_url(self, client, auth):
        authorize = f"{SUPABASE_URL}/auth/v1/authorize?provider=github"
        auth.sign_in_with_oauth.return_value = SimpleNamespace(provider="github", url=authorize)

        url = await client.authorize_url(
            "github", redirect_to="https://app.example.com/auth/callback"
        )

        assert url == authorize
        auth.sign_in_with_oauth.assert_awaited_once_with(
            {
                "provider": "github",
                "options": {"redirect_to": "https://app.example.com/auth/callback"},
            }
        )

    async def test_redirect_is_optional(self, client, auth):
        auth.sign_in_with_oauth.return_value = SimpleNamespace(provider="google", url="x")

        await client.authorize_url("google")

        auth.sign_in_with_oauth.assert_awaited_once_with({"provider": "google"})


class TestErrors:
    """Tests for provider failures."""

    async def test_api_error_keeps_status(self, client, auth):
        auth.sign_in_with_password.side_effect = AuthApiError(
            "Invalid login credentials", 400, "invalid_credentials"
        )

        with pytest.raises(IdentityProviderError) as exc_info:
            await client.sign_in_with_password("a@example.com", "wrong")

        assert exc_info.value.message == "Invalid login credentials"
        assert exc_info.value.status_code == 400
        assert isinstance(exc_info.value.__cause__, AuthApiError)

    async def test_retryable_error_has_no_status(self, client, auth):
        auth.get_user.side_effect = AuthRetryableError("Request timed out", 0)

        with pytest.raises(IdentityProviderError) as exc_info:
            await client.get_user("token")

        assert exc_info.value.status_code == 0
        assert exc_info.value.message == "Request timed out"

    async def test_other_errors_propagate(self, client, auth):
        auth.refresh_session.side_effect = RuntimeError("event loop is closed")

        with pytest.raises(RuntimeError):
            await client.refresh_session("refresh-1")
