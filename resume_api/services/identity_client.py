# =============================================================================
# Identity Provider Client
# =============================================================================
"""
Async client for Supabase Auth.

The identity provider owns credentials, tokens and OAuth. This client only
forwards calls to it through the supabase library and normalizes the
replies into a user payload and an optional session payload.

Usage:
    from resume_api.services.identity_client import SupabaseAuthClient

    client = SupabaseAuthClient(settings.supabase_url, settings.supabase_key)
    user = await client.get_user(access_token)
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from supabase import AsyncClient, AsyncClientOptions, AuthError, acreate_client

from resume_api.models.auth import IdentityUser


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Errors and Results
# -----------------------------------------------------------------------------
class IdentityProviderError(Exception):
    """
    Raised when the identity provider rejects a call or cannot be reached.

    Attributes:
        message: Provider error message.
        status_code: HTTP status returned by the provider, 0 when there was none.
    """

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class IdentityAuthResult:
    """
    User and session returned by sign up, sign in and token exchanges.

    ``session`` is None when the provider did not issue tokens, for example
    while an email address still awaits confirmation.
    """

    user: Optional[dict[str, Any]]
    session: Optional[dict[str, Any]]

    @property
    def identity_user(self) -> Optional[IdentityUser]:
        """The user payload parsed as IdentityUser."""
        if not self.user:
            return None
        return IdentityUser.model_validate(self.user)


# -----------------------------------------------------------------------------
# Supabase Auth Client
# -----------------------------------------------------------------------------
class SupabaseAuthClient:
    """
    Thin async wrapper around the Supabase Auth calls the API uses.

    The underlying supabase client is created on first use and shared by all
    requests, so it never keeps a session of its own: sign out and token
    lookups always pass the caller's token explicitly.

    Attributes:
        base_url: Supabase project URL.
        api_key: Project API key.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        client_factory: Callable[..., Awaitable[AsyncClient]] = acreate_client,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Supabase project URL.
            api_key: Project API key.
            client_factory: Coroutine building the supabase client, replaced in tests.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._client_factory = client_factory
        self._client: Optional[AsyncClient] = None

    # -------------------------------------------------------------------------
    # Client Management
    # -------------------------------------------------------------------------
    async def _get_client(self) -> AsyncClient:
        """
        Get or create the supabase client.

        Raises:
            IdentityProviderError: If the URL or key is missing or rejected.
        """
        if self._client is None:
            if not self.base_url or not self.api_key:
                raise IdentityProviderError("Supabase URL or key not configured")
            try:
                self._client = await self._client_factory(
                    self.base_url,
                    self.api_key,
                    options=AsyncClientOptions(
                        auto_refresh_token=False,
                        persist_session=False,
                    ),
                )
            except Exception as e:
                logger.error(f"Failed to initialize Supabase client: {e}")
                raise IdentityProviderError(f"Failed to initialize Supabase client: {e}") from e
        return self._client

    async def close(self) -> None:
        """Drop the supabase client; the next call creates a new one."""
        self._client = None

    async def _call(self, action: str, call: Callable[[Any], Awaitable[Any]]) -> Any:
        """
        Run a call against the auth API and map its failures.

        Args:
            action: Short name of the call, used in log messages.
            call: Coroutine function receiving the client's ``auth`` namespace.

        Raises:
            IdentityProviderError: If the provider rejects the call.
        """
        client = await self._get_client()
        try:
            return await call(client.auth)
        except AuthError as e:
            status_code = getattr(e, "status", 0) or 0
            logger.warning(f"Identity provider rejected {action}: {status_code} {e.message}")
            raise IdentityProviderError(e.message, status_code) from e

    @staticmethod
    def _auth_result(response: Any) -> IdentityAuthResult:
        """Split an auth reply into plain user and session payloads."""
        user = response.user.model_dump(mode="json") if response.user else None
        session = response.session.model_dump(mode="json") if response.session else None
        return IdentityAuthResult(user=user, session=session)

    # -------------------------------------------------------------------------
    # Token Validation
    # -------------------------------------------------------------------------
    async def get_user(self, access_token: str) -> IdentityUser:
        """
        Resolve an access token to its user.

        Raises:
            IdentityProviderError: If the token is invalid or expired.
        """
        response = await self._call("get_user", lambda auth: auth.get_user(access_token))
        if response is None or response.user is None:
            raise IdentityProviderError("User not found", 401)
        return IdentityUser.model_validate(response.user.model_dump(mode="json"))

    # -------------------------------------------------------------------------
    # Password Accounts
    # -------------------------------------------------------------------------
    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        redirect_to: Optional[str] = None,
    ) -> IdentityAuthResult:
        """
        Register a new account.

        Args:
            email: Account email.
            password: Account password.
            full_name: Stored as the ``full_name`` profile claim.
            redirect_to: Where the confirmation email link points.

        Returns:
            IdentityAuthResult; the session is None until the email is confirmed
            when the project requires confirmation.
        """
        options: dict[str, Any] = {"data": {"full_name": full_name}}
        if redirect_to:
            options["email_redirect_to"] = redirect_to

        credentials = {"email": email, "password": password, "options": options}
        response = await self._call("sign_up", lambda auth: auth.sign_up(credentials))
        return self._auth_result(response)

    async def sign_in_with_password(self, email: str, password: str) -> IdentityAuthResult:
        """Exchange email and password for a session."""
        credentials = {"email": email, "password": password}
        response = await self._call(
            "sign_in_with_password",
            lambda auth: auth.sign_in_with_password(credentials),
        )
        return self._auth_result(response)

    async def sign_out(self, access_token: str) -> None:
        """Revoke the sessions behind an access token."""
        await self._call("sign_out", lambda auth: auth.admin.sign_out(access_token))

    async def reset_password_for_email(
        self,
        email: str,
        redirect_to: Optional[str] = None,
    ) -> None:
        """Send a password recovery email."""
        options = {"redirect_to": redirect_to} if redirect_to else {}
        await self._call(
            "reset_password_for_email",
            lambda auth: auth.reset_password_for_email(email, options),
        )

    # -------------------------------------------------------------------------
    # OAuth and Token Refresh
    # -------------------------------------------------------------------------
    async def authorize_url(self, provider: str, redirect_to: Optional[str] = None) -> str:
        """
        Authorization URL the browser is sent to for an OAuth provider.

        The provider redirects back to ``redirect_to`` with a code for
        exchange_code_for_session().
        """
        credentials: dict[str, Any] = {"provider": provider}
        if redirect_to:
            credentials["options"] = {"redirect_to": redirect_to}

        response = await self._call(
            "sign_in_with_oauth",
            lambda auth: auth.sign_in_with_oauth(credentials),
        )
        return response.url

    async def exchange_code_for_session(
        self,
        code: str,
        code_verifier: Optional[str] = None,
    ) -> IdentityAuthResult:
        """Exchange an OAuth callback code for a session."""
        params = {"auth_code": code}
        if code_verifier:
            params["code_verifier"] = code_verifier

        response = await self._call(
            "exchange_code_for_session",
            lambda auth: auth.exchange_code_for_session(params),
        )
        return self._auth_result(response)

    async def refresh_session(self, refresh_token: str) -> IdentityAuthResult:
        """Exchange a refresh token for a new session."""
        response = await self._call(
            "refresh_session",
            lambda auth: auth.refresh_session(refresh_token),
        )
        return self._auth_result(response)
