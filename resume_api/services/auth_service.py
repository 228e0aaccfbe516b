# =============================================================================
# Authentication Service
# =============================================================================
"""
Service layer for authentication flows.

Credentials and tokens are handled by the identity provider; this service
relays the calls, keeps the local user table in step with the provider's
accounts and maps provider failures to UnauthorizedError.

Usage:
    from resume_api.services.auth_service import AuthService

    async with db.session() as session:
        service = AuthService(session, identity_client, settings.frontend_url)
        result = await service.sign_in("user@example.com", "password123")
"""

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resume_api.database.models import User, utcnow
from resume_api.models.auth import AuthSessionResponse, IdentityUser
from resume_api.services.errors import (
    InvalidInputError,
    UnauthorizedError,
    UnsupportedOperationError,
)
from resume_api.services.identity_client import (
    IdentityAuthResult,
    IdentityProviderError,
    SupabaseAuthClient,
)


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
OAUTH_PROVIDERS = ("google", "github")


# -----------------------------------------------------------------------------
# Token Validation
# -----------------------------------------------------------------------------
async def authenticate(identity: SupabaseAuthClient, access_token: str) -> IdentityUser:
    """
    Resolve a bearer token to the identity user.

    Args:
        identity: Identity provider client.
        access_token: Bearer token from the request.

    Returns:
        The user the provider issued the token to.

    Raises:
        UnauthorizedError: If the provider rejects the token or is unreachable.
    """
    try:
        return await identity.get_user(access_token)
    except IdentityProviderError as e:
        logger.debug(f"Rejected access token: {e.message}")
        raise UnauthorizedError("Invalid or expired token") from e


# -----------------------------------------------------------------------------
# Authentication Service Class
# -----------------------------------------------------------------------------
class AuthService:
    """
    Service class for sign up, sign in, OAuth and session operations.

    Attributes:
        session: SQLAlchemy async session for database operations.
        identity: Identity provider client.
        frontend_url: Base URL for email and OAuth redirects.
    """

    def __init__(
        self,
        session: AsyncSession,
        identity: SupabaseAuthClient,
        frontend_url: str,
    ) -> None:
        """
        Initialize the authentication service.

        Args:
            session: SQLAlchemy async session for database operations.
            identity: Identity provider client.
            frontend_url: Public URL of the web client.
        """
        self.session = session
        self.identity = identity
        self.frontend_url = frontend_url.rstrip("/")

    # -------------------------------------------------------------------------
    # Password Accounts
    # -------------------------------------------------------------------------
    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
    ) -> AuthSessionResponse:
        """
        Register an account and create its local profile.

        Args:
            email: Account email.
            password: Account password.
            full_name: Optional display name.

        Returns:
            AuthSessionResponse. ``requires_email_verification`` is True when
            the provider issued no session and the email is unconfirmed.

        Raises:
            UnauthorizedError: If the provider rejects the registration.
        """
        try:
            result = await self.identity.sign_up(
                email,
                password,
                full_name=full_name,
                redirect_to=f"{self.frontend_url}/auth/confirm",
            )
        except IdentityProviderError as e:
            raise UnauthorizedError(e.message) from e

        identity_user = result.identity_user
        if identity_user is not None:
            await self._create_profile(identity_user, full_name)

        requires_verification = (
            result.session is None
            and identity_user is not None
            and identity_user.email_confirmed_at is None
        )

        logger.info(f"Signed up {email} (verification required: {requires_verification})")

        return AuthSessionResponse(
            user=result.user,
            session=result.session,
            requires_email_verification=requires_verification,
        )

    async def sign_in(self, email: str, password: str) -> AuthSessionResponse:
        """
        Sign in with email and password and record the login time.

        Raises:
            UnauthorizedError: If the credentials are rejected.
        """
        try:
            result = await self.identity.sign_in_with_password(email, password)
        except IdentityProviderError as e:
            raise UnauthorizedError(e.message) from e

        await self._record_login(result)
        return AuthSessionResponse(user=result.user, session=result.session)

    async def sign_out(self, access_token: Optional[str]) -> None:
        """
        Revoke the session behind an access token.

        Raises:
            UnauthorizedError: If no token was given or the provider rejects it.
        """
        if not access_token:
            raise UnauthorizedError("Missing or invalid authorization header")

        try:
            await self.identity.sign_out(access_token)
        except IdentityProviderError as e:
            raise UnauthorizedError(e.message) from e

    async def reset_password(self, email: str) -> None:
        """
        Send a password reset email.

        Raises:
            UnauthorizedError: If the provider rejects the request.
        """
        try:
            await self.identity.reset_password_for_email(
                email,
                redirect_to=f"{self.frontend_url}/reset-password",
            )
        except IdentityProviderError as e:
            raise UnauthorizedError(e.message) from e

    # -------------------------------------------------------------------------
    # OAuth
    # -------------------------------------------------------------------------
    async def oauth_url(self, provider: str) -> str:
        """
        Authorization URL for an OAuth provider.

        Raises:
            InvalidInputError: If the provider is not supported.
        """
        if provider not in OAUTH_PROVIDERS:
            raise InvalidInputError(f"Unsupported OAuth provider: {provider}")

        return await self.identity.authorize_url(
            provider,
            redirect_to=f"{self.frontend_url}/auth/callback",
        )

    async def handle_oauth_callback(
        self,
        code: str,
        code_verifier: Optional[str] = None,
    ) -> AuthSessionResponse:
        """
        Exchange an OAuth code and upsert the local profile.

        Raises:
            InvalidInputError: If no code was given.
            UnauthorizedError: If the provider rejects the code.
        """
        if not code:
            raise InvalidInputError("OAuth code is required")

        try:
            result = await self.identity.exchange_code_for_session(code, code_verifier)
        except IdentityProviderError as e:
            raise UnauthorizedError(e.message) from e

        await self._record_login(result)
        return AuthSessionResponse(user=result.user, session=result.session)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------
    async def refresh(self, refresh_token: str) -> AuthSessionResponse:
        """
        Exchange a refresh token for a new session.

        Raises:
            UnauthorizedError: If the refresh token is rejected.
        """
        try:
            result = await self.identity.refresh_session(refresh_token)
        except IdentityProviderError as e:
            raise UnauthorizedError(e.message) from e

        return AuthSessionResponse(user=result.user, session=result.session)

    async def get_sessions(self, user_id: UUID) -> list[dict[str, Any]]:
        """Active sessions of a user. The provider offers no listing, so this is empty."""
        return []

    async def revoke_session(self, session_id: str) -> None:
        """
        Raises:
            UnsupportedOperationError: Always; revoking other sessions is not available.
        """
        raise UnsupportedOperationError("Session revocation not implemented")

    # -------------------------------------------------------------------------
    # Local Profiles
    # -------------------------------------------------------------------------
    async def ensure_user(self, identity_user: IdentityUser) -> User:
        """
        Create or refresh the local profile for an identity user.

        Existing profiles get a new last login time and, when the provider
        has one, the current avatar. New profiles use the email as full name
        when no name claim is present.

        Args:
            identity_user: Claims returned by the identity provider.

        Returns:
            The local User.

        Raises:
            UnauthorizedError: If a new profile is needed but the identity has no email.
        """
        user = await self.session.get(User, identity_user.id)

        if user is not None:
            user.last_login_at = utcnow()
            if identity_user.avatar_url:
                user.avatar_url = identity_user.avatar_url
        else:
            if not identity_user.email:
                raise UnauthorizedError("Identity has no email address")

            user = User(
                id=identity_user.id,
                email=identity_user.email,
                full_name=identity_user.full_name or identity_user.email,
                avatar_url=identity_user.avatar_url,
                last_login_at=utcnow(),
            )
            self.session.add(user)
            logger.info(f"Created local profile for {identity_user.id}")

        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def _record_login(self, result: IdentityAuthResult) -> None:
        """Upsert the profile of a freshly authenticated user."""
        identity_user = result.identity_user
        if identity_user is not None:
            await self.ensure_user(identity_user)

    async def _create_profile(
        self,
        identity_user: IdentityUser,
        full_name: Optional[str],
    ) -> None:
        """
        Create the local profile for a new registration.

        Nothing is created when a profile with the same id or email already
        exists, as happens when an address registers twice.
        """
        email = identity_user.email
        query = select(User.id).where(
            (User.id == identity_user.id) | (User.email == email)
        )
        result = await self.session.execute(query)
        if result.first() is not None or not email:
            return

        self.session.add(
            User(
                id=identity_user.id,
                email=email,
                full_name=full_name or identity_user.full_name,
            )
        )
        await self.session.flush()
