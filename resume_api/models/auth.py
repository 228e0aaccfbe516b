# =============================================================================
# Authentication Pydantic Models
# =============================================================================
"""
Pydantic models for authentication requests and identity provider payloads.

The identity provider returns users and sessions as JSON objects; they are
passed through to the client mostly untouched, so only the fields the API
relies on are typed.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from resume_api.models.common import CamelModel


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# =============================================================================
# Request Models
# =============================================================================


class SignUpRequest(CamelModel):
    """Schema for registering a new account."""

    email: str = Field(..., pattern=EMAIL_PATTERN, examples=["user@example.com"])
    password: str = Field(..., min_length=6, examples=["password123"])
    full_name: Optional[str] = Field(None, max_length=255, examples=["John Doe"])


class SignInRequest(CamelModel):
    """Schema for password sign in."""

    email: str = Field(..., pattern=EMAIL_PATTERN, examples=["user@example.com"])
    password: str = Field(..., min_length=1)


class ResetPasswordRequest(CamelModel):
    """Schema for requesting a password reset email."""

    email: str = Field(..., pattern=EMAIL_PATTERN, examples=["user@example.com"])


class RefreshTokenRequest(BaseModel):
    """Schema for exchanging a refresh token (snake_case on the wire)."""

    refresh_token: str = Field(..., min_length=1)


# =============================================================================
# Identity Provider Payloads
# =============================================================================


class IdentityUser(BaseModel):
    """
    User claims returned by the identity provider.

    Attributes:
        id: Stable subject identifier, also the local user id.
        email: Primary email address.
        user_metadata: Profile claims such as full_name and avatar_url.
        email_confirmed_at: When the email was verified, if ever.
    """

    model_config = ConfigDict(extra="allow")

    id: UUID
    email: Optional[str] = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    email_confirmed_at: Optional[datetime] = None

    @property
    def full_name(self) -> Optional[str]:
        """Full name claim, if the provider has one."""
        return self.user_metadata.get("full_name")

    @property
    def avatar_url(self) -> Optional[str]:
        """Avatar URL claim, if the provider has one."""
        return self.user_metadata.get("avatar_url")


class AuthSessionResponse(CamelModel):
    """
    Result of sign up, sign in, refresh and OAuth callback.

    ``requires_email_verification`` is only set for sign up.
    """

    user: Optional[dict[str, Any]] = None
    session: Optional[dict[str, Any]] = None
    requires_email_verification: Optional[bool] = None


class OAuthUrlResponse(BaseModel):
    """URL the client should redirect to for OAuth sign in."""

    url: str
