# =============================================================================
# Authentication Routes
# =============================================================================
"""
API routes for sign up, sign in, OAuth and session management.

The identity provider's user and session objects are returned unchanged
inside the ``data`` envelope.
"""

import logging
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from resume_api.api.dependencies import (
    get_auth_service,
    get_bearer_token,
    get_current_user,
    get_current_user_id,
)
from resume_api.models.auth import (
    AuthSessionResponse,
    IdentityUser,
    OAuthUrlResponse,
    RefreshTokenRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
)
from resume_api.models.common import DataResponse, MessageResponse
from resume_api.models.user import UserResponse
from resume_api.services.auth_service import AuthService


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Router Configuration
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/auth", tags=["auth"])


# -----------------------------------------------------------------------------
# Password Accounts
# -----------------------------------------------------------------------------
@router.post(
    "/signup",
    response_model=DataResponse[AuthSessionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Sign up a new user",
)
async def sign_up(
    data: SignUpRequest,
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[AuthSessionResponse]:
    """Register an account and create its local profile."""
    result = await service.sign_up(data.email, data.password, data.full_name)
    return DataResponse(data=result)


@router.post(
    "/signin",
    response_model=DataResponse[AuthSessionResponse],
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_none=True,
    summary="Sign in an existing user",
)
async def sign_in(
    data: SignInRequest,
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[AuthSessionResponse]:
    """Sign in with email and password."""
    result = await service.sign_in(data.email, data.password)
    return DataResponse(data=result)


@router.post(
    "/signout",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign out current user",
)
async def sign_out(
    token: Optional[str] = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the session behind the bearer token."""
    await service.sign_out(token)
    return MessageResponse(message="Signed out successfully")


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request password reset",
)
async def reset_password(
    data: ResetPasswordRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Send a password reset email."""
    await service.reset_password(data.email)
    return MessageResponse(message="Password reset email sent")


# -----------------------------------------------------------------------------
# OAuth
# -----------------------------------------------------------------------------
# Registered before /oauth/{provider} so "callback" is not taken as a provider
@router.get(
    "/oauth/callback",
    response_model=DataResponse[AuthSessionResponse],
    response_model_exclude_none=True,
    summary="Handle OAuth callback",
)
async def oauth_callback(
    code: str = Query("", description="Authorization code from the provider"),
    code_verifier: Optional[str] = Query(None, alias="codeVerifier"),
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[AuthSessionResponse]:
    """Exchange the OAuth code for a session."""
    result = await service.handle_oauth_callback(code, code_verifier)
    return DataResponse(data=result)


@router.get(
    "/oauth/{provider}",
    response_model=DataResponse[OAuthUrlResponse],
    summary="Initiate OAuth sign in",
)
async def oauth_sign_in(
    provider: str,
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[OAuthUrlResponse]:
    """
    Authorization URL for google or github.

    Example:
        GET /auth/oauth/github
        -> {"data": {"url": "https://<project>.supabase.co/auth/v1/authorize?provider=github&..."}}
    """
    url = await service.oauth_url(provider)
    return DataResponse(data=OAuthUrlResponse(url=url))


# -----------------------------------------------------------------------------
# Sessions
# -----------------------------------------------------------------------------
@router.get(
    "/session",
    response_model=DataResponse[dict[str, UserResponse]],
    summary="Get current session",
)
async def get_session_user(
    identity_user: IdentityUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[dict[str, UserResponse]]:
    """Return the local profile of the caller, creating it on first use."""
    user = await service.ensure_user(identity_user)
    return DataResponse(data={"user": UserResponse.model_validate(user)})


@router.post(
    "/refresh",
    response_model=DataResponse[AuthSessionResponse],
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_none=True,
    summary="Refresh access token",
)
async def refresh_token(
    data: RefreshTokenRequest,
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[AuthSessionResponse]:
    """Exchange a refresh token for a new session."""
    result = await service.refresh(data.refresh_token)
    return DataResponse(data=result)


@router.get(
    "/sessions",
    response_model=DataResponse[list[dict[str, Any]]],
    summary="Get all user sessions",
)
async def list_sessions(
    user_id: UUID = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[list[dict[str, Any]]]:
    """List the caller's sessions."""
    return DataResponse(data=await service.get_sessions(user_id))


@router.delete(
    "/sessions/{session_id}",
    response_model=MessageResponse,
    summary="Revoke a session",
)
async def revoke_session(
    session_id: str,
    user_id: UUID = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke one of the caller's sessions."""
    await service.revoke_session(session_id)
    return MessageResponse(message="Session revoked successfully")
