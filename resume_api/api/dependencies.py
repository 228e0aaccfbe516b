# =============================================================================
# API Dependencies
# =============================================================================
"""
FastAPI dependencies shared by the route modules.

Long-lived collaborators (database manager, identity client, PDF renderer)
are created in the application lifespan and stored on ``app.state``; the
dependencies below hand them to request-scoped services.
"""

from typing import AsyncGenerator, Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from resume_api.config import Settings, get_settings
from resume_api.database import DatabaseManager
from resume_api.models.auth import IdentityUser
from resume_api.services.auth_service import AuthService, authenticate
from resume_api.services.errors import UnauthorizedError
from resume_api.services.identity_client import SupabaseAuthClient
from resume_api.services.pdf_service import PdfRenderer
from resume_api.services.resume_service import ResumeService
from resume_api.services.sharing_service import SharingService
from resume_api.services.user_service import UserService
from resume_api.services.version_service import VersionService


bearer_scheme = HTTPBearer(auto_error=False)


# -----------------------------------------------------------------------------
# Collaborators
# -----------------------------------------------------------------------------
def get_database(request: Request) -> DatabaseManager:
    """Database manager created at startup."""
    return request.app.state.db


def get_identity_client(request: Request) -> SupabaseAuthClient:
    """Identity provider client created at startup."""
    return request.app.state.identity


def get_pdf_renderer(request: Request) -> PdfRenderer:
    """PDF renderer created at startup."""
    return request.app.state.pdf_renderer


async def get_session(
    db: DatabaseManager = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped database session.

    Commits when the request handler returns and rolls back if it raises.

    Yields:
        AsyncSession for the request lifecycle.
    """
    async with db.session() as session:
        yield session


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------
def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Bearer token from the Authorization header, if present."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials or None


def get_auth_service(
    session: AsyncSession = Depends(get_session),
    identity: SupabaseAuthClient = Depends(get_identity_client),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """AuthService bound to the request session."""
    return AuthService(session, identity, settings.frontend_url)


async def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    identity: SupabaseAuthClient = Depends(get_identity_client),
) -> IdentityUser:
    """
    Authenticate the request with its bearer token.

    Returns:
        The identity user behind the token.

    Raises:
        UnauthorizedError: If the header is missing or the token is rejected.
    """
    if token is None:
        raise UnauthorizedError("Missing or invalid authorization header")

    return await authenticate(identity, token)


def get_current_user_id(user: IdentityUser = Depends(get_current_user)) -> UUID:
    """Id of the authenticated user."""
    return user.id


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------
def get_resume_service(session: AsyncSession = Depends(get_session)) -> ResumeService:
    """ResumeService bound to the request session."""
    return ResumeService(session)


def get_version_service(session: AsyncSession = Depends(get_session)) -> VersionService:
    """VersionService bound to the request session."""
    return VersionService(session)


def get_sharing_service(
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> SharingService:
    """SharingService bound to the request session."""
    return SharingService(session, settings.frontend_url)


def get_user_service(session: AsyncSession = Depends(get_session)) -> UserService:
    """UserService bound to the request session."""
    return UserService(session)
