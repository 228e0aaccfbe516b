# =============================================================================
# Sharing Service
# =============================================================================
"""
Service layer for public resume links and view analytics.

A shared resume gets a random 12 character URL-safe slug. The slug lives
only while the resume is public; unsharing discards it and sharing again
issues a new one.

Usage:
    from resume_api.services.sharing_service import SharingService

    async with db.session() as session:
        service = SharingService(session, frontend_url="https://app.example.com")
        link = await service.share(resume_id, user_id)
"""

import logging
import secrets
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from resume_api.database.models import Resume
from resume_api.database.queries import active_resumes, owned_resume
from resume_api.models.sharing import (
    PublicResumeResponse,
    ResumeAnalytics,
    ShareResponse,
)
from resume_api.services.errors import ForbiddenError, NotFoundError


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


SLUG_LENGTH = 12


def generate_public_slug() -> str:
    """
    Generate an unguessable public slug.

    Returns:
        12 URL-safe characters (72 bits of randomness).
    """
    # Each 3 random bytes encode to 4 base64 characters
    return secrets.token_urlsafe(SLUG_LENGTH * 3 // 4)


# -----------------------------------------------------------------------------
# Sharing Service Class
# -----------------------------------------------------------------------------
class SharingService:
    """
    Service class for sharing operations.

    Attributes:
        session: SQLAlchemy async session for database operations.
        frontend_url: Base URL used to build public links.
    """

    def __init__(self, session: AsyncSession, frontend_url: str) -> None:
        """
        Initialize the sharing service.

        Args:
            session: SQLAlchemy async session for database operations.
            frontend_url: Public URL of the web client.
        """
        self.session = session
        self.frontend_url = frontend_url.rstrip("/")

    def public_url(self, slug: str) -> str:
        """Public link for a slug."""
        return f"{self.frontend_url}/public/{slug}"

    # -------------------------------------------------------------------------
    # Owner Operations
    # -------------------------------------------------------------------------
    async def share(self, resume_id: UUID, user_id: UUID) -> ShareResponse:
        """
        Make a resume public.

        Idempotent: an already public resume keeps its slug.

        Args:
            resume_id: Resume UUID.
            user_id: Caller's user id.

        Returns:
            ShareResponse with the slug and public URL.

        Raises:
            ForbiddenError: If the caller does not own the resume.
        """
        resume = await self._verify_ownership(resume_id, user_id)

        if resume.is_public and resume.public_slug:
            return ShareResponse(slug=resume.public_slug, url=self.public_url(resume.public_slug))

        slug = generate_public_slug()
        resume.is_public = True
        resume.public_slug = slug
        await self.session.flush()

        logger.info(f"Shared resume {resume_id} as '{slug}'")

        return ShareResponse(slug=slug, url=self.public_url(slug))

    async def unshare(self, resume_id: UUID, user_id: UUID) -> None:
        """
        Make a resume private and discard its slug.

        Args:
            resume_id: Resume UUID.
            user_id: Caller's user id.

        Raises:
            ForbiddenError: If the caller does not own the resume.
        """
        resume = await self._verify_ownership(resume_id, user_id)

        resume.is_public = False
        resume.public_slug = None
        await self.session.flush()

        logger.info(f"Unshared resume {resume_id}")

    async def get_analytics(self, resume_id: UUID, user_id: UUID) -> ResumeAnalytics:
        """
        Get view and export counters.

        ``last_viewed_at`` is not tracked and is always None.

        Raises:
            ForbiddenError: If the caller does not own the resume.
        """
        resume = await self._verify_ownership(resume_id, user_id)

        return ResumeAnalytics(
            resume_id=resume.id,
            view_count=resume.view_count,
            export_count=resume.export_count,
            last_viewed_at=None,
            last_exported_at=resume.last_exported_at,
        )

    # -------------------------------------------------------------------------
    # Public Operations
    # -------------------------------------------------------------------------
    async def get_public_resume(self, slug: str) -> PublicResumeResponse:
        """
        Fetch a public resume by slug and count the view.

        The view counter is incremented in the database and the returned
        count is the value after the increment.

        Args:
            slug: Public slug.

        Returns:
            PublicResumeResponse.

        Raises:
            NotFoundError: If no public, non-deleted resume has this slug.
        """
        query = active_resumes(
            Resume.public_slug == slug,
            Resume.is_public.is_(True),
        )
        result = await self.session.execute(query)
        resume = result.scalar_one_or_none()

        if resume is None:
            raise NotFoundError("Public resume not found")

        # Counter updates are not edits, so updated_at is kept as is
        result = await self.session.execute(
            update(Resume)
            .where(Resume.id == resume.id)
            .values(view_count=Resume.view_count + 1, updated_at=Resume.updated_at)
            .returning(Resume.view_count)
            .execution_options(synchronize_session=False)
        )
        view_count = result.scalar_one()

        return PublicResumeResponse(
            id=resume.id,
            title=resume.title,
            template_id=resume.template_id,
            content=resume.content,
            view_count=view_count,
            created_at=resume.created_at,
            updated_at=resume.updated_at,
        )

    # -------------------------------------------------------------------------
    # Helper Methods
    # -------------------------------------------------------------------------
    async def _verify_ownership(self, resume_id: UUID, user_id: UUID) -> Resume:
        """
        Load a non-deleted resume owned by the caller.

        Raises:
            ForbiddenError: If the resume is missing or owned by someone else.
        """
        result = await self.session.execute(owned_resume(resume_id, user_id))
        resume = result.scalar_one_or_none()

        if resume is None:
            raise ForbiddenError("Access denied")

        return resume
