# =============================================================================
# Version Service
# =============================================================================
"""
Service layer for resume version history.

Versions are immutable snapshots of a resume's content and template.
Numbers start at 1 for each resume and are assigned as the current maximum
plus one. Two concurrent creates for the same resume may read the same
maximum; numbering is not serialized beyond what the database provides.

Restoring copies a snapshot back into the resume. It does not snapshot the
state being replaced: callers that want to keep it must create a version
first.

Usage:
    from resume_api.services.version_service import VersionService

    async with db.session() as session:
        service = VersionService(session)
        version = await service.create(resume_id, user_id, VersionCreate())
"""

import copy
import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from resume_api.database.models import Resume, ResumeVersion
from resume_api.database.queries import owned_resume
from resume_api.models.version import VersionCreate
from resume_api.services.errors import ForbiddenError, NotFoundError


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Version Service Class
# -----------------------------------------------------------------------------
class VersionService:
    """
    Service class for version history operations.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the version service.

        Args:
            session: SQLAlchemy async session for database operations.
        """
        self.session = session

    async def list_versions(self, resume_id: UUID, user_id: UUID) -> list[ResumeVersion]:
        """
        List all versions of a resume, newest first.

        Raises:
            ForbiddenError: If the caller does not own the resume.
        """
        await self._verify_ownership(resume_id, user_id)

        query = (
            select(ResumeVersion)
            .where(ResumeVersion.resume_id == resume_id)
            .order_by(ResumeVersion.version_number.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create(
        self,
        resume_id: UUID,
        user_id: UUID,
        data: VersionCreate,
    ) -> ResumeVersion:
        """
        Snapshot the resume's current content and template.

        Args:
            resume_id: Resume to snapshot.
            user_id: Caller's user id.
            data: Optional label and change summary.

        Returns:
            The new ResumeVersion.

        Raises:
            ForbiddenError: If the caller does not own the resume.
            NotFoundError: If the resume disappeared after the ownership check.
        """
        await self._verify_ownership(resume_id, user_id)

        resume = await self.session.get(Resume, resume_id)
        if resume is None:
            raise NotFoundError("Resume not found")

        latest = await self.session.execute(
            select(func.max(ResumeVersion.version_number)).where(
                ResumeVersion.resume_id == resume_id
            )
        )
        version_number = (latest.scalar_one_or_none() or 0) + 1

        version = ResumeVersion(
            resume_id=resume_id,
            user_id=user_id,
            version_number=version_number,
            version_name=data.version_name,
            content=copy.deepcopy(resume.content),
            template_id=resume.template_id,
            changes_summary=data.changes_summary,
            created_by=user_id,
        )

        self.session.add(version)
        await self.session.flush()
        await self.session.refresh(version)

        logger.info(f"Created version {version_number} of resume {resume_id}")

        return version

    async def get_by_id(
        self,
        version_id: UUID,
        resume_id: UUID,
        user_id: UUID,
    ) -> ResumeVersion:
        """
        Get a version belonging to the given resume.

        Raises:
            ForbiddenError: If the caller does not own the resume.
            NotFoundError: If the resume has no version with this id.
        """
        await self._verify_ownership(resume_id, user_id)

        query = select(ResumeVersion).where(
            ResumeVersion.id == version_id,
            ResumeVersion.resume_id == resume_id,
        )
        result = await self.session.execute(query)
        version = result.scalar_one_or_none()

        if version is None:
            raise NotFoundError("Version not found")

        return version

    async def restore(
        self,
        version_id: UUID,
        resume_id: UUID,
        user_id: UUID,
    ) -> Resume:
        """
        Overwrite the resume's content and template with a snapshot.

        Title, status and counters are left untouched and the version
        itself is not modified.

        Returns:
            The updated Resume.

        Raises:
            ForbiddenError: If the caller does not own the resume.
            NotFoundError: If the version does not exist under this resume.
        """
        version = await self.get_by_id(version_id, resume_id, user_id)

        resume = await self.session.get(Resume, resume_id)
        if resume is None:
            raise NotFoundError("Resume not found")

        resume.content = copy.deepcopy(version.content)
        resume.template_id = version.template_id

        await self.session.flush()
        await self.session.refresh(resume)

        logger.info(f"Restored resume {resume_id} to version {version.version_number}")

        return resume

    async def _verify_ownership(self, resume_id: UUID, user_id: UUID) -> None:
        """
        Raises:
            ForbiddenError: If the resume is missing, deleted or not owned.
        """
        result = await self.session.execute(owned_resume(resume_id, user_id))
        if result.scalar_one_or_none() is None:
            raise ForbiddenError("Access denied")
