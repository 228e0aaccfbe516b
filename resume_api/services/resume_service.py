# =============================================================================
# Resume Service
# =============================================================================
"""
Service layer for the resume lifecycle.

Provides business logic for creating, reading, updating, soft-deleting,
duplicating, importing and exporting resumes. Every operation is scoped to
the calling user; resumes owned by someone else are reported as not found.

Usage:
    from resume_api.services.resume_service import ResumeService

    async with db.session() as session:
        service = ResumeService(session)
        resume = await service.create(user_id, ResumeCreate(title="CV"))
"""

import copy
import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from resume_api.database.models import Resume, ResumeStatus, User, utcnow
from resume_api.database.queries import (
    active_resumes,
    active_user,
    count_active_resumes,
    owned_resume,
)
from resume_api.models.resume import (
    DEFAULT_TEMPLATE_ID,
    EXPORT_FORMAT_VERSION,
    BulkExportItem,
    BulkExportResponse,
    ResumeCreate,
    ResumeExport,
    ResumeExportBody,
    ResumeListOptions,
    ResumePage,
    ResumeSortField,
    ResumeUpdate,
    SortOrder,
)
from resume_api.services.errors import (
    InvalidInputError,
    LimitExceededError,
    NotFoundError,
    UnsupportedVersionError,
)
from resume_api.services.sharing_service import generate_public_slug
from resume_api.services.subscription import can_create_resume


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
IMPORTED_RESUME_TITLE = "Imported Resume"
DUPLICATE_SUFFIX = " (Copy)"

SORT_COLUMNS = {
    ResumeSortField.UPDATED_AT: Resume.updated_at,
    ResumeSortField.CREATED_AT: Resume.created_at,
    ResumeSortField.TITLE: Resume.title,
}

# Columns that cannot be cleared through a partial update
NON_NULLABLE_UPDATE_FIELDS = {"title", "template_id", "content", "status", "is_public"}


# -----------------------------------------------------------------------------
# Resume Service Class
# -----------------------------------------------------------------------------
class ResumeService:
    """
    Service class for resume lifecycle operations.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        async with db.session() as session:
            service = ResumeService(session)

            page = await service.list_resumes(
                user_id,
                ResumeListOptions(page=2, limit=20, sort_by=ResumeSortField.TITLE),
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the resume service.

        Args:
            session: SQLAlchemy async session for database operations.
        """
        self.session = session

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------
    async def create(self, user_id: UUID, data: ResumeCreate) -> Resume:
        """
        Create a new draft resume.

        Args:
            user_id: Owner of the new resume.
            data: Resume creation data.

        Returns:
            Created Resume ORM instance.

        Raises:
            NotFoundError: If the user has no local profile.
            LimitExceededError: If the subscription tier is at its limit.
        """
        await self._ensure_can_create(user_id)

        resume = Resume(
            user_id=user_id,
            title=data.title,
            description=data.description,
            template_id=data.template_id or DEFAULT_TEMPLATE_ID,
            content=data.content,
            status=ResumeStatus.DRAFT.value,
        )

        await self._insert(resume)
        logger.info(f"Created resume {resume.id} for user {user_id}: '{resume.title}'")

        return resume

    async def duplicate(self, resume_id: UUID, user_id: UUID) -> Resume:
        """
        Copy a resume into a new draft titled "<title> (Copy)".

        Counters start from zero and the copy is never public.

        Args:
            resume_id: Resume to copy.
            user_id: Caller, who must own the resume.

        Returns:
            The new Resume.

        Raises:
            NotFoundError: If the resume is not owned by the caller.
            LimitExceededError: If the subscription tier is at its limit.
        """
        original = await self.get_by_id(resume_id, user_id)
        await self._ensure_can_create(user_id)

        resume = Resume(
            user_id=user_id,
            title=f"{original.title}{DUPLICATE_SUFFIX}",
            description=original.description,
            template_id=original.template_id,
            content=copy.deepcopy(original.content),
            status=ResumeStatus.DRAFT.value,
        )

        await self._insert(resume)
        logger.info(f"Duplicated resume {resume_id} as {resume.id}")

        return resume

    async def import_resume(self, user_id: UUID, payload: Any) -> Resume:
        """
        Create a draft resume from an export envelope.

        Args:
            user_id: Owner of the imported resume.
            payload: Parsed JSON body, normally produced by export().

        Returns:
            The imported Resume.

        Raises:
            InvalidInputError: If resume content is missing or not an object.
            UnsupportedVersionError: If the envelope version is not "1.0".
            LimitExceededError: If the subscription tier is at its limit.

        Example:
            resume = await service.import_resume(
                user_id,
                {"version": "1.0", "resume": {"title": "CV", "content": {...}}},
            )
        """
        resume_data = payload.get("resume") if isinstance(payload, dict) else None
        if not isinstance(resume_data, dict) or resume_data.get("content") is None:
            raise InvalidInputError("Invalid import data: resume content is required")

        content = resume_data["content"]
        if not isinstance(content, dict):
            raise InvalidInputError("Invalid import data: resume content must be an object")

        version = payload.get("version")
        if version is not None and version != EXPORT_FORMAT_VERSION:
            raise UnsupportedVersionError(f"Unsupported import version: {version}")

        await self._ensure_can_create(user_id)

        title = resume_data.get("title")
        template_id = resume_data.get("templateId") or resume_data.get("template_id")

        resume = Resume(
            user_id=user_id,
            title=title if isinstance(title, str) and title.strip() else IMPORTED_RESUME_TITLE,
            template_id=template_id if isinstance(template_id, str) and template_id else DEFAULT_TEMPLATE_ID,
            content=content,
            status=ResumeStatus.DRAFT.value,
        )

        await self._insert(resume)
        logger.info(f"Imported resume {resume.id} for user {user_id}")

        return resume

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------
    async def get_by_id(self, resume_id: UUID, user_id: UUID) -> Resume:
        """
        Get a non-deleted resume owned by the caller.

        This is the ownership gate used by every other resume operation.

        Args:
            resume_id: Resume UUID.
            user_id: Caller's user id.

        Returns:
            The Resume.

        Raises:
            NotFoundError: If the resume is missing, deleted or not owned.
        """
        result = await self.session.execute(owned_resume(resume_id, user_id))
        resume = result.scalar_one_or_none()

        if resume is None:
            raise NotFoundError("Resume not found")

        return resume

    async def list_resumes(
        self,
        user_id: UUID,
        options: Optional[ResumeListOptions] = None,
    ) -> ResumePage:
        """
        List the caller's resumes with filtering, sorting and pagination.

        Args:
            user_id: Caller's user id.
            options: Paging, filter and sort options.

        Returns:
            ResumePage with the requested page and the total match count.
        """
        options = options or ResumeListOptions()
        return await self._fetch_page(
            user_id,
            options,
            order_by=self._order_by(options.sort_by, options.sort_order),
        )

    async def search(
        self,
        user_id: UUID,
        query: str,
        options: Optional[ResumeListOptions] = None,
    ) -> ResumePage:
        """
        Case-insensitive substring search over title and description.

        There is no relevance scoring: sorting by ``relevance`` orders by
        most recently updated. An empty query behaves like list_resumes().

        Args:
            user_id: Caller's user id.
            query: Search text.
            options: Paging, filter and sort options.

        Returns:
            ResumePage with matching resumes.
        """
        options = options or ResumeListOptions(sort_by=ResumeSortField.RELEVANCE)
        term = (query or "").strip().lower()

        if not term:
            sort_by = options.sort_by
            if sort_by == ResumeSortField.RELEVANCE:
                sort_by = ResumeSortField.UPDATED_AT
            return await self.list_resumes(
                user_id,
                options.model_copy(update={"sort_by": sort_by}),
            )

        if options.sort_by == ResumeSortField.RELEVANCE:
            order_by = Resume.updated_at.desc()
        else:
            order_by = self._order_by(options.sort_by, options.sort_order)

        match = or_(
            Resume.title.icontains(term, autoescape=True),
            Resume.description.icontains(term, autoescape=True),
        )

        return await self._fetch_page(user_id, options, order_by=order_by, extra=[match])

    async def bulk_export(
        self,
        user_id: UUID,
        resume_ids: Optional[list[UUID]] = None,
    ) -> BulkExportResponse:
        """
        Export many resumes at once, newest first.

        Unlike export(), this does not touch export counters.

        Args:
            user_id: Caller's user id.
            resume_ids: Optional subset; an empty or missing list exports all.

        Returns:
            BulkExportResponse envelope.
        """
        conditions = [Resume.user_id == user_id]
        if resume_ids:
            conditions.append(Resume.id.in_(resume_ids))

        query = active_resumes(*conditions).order_by(Resume.updated_at.desc())
        result = await self.session.execute(query)
        resumes = list(result.scalars().all())

        logger.info(f"Bulk exported {len(resumes)} resumes for user {user_id}")

        return BulkExportResponse(
            exported_at=utcnow(),
            resumes=[BulkExportItem.model_validate(resume) for resume in resumes],
        )

    # -------------------------------------------------------------------------
    # Update Operations
    # -------------------------------------------------------------------------
    async def update(
        self,
        resume_id: UUID,
        user_id: UUID,
        data: ResumeUpdate,
    ) -> Resume:
        """
        Apply a partial update.

        Only fields present in the request are modified. Version history
        is not touched. Changing ``is_public`` keeps the public slug in step:
        hiding a resume drops its slug and publishing one issues a new slug.

        Args:
            resume_id: Resume UUID.
            user_id: Caller's user id.
            data: Fields to update.

        Returns:
            Updated Resume.

        Raises:
            NotFoundError: If the resume is not owned by the caller.
        """
        resume = await self.get_by_id(resume_id, user_id)

        update_data = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field not in NON_NULLABLE_UPDATE_FIELDS
        }

        if "status" in update_data:
            update_data["status"] = ResumeStatus(update_data["status"]).value

        if "is_public" in update_data:
            if not update_data["is_public"]:
                update_data["public_slug"] = None
            elif resume.public_slug is None:
                update_data["public_slug"] = generate_public_slug()

        for field, value in update_data.items():
            setattr(resume, field, value)

        await self.session.flush()
        await self.session.refresh(resume)

        logger.info(f"Updated resume {resume_id}: {list(update_data.keys())}")

        return resume

    async def export(self, resume_id: UUID, user_id: UUID) -> ResumeExport:
        """
        Export a resume as a portable envelope and count the export.

        Args:
            resume_id: Resume UUID.
            user_id: Caller's user id.

        Returns:
            ResumeExport envelope (version "1.0").

        Raises:
            NotFoundError: If the resume is not owned by the caller.
        """
        resume = await self.get_by_id(resume_id, user_id)
        exported_at = utcnow()

        envelope = ResumeExport(
            exported_at=exported_at,
            resume=ResumeExportBody.model_validate(resume),
        )

        # Counter updates are not edits, so updated_at is kept as is
        await self.session.execute(
            update(Resume)
            .where(Resume.id == resume.id)
            .values(
                export_count=Resume.export_count + 1,
                last_exported_at=exported_at,
                updated_at=Resume.updated_at,
            )
            .execution_options(synchronize_session=False)
        )

        logger.info(f"Exported resume {resume_id}")

        return envelope

    # -------------------------------------------------------------------------
    # Delete Operations
    # -------------------------------------------------------------------------
    async def delete(self, resume_id: UUID, user_id: UUID) -> None:
        """
        Soft-delete a resume.

        Versions and the public slug are kept; the resume simply stops
        appearing in any lookup.

        Args:
            resume_id: Resume UUID.
            user_id: Caller's user id.

        Raises:
            NotFoundError: If the resume is not owned by the caller.
        """
        resume = await self.get_by_id(resume_id, user_id)

        resume.deleted_at = utcnow()
        await self.session.flush()
        await self._update_resume_count(user_id)

        logger.info(f"Deleted resume {resume_id}")

    # -------------------------------------------------------------------------
    # Helper Methods
    # -------------------------------------------------------------------------
    async def _ensure_can_create(self, user_id: UUID) -> None:
        """
        Check the subscription limit before creating a resume.

        Raises:
            NotFoundError: If the user has no local profile.
            LimitExceededError: If the tier's resume limit is reached.
        """
        result = await self.session.execute(active_user(user_id))
        user: Optional[User] = result.scalar_one_or_none()

        if user is None:
            raise NotFoundError("User not found")

        if not can_create_resume(user):
            raise LimitExceededError("Resume limit reached for your subscription tier")

    async def _insert(self, resume: Resume) -> None:
        """Persist a new resume and refresh its owner's resume count."""
        self.session.add(resume)
        await self.session.flush()
        await self.session.refresh(resume)
        await self._update_resume_count(resume.user_id)

    async def _update_resume_count(self, user_id: UUID) -> None:
        """Recompute the denormalized resume count from the live rows."""
        count = await count_active_resumes(self.session, user_id)
        await self.session.execute(
            update(User).where(User.id == user_id).values(resume_count=count)
        )

    async def _fetch_page(
        self,
        user_id: UUID,
        options: ResumeListOptions,
        order_by: Any,
        extra: Optional[list[Any]] = None,
    ) -> ResumePage:
        """
        Run the count and page queries for list and search.

        Args:
            user_id: Caller's user id.
            options: Paging and filter options.
            order_by: ORDER BY clause.
            extra: Additional WHERE clauses.

        Returns:
            ResumePage with ORM items.
        """
        conditions = [Resume.user_id == user_id, *(extra or [])]

        if options.status is not None:
            conditions.append(Resume.status == ResumeStatus(options.status).value)
        if options.template:
            conditions.append(Resume.template_id == options.template)

        base = active_resumes(*conditions)

        count_result = await self.session.execute(
            select(func.count()).select_from(base.subquery())
        )
        total = count_result.scalar_one()

        query = base.order_by(order_by).offset(options.offset).limit(options.limit)
        result = await self.session.execute(query)

        return ResumePage(items=list(result.scalars().all()), total=total)

    @staticmethod
    def _order_by(sort_by: ResumeSortField, sort_order: SortOrder) -> Any:
        """
        Build the ORDER BY clause for a sort key.

        ``relevance`` has no meaning outside search and sorts by update time.
        """
        column = SORT_COLUMNS.get(sort_by, Resume.updated_at)
        return column.asc() if sort_order == SortOrder.ASC else column.desc()
