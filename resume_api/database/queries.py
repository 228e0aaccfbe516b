# =============================================================================
# Shared Query Builders
# =============================================================================
"""
Query builders shared by the service layer.

Deletion is soft: a row with ``deleted_at`` set still exists but must be
invisible to every read path. All service lookups go through these helpers
so the ``deleted_at IS NULL`` predicate is applied in one place.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from resume_api.database.models import Resume, User


def active_resumes(*conditions: Any) -> Select[tuple[Resume]]:
    """
    Select non-deleted resumes matching extra conditions.

    Args:
        *conditions: Additional WHERE clauses.

    Returns:
        SELECT statement over Resume.
    """
    return select(Resume).where(Resume.deleted_at.is_(None), *conditions)


def owned_resume(resume_id: UUID, user_id: UUID) -> Select[tuple[Resume]]:
    """Select a single non-deleted resume owned by ``user_id``."""
    return active_resumes(Resume.id == resume_id, Resume.user_id == user_id)


def active_user(user_id: UUID) -> Select[tuple[User]]:
    """Select a non-deleted user by id."""
    return select(User).where(User.id == user_id, User.deleted_at.is_(None))


async def count_active_resumes(session: AsyncSession, user_id: UUID) -> int:
    """
    Count a user's non-deleted resumes.

    Args:
        session: Database session.
        user_id: Owner of the resumes.

    Returns:
        Number of resumes that are not soft-deleted.
    """
    query = select(func.count(Resume.id)).where(
        Resume.user_id == user_id,
        Resume.deleted_at.is_(None),
    )
    result = await session.execute(query)
    return result.scalar_one()
