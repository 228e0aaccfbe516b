# =============================================================================
# User Service
# =============================================================================
"""
Service layer for the local user profile.

The identity provider owns credentials; this table stores the profile,
subscription tier and usage counters keyed by the provider's subject id.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from resume_api.database.models import User, utcnow
from resume_api.database.queries import active_user, count_active_resumes
from resume_api.models.user import UserStats, UserUpdate
from resume_api.services.errors import NotFoundError


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# User Service Class
# -----------------------------------------------------------------------------
class UserService:
    """
    Service class for user profile operations.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the user service.

        Args:
            session: SQLAlchemy async session for database operations.
        """
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User:
        """
        Get a non-deleted user.

        Raises:
            NotFoundError: If the user does not exist or was deleted.
        """
        result = await self.session.execute(active_user(user_id))
        user = result.scalar_one_or_none()

        if user is None:
            raise NotFoundError("User not found")

        return user

    async def update(self, user_id: UUID, data: UserUpdate) -> User:
        """
        Update profile fields.

        Only fields provided in the update data are modified.

        Raises:
            NotFoundError: If the user does not exist or was deleted.
        """
        user = await self.get_by_id(user_id)

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(user, field, value)

        await self.session.flush()
        await self.session.refresh(user)

        logger.info(f"Updated user {user_id}: {list(update_data.keys())}")

        return user

    async def delete(self, user_id: UUID) -> None:
        """
        Soft-delete the account and deactivate it.

        Raises:
            NotFoundError: If the user does not exist or was already deleted.
        """
        user = await self.get_by_id(user_id)

        user.deleted_at = utcnow()
        user.is_active = False
        await self.session.flush()

        logger.info(f"Deleted user {user_id}")

    async def get_stats(self, user_id: UUID) -> UserStats:
        """
        Usage statistics, with the resume count taken from live rows.

        Raises:
            NotFoundError: If the user does not exist or was deleted.
        """
        user = await self.get_by_id(user_id)
        resume_count = await count_active_resumes(self.session, user_id)

        return UserStats(
            resume_count=resume_count,
            export_count=user.export_count,
            storage_used_bytes=user.storage_used_bytes,
            subscription_tier=user.subscription_tier,
            subscription_status=user.subscription_status,
        )
