# =============================================================================
# Database Package
# =============================================================================
"""
Database module for the Resume Builder API.

Provides the DatabaseManager, ORM models and the shared query builders
that apply the soft-delete predicate.

Usage:

    from resume_api.database import DatabaseManager, DatabaseConfig

    config = DatabaseConfig(url="postgresql+asyncpg://...")
    async with DatabaseManager(config) as db:
        async with db.session() as session:
            result = await session.execute(query)
"""

from resume_api.database.manager import DatabaseConfig, DatabaseManager

from resume_api.database.models import (
    Base,
    Resume,
    ResumeStatus,
    ResumeVersion,
    SubscriptionTier,
    User,
)


__all__ = [
    "DatabaseConfig",
    "DatabaseManager",
    "Base",
    "User",
    "Resume",
    "ResumeVersion",
    "ResumeStatus",
    "SubscriptionTier",
]
