# =============================================================================
# Shared Test Fixtures
# =============================================================================
"""
Fixtures for service and API tests.

Every test gets its own in-memory SQLite database created through the same
DatabaseManager the application uses.
"""

from typing import AsyncGenerator, Awaitable, Callable
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from resume_api.database import DatabaseConfig, DatabaseManager, SubscriptionTier, User
from resume_api.models.resume import ResumeCreate
from resume_api.services.resume_service import ResumeService

from fakes import FakeIdentityClient


UserFactory = Callable[..., Awaitable[User]]


# -----------------------------------------------------------------------------
# Database Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
async def db() -> AsyncGenerator[DatabaseManager, None]:
    """Connected manager with a fresh schema."""
    manager = DatabaseManager(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    await manager.connect()
    await manager.create_schema()
    yield manager
    await manager.disconnect()


@pytest.fixture
async def session(db: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    """Session committed when the test finishes."""
    async with db.session() as session:
        yield session


# -----------------------------------------------------------------------------
# Data Factories
# -----------------------------------------------------------------------------
@pytest.fixture
def make_user(session: AsyncSession) -> UserFactory:
    """Factory that inserts users into the test session."""

    async def factory(
        tier: SubscriptionTier = SubscriptionTier.FREE,
        email: str | None = None,
    ) -> User:
        user_id = uuid4()
        user = User(
            id=user_id,
            email=email or f"{user_id.hex[:8]}@example.com",
            full_name="Test User",
            subscription_tier=tier.value,
        )
        session.add(user)
        await session.flush()
        await session.refresh(user)
        return user

    return factory


@pytest.fixture
async def user(make_user: UserFactory) -> User:
    """A free tier user."""
    return await make_user()


@pytest.fixture
async def other_user(make_user: UserFactory) -> User:
    """A second user who owns nothing the tests create for `user`."""
    return await make_user()


@pytest.fixture
def resume_service(session: AsyncSession) -> ResumeService:
    """ResumeService bound to the test session."""
    return ResumeService(session)


@pytest.fixture
def sample_resume_data() -> ResumeCreate:
    """Typical resume creation payload."""
    return ResumeCreate(
        title="Backend Engineer",
        description="Python and Postgres",
        template_id="classic",
        content={"basics": {"name": "Ada Lovelace"}, "skills": ["python", "sql"]},
    )


@pytest.fixture
def identity() -> FakeIdentityClient:
    """Fake identity provider client."""
    return FakeIdentityClient()
