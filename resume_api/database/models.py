# =============================================================================
# Database ORM Models
# =============================================================================
"""
SQLAlchemy ORM models for the Resume Builder API.

Column types are portable: JSON columns use JSONB on PostgreSQL and plain
JSON elsewhere, and identifiers use the generic Uuid type so the same models
run against SQLite in tests.
"""

import enum
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------
class SubscriptionTier(str, enum.Enum):
    """Subscription tiers, each with its own resume limit."""

    FREE = "free"
    BASIC = "basic"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class ResumeStatus(str, enum.Enum):
    """Publication status of a resume."""

    DRAFT = "draft"
    PUBLISHED = "published"


# -----------------------------------------------------------------------------
# Base Model
# -----------------------------------------------------------------------------
class Base(DeclarativeBase):
    """
    Base class for all ORM models.
    """

    pass


# -----------------------------------------------------------------------------
# User Model
# -----------------------------------------------------------------------------
class User(Base):
    """
    ORM model for the users table.

    The primary key is the subject identifier issued by the identity
    provider, so no local default is generated.

    Attributes:
        id: Identity provider subject (UUID).
        email: Unique email address.
        full_name: Display name.
        avatar_url: Profile picture URL.
        subscription_tier: Current tier, drives resume limits.
        subscription_status: Billing status reported by the payment system.
        resume_count: Denormalized count of non-deleted resumes.
        export_count: Number of exports performed by the user.
        storage_used_bytes: Bytes of stored assets.
        last_login_at: Last successful sign in.
        is_active: False once the account is deleted.
        deleted_at: Soft-delete timestamp.
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Subscription; unknown tier names get the free limits
    subscription_tier: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SubscriptionTier.FREE.value,
    )
    subscription_status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="active",
    )

    # Usage counters
    resume_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    export_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    storage_used_bytes: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
    )

    # Status
    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    resumes: Mapped[list["Resume"]] = relationship(
        "Resume",
        back_populates="user",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email='{self.email}', tier={self.subscription_tier})>"


# -----------------------------------------------------------------------------
# Resume Model
# -----------------------------------------------------------------------------
class Resume(Base):
    """
    ORM model for the resumes table.

    ``content`` is an opaque JSON document owned by the web client.
    ``is_public`` is True exactly when ``public_slug`` is set.
    """

    __tablename__ = "resumes"
    __table_args__ = (
        Index("ix_resumes_user_id_deleted_at", "user_id", "deleted_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    template_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="modern",
    )
    content: Mapped[dict[str, Any]] = mapped_column(
        JSONDocument,
        nullable=False,
        default=dict,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ResumeStatus.DRAFT.value,
    )

    # Sharing
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    public_slug: Mapped[Optional[str]] = mapped_column(
        String(32),
        nullable=True,
        unique=True,
    )

    # Metrics
    ats_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    export_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_exported_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="resumes")
    versions: Mapped[list["ResumeVersion"]] = relationship(
        "ResumeVersion",
        back_populates="resume",
        cascade="all, delete-orphan",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """String representation of the resume."""
        return f"<Resume(id={self.id}, title='{self.title}', status={self.status})>"


# -----------------------------------------------------------------------------
# ResumeVersion Model
# -----------------------------------------------------------------------------
class ResumeVersion(Base):
    """
    ORM model for the resume_versions table.

    Immutable snapshot of a resume's content and template. Version numbers
    start at 1 per resume and are never reused.
    """

    __tablename__ = "resume_versions"
    __table_args__ = (
        Index("ix_resume_versions_resume_number", "resume_id", "version_number"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    resume_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("resumes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    version_number: Mapped[int] = mapped_column(Integer, nullable=False)
    version_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Snapshot
    content: Mapped[dict[str, Any]] = mapped_column(JSONDocument, nullable=False)
    template_id: Mapped[str] = mapped_column(String(100), nullable=False)
    changes_summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_by: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    # Relationships
    resume: Mapped["Resume"] = relationship("Resume", back_populates="versions")

    def __repr__(self) -> str:
        """String representation of the version."""
        return (
            f"<ResumeVersion(id={self.id}, resume_id={self.resume_id}, "
            f"version_number={self.version_number})>"
        )
