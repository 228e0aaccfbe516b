# =============================================================================
# Resume Pydantic Models
# =============================================================================
"""
Pydantic models for resume API requests and responses.

These models handle validation, serialization, and documentation for all
resume lifecycle operations. They are separate from the SQLAlchemy ORM
models in resume_api/database/models.py.

Usage:
    from resume_api.models.resume import ResumeCreate, ResumeResponse

    data = ResumeCreate(title="Backend Engineer", template_id="modern")
    response = ResumeResponse.model_validate(resume_orm_instance)
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from resume_api.database.models import ResumeStatus
from resume_api.models.common import CamelModel


EXPORT_FORMAT_VERSION = "1.0"
DEFAULT_TEMPLATE_ID = "modern"


# =============================================================================
# Enums
# =============================================================================


class ResumeSortField(str, Enum):
    """
    Sort keys accepted by list and search.

    ``relevance`` is only meaningful for search and falls back to
    ``updatedAt`` descending.
    """

    UPDATED_AT = "updatedAt"
    CREATED_AT = "createdAt"
    TITLE = "title"
    RELEVANCE = "relevance"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


# =============================================================================
# Request Models
# =============================================================================


class ResumeCreate(CamelModel):
    """
    Schema for creating a resume.

    Example:
        {
            "title": "Backend Engineer",
            "templateId": "modern",
            "content": {"basics": {"name": "Ada Lovelace"}}
        }
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Resume title",
        examples=["My Resume"],
    )
    description: Optional[str] = Field(
        None,
        description="Short description",
        examples=["Software Engineer Resume"],
    )
    template_id: str = Field(
        DEFAULT_TEMPLATE_ID,
        min_length=1,
        max_length=100,
        description="Template identifier",
        examples=["modern"],
    )
    content: dict[str, Any] = Field(
        default_factory=dict,
        description="Resume document; its schema is owned by the client",
    )


class ResumeUpdate(CamelModel):
    """
    Schema for partially updating a resume.

    Only fields present in the request are applied.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    template_id: Optional[str] = Field(None, min_length=1, max_length=100)
    content: Optional[dict[str, Any]] = None
    status: Optional[ResumeStatus] = None
    is_public: Optional[bool] = None


class ResumeListOptions(CamelModel):
    """
    Paging, filtering and sorting options for list and search.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
        status: Filter by status.
        template: Filter by template identifier.
        sort_by: Sort key.
        sort_order: Sort direction.
    """

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    status: Optional[ResumeStatus] = None
    template: Optional[str] = None
    sort_by: ResumeSortField = ResumeSortField.UPDATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        """Row offset of the first item on the requested page."""
        return (self.page - 1) * self.limit


class BulkExportRequest(CamelModel):
    """Optional subset of resume ids to export."""

    resume_ids: Optional[list[UUID]] = None


# =============================================================================
# Response Models
# =============================================================================


class ResumeSummary(CamelModel):
    """Resume fields returned by list endpoints (no content)."""

    id: UUID
    user_id: UUID
    title: str
    description: Optional[str] = None
    template_id: str
    status: ResumeStatus
    is_public: bool
    public_slug: Optional[str] = None
    ats_score: Optional[int] = None
    view_count: int
    export_count: int
    created_at: datetime
    updated_at: datetime


class ResumeResponse(ResumeSummary):
    """Full resume including its content document."""

    content: dict[str, Any]
    last_exported_at: Optional[datetime] = None


class ResumePage(CamelModel):
    """
    A page of resumes plus the total number of matches.

    Returned by the service layer; the route turns it into a paginated
    envelope.
    """

    items: list[Any]
    total: int


class ResumeExportBody(CamelModel):
    """Portable part of a resume inside an export envelope."""

    title: str
    template_id: str
    content: dict[str, Any]
    status: ResumeStatus


class ResumeExport(CamelModel):
    """
    Single-resume export envelope.

    Example:
        {
            "version": "1.0",
            "exportedAt": "2025-01-15T10:00:00Z",
            "resume": {"title": "...", "templateId": "modern", "content": {...}, "status": "draft"}
        }
    """

    version: str = EXPORT_FORMAT_VERSION
    exported_at: datetime
    resume: ResumeExportBody


class BulkExportItem(CamelModel):
    """One resume inside a bulk export."""

    id: UUID
    title: str
    template_id: str
    content: dict[str, Any]
    status: ResumeStatus
    created_at: datetime
    updated_at: datetime


class BulkExportResponse(CamelModel):
    """Bulk export envelope, newest first."""

    version: str = EXPORT_FORMAT_VERSION
    exported_at: datetime
    resumes: list[BulkExportItem]
