# =============================================================================
# Sharing Pydantic Models
# =============================================================================
"""
Pydantic models for public links and resume analytics.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from resume_api.models.common import CamelModel


class ShareResponse(CamelModel):
    """
    Public link details.

    Example:
        {"slug": "V1StGXR8_Z5j", "url": "https://app.example.com/public/V1StGXR8_Z5j", "isPublic": true}
    """

    slug: str
    url: str
    is_public: bool = True


class PublicResumeResponse(CamelModel):
    """Resume as shown to anonymous visitors of a public link."""

    id: UUID
    title: str
    template_id: str
    content: dict[str, Any]
    view_count: int
    created_at: datetime
    updated_at: datetime


class ResumeAnalytics(CamelModel):
    """
    View and export counters for a resume.

    ``last_viewed_at`` is not tracked and is always null.
    """

    resume_id: UUID
    view_count: int
    export_count: int
    last_viewed_at: Optional[datetime] = None
    last_exported_at: Optional[datetime] = None
