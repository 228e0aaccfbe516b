# =============================================================================
# Resume Version Pydantic Models
# =============================================================================
"""
Pydantic models for resume version history.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from resume_api.models.common import CamelModel


class VersionCreate(CamelModel):
    """
    Schema for creating a version snapshot.

    The snapshot itself is always taken from the stored resume; only the
    label and summary come from the caller.
    """

    version_name: Optional[str] = Field(
        None,
        max_length=255,
        description="Human readable label",
        examples=["Before tailoring for ACME"],
    )
    changes_summary: Optional[str] = Field(
        None,
        description="What changed since the previous version",
    )


class VersionResponse(CamelModel):
    """A stored version snapshot."""

    id: UUID
    resume_id: UUID
    user_id: UUID
    version_number: int
    version_name: Optional[str] = None
    content: dict[str, Any]
    template_id: str
    changes_summary: Optional[str] = None
    created_by: UUID
    created_at: datetime
