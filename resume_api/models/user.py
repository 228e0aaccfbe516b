# =============================================================================
# User Pydantic Models
# =============================================================================
"""
Pydantic models for the current user's profile and statistics.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from resume_api.models.common import CamelModel


class UserResponse(CamelModel):
    """Local profile of an authenticated user."""

    id: UUID
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    subscription_tier: str = Field(..., examples=["free"])
    subscription_status: str
    resume_count: int
    export_count: int
    storage_used_bytes: int
    last_login_at: Optional[datetime] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserUpdate(CamelModel):
    """
    Profile fields the user may change.

    Subscription data and usage counters are maintained by the server.
    """

    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    avatar_url: Optional[str] = Field(None, max_length=2048)


class UserStats(CamelModel):
    """
    Usage statistics for the current user.

    Example:
        {
            "resumeCount": 2,
            "exportCount": 5,
            "storageUsedBytes": 0,
            "subscriptionTier": "free",
            "subscriptionStatus": "active"
        }
    """

    resume_count: int
    export_count: int
    storage_used_bytes: int
    subscription_tier: str
    subscription_status: str
