# =============================================================================
# Models Package
# =============================================================================
"""
Pydantic models and API schemas for the Resume Builder API.

Note: SQLAlchemy ORM models are in resume_api/database/models.py

Usage:
    from resume_api.models import ResumeCreate, ResumeResponse
    from resume_api.models.version import VersionCreate
"""

from resume_api.models.auth import (
    AuthSessionResponse,
    IdentityUser,
    OAuthUrlResponse,
    RefreshTokenRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
)
from resume_api.models.common import (
    CamelModel,
    DataResponse,
    ErrorDetail,
    ErrorResponse,
    MessageResponse,
    PaginatedResponse,
    Pagination,
)
from resume_api.models.export import PdfExportRequest
from resume_api.models.resume import (
    BulkExportItem,
    BulkExportRequest,
    BulkExportResponse,
    ResumeCreate,
    ResumeExport,
    ResumeExportBody,
    ResumeListOptions,
    ResumePage,
    ResumeResponse,
    ResumeSortField,
    ResumeSummary,
    ResumeUpdate,
    SortOrder,
)
from resume_api.models.sharing import (
    PublicResumeResponse,
    ResumeAnalytics,
    ShareResponse,
)
from resume_api.models.user import UserResponse, UserStats, UserUpdate
from resume_api.models.version import VersionCreate, VersionResponse


__all__ = [
    # Common
    "CamelModel",
    "DataResponse",
    "PaginatedResponse",
    "Pagination",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
    # Auth
    "SignUpRequest",
    "SignInRequest",
    "ResetPasswordRequest",
    "RefreshTokenRequest",
    "IdentityUser",
    "AuthSessionResponse",
    "OAuthUrlResponse",
    # Resumes
    "ResumeCreate",
    "ResumeUpdate",
    "ResumeListOptions",
    "ResumeSortField",
    "SortOrder",
    "ResumeSummary",
    "ResumeResponse",
    "ResumePage",
    "ResumeExport",
    "ResumeExportBody",
    "BulkExportRequest",
    "BulkExportItem",
    "BulkExportResponse",
    # Versions
    "VersionCreate",
    "VersionResponse",
    # Sharing
    "ShareResponse",
    "PublicResumeResponse",
    "ResumeAnalytics",
    # Users
    "UserResponse",
    "UserUpdate",
    "UserStats",
    # Export
    "PdfExportRequest",
]
