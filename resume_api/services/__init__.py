# =============================================================================
# Services Package
# =============================================================================
"""
Business logic for the resume builder.

This package contains services for:
- Resume lifecycle (create, list, search, update, import and export)
- Version history snapshots and restore
- Public sharing links and view counting
- User profiles and authentication flows
- HTML to PDF rendering

Usage:
    from resume_api.services import ResumeService, VersionService

    async with db.session() as session:
        resume = await ResumeService(session).get_by_id(resume_id, user_id)
"""

from resume_api.services.auth_service import AuthService
from resume_api.services.identity_client import (
    IdentityProviderError,
    SupabaseAuthClient,
)
from resume_api.services.pdf_service import PdfRenderer
from resume_api.services.resume_service import ResumeService
from resume_api.services.sharing_service import SharingService
from resume_api.services.user_service import UserService
from resume_api.services.version_service import VersionService


__all__ = [
    "AuthService",
    "IdentityProviderError",
    "PdfRenderer",
    "ResumeService",
    "SharingService",
    "SupabaseAuthClient",
    "UserService",
    "VersionService",
]
