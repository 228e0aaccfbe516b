# =============================================================================
# Sharing Routes
# =============================================================================
"""
API routes for public links, view analytics and the public resume page.

``GET /public/{slug}`` is the only resume endpoint that needs no token.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from resume_api.api.dependencies import get_current_user_id, get_sharing_service
from resume_api.models.common import DataResponse, MessageResponse
from resume_api.models.sharing import (
    PublicResumeResponse,
    ResumeAnalytics,
    ShareResponse,
)
from resume_api.services.sharing_service import SharingService


# -----------------------------------------------------------------------------
# Router Configuration
# -----------------------------------------------------------------------------
router = APIRouter(tags=["sharing"])


# -----------------------------------------------------------------------------
# Owner Endpoints
# -----------------------------------------------------------------------------
@router.post(
    "/resumes/{resume_id}/share",
    response_model=DataResponse[ShareResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Share a resume",
)
async def share_resume(
    resume_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
) -> DataResponse[ShareResponse]:
    """Make a resume public; an already public resume keeps its link."""
    return DataResponse(data=await service.share(resume_id, user_id))


@router.post(
    "/resumes/{resume_id}/unshare",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Unshare a resume",
)
async def unshare_resume(
    resume_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
) -> MessageResponse:
    """Make a resume private and retire its link."""
    await service.unshare(resume_id, user_id)
    return MessageResponse(message="Resume unshared successfully")


@router.get(
    "/resumes/{resume_id}/analytics",
    response_model=DataResponse[ResumeAnalytics],
    summary="Get resume analytics",
)
async def get_analytics(
    resume_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
) -> DataResponse[ResumeAnalytics]:
    """View and export counters of a resume."""
    return DataResponse(data=await service.get_analytics(resume_id, user_id))


# -----------------------------------------------------------------------------
# Public Endpoints
# -----------------------------------------------------------------------------
@router.get(
    "/public/{slug}",
    response_model=DataResponse[PublicResumeResponse],
    summary="Get a public resume",
)
async def get_public_resume(
    slug: str,
    service: SharingService = Depends(get_sharing_service),
) -> DataResponse[PublicResumeResponse]:
    """Public resume by slug; every call counts as one view."""
    return DataResponse(data=await service.get_public_resume(slug))
