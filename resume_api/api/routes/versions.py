# =============================================================================
# Resume Version Routes
# =============================================================================
"""
API routes for resume version history, nested under /resumes/{resume_id}.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from resume_api.api.dependencies import get_current_user_id, get_version_service
from resume_api.models.common import DataResponse
from resume_api.models.resume import ResumeResponse
from resume_api.models.version import VersionCreate, VersionResponse
from resume_api.services.version_service import VersionService


# -----------------------------------------------------------------------------
# Router Configuration
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/resumes/{resume_id}/versions", tags=["versions"])


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@router.get(
    "",
    response_model=DataResponse[list[VersionResponse]],
    summary="List versions",
)
async def list_versions(
    resume_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: VersionService = Depends(get_version_service),
) -> DataResponse[list[VersionResponse]]:
    """All versions of a resume, newest first."""
    versions = await service.list_versions(resume_id, user_id)
    return DataResponse(data=[VersionResponse.model_validate(v) for v in versions])


@router.post(
    "",
    response_model=DataResponse[VersionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a version",
)
async def create_version(
    resume_id: UUID,
    data: Optional[VersionCreate] = None,
    user_id: UUID = Depends(get_current_user_id),
    service: VersionService = Depends(get_version_service),
) -> DataResponse[VersionResponse]:
    """
    Snapshot the resume's current content.

    Example:
        POST /resumes/{resume_id}/versions
        {"versionName": "Before tailoring", "changesSummary": "Initial draft"}
    """
    version = await service.create(resume_id, user_id, data or VersionCreate())
    return DataResponse(data=VersionResponse.model_validate(version))


@router.get(
    "/{version_id}",
    response_model=DataResponse[VersionResponse],
    summary="Get a version",
)
async def get_version(
    resume_id: UUID,
    version_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: VersionService = Depends(get_version_service),
) -> DataResponse[VersionResponse]:
    """A single version of a resume."""
    version = await service.get_by_id(version_id, resume_id, user_id)
    return DataResponse(data=VersionResponse.model_validate(version))


@router.post(
    "/{version_id}/restore",
    response_model=DataResponse[ResumeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Restore a version",
)
async def restore_version(
    resume_id: UUID,
    version_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: VersionService = Depends(get_version_service),
) -> DataResponse[ResumeResponse]:
    """
    Copy a version's content and template back into the resume.

    The replaced content is not saved; create a version first to keep it.
    """
    resume = await service.restore(version_id, resume_id, user_id)
    return DataResponse(data=ResumeResponse.model_validate(resume))
