# =============================================================================
# Resume API Routes
# =============================================================================
"""
API routes for the resume lifecycle.

Provides RESTful endpoints for:
- CRUD operations on resumes
- Search with pagination
- Duplicate, import, export and bulk export

All endpoints are prefixed with /resumes and require a bearer token.

Usage:
    from resume_api.api.routes import resumes
    app.include_router(resumes.router)
"""

import logging
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status

from resume_api.api.dependencies import get_current_user_id, get_resume_service
from resume_api.database.models import ResumeStatus
from resume_api.models.common import (
    DataResponse,
    MessageResponse,
    PaginatedResponse,
    Pagination,
)
from resume_api.models.resume import (
    BulkExportRequest,
    BulkExportResponse,
    ResumeCreate,
    ResumeExport,
    ResumeListOptions,
    ResumePage,
    ResumeResponse,
    ResumeSortField,
    ResumeSummary,
    ResumeUpdate,
    SortOrder,
)
from resume_api.services.resume_service import ResumeService


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Router Configuration
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/resumes", tags=["resumes"])


# -----------------------------------------------------------------------------
# Dependencies
# -----------------------------------------------------------------------------
def list_options(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    status_filter: Optional[ResumeStatus] = Query(None, alias="status"),
    template: Optional[str] = Query(None, description="Filter by template id"),
    sort_by: ResumeSortField = Query(ResumeSortField.UPDATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
) -> ResumeListOptions:
    """Paging, filter and sort options from the query string."""
    return ResumeListOptions(
        page=page,
        limit=limit,
        status=status_filter,
        template=template,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def search_options(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    status_filter: Optional[ResumeStatus] = Query(None, alias="status"),
    template: Optional[str] = Query(None, description="Filter by template id"),
    sort_by: ResumeSortField = Query(ResumeSortField.RELEVANCE, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
) -> ResumeListOptions:
    """Same as list_options, but sorting by relevance unless told otherwise."""
    return list_options(page, limit, status_filter, template, sort_by, sort_order)


def _paginated(page: ResumePage, options: ResumeListOptions, model: Any) -> PaginatedResponse:
    """Wrap a service page in the paginated envelope."""
    return PaginatedResponse(
        data=[model.model_validate(item) for item in page.items],
        pagination=Pagination.build(options.page, options.limit, page.total),
    )


# -----------------------------------------------------------------------------
# Create Operations
# -----------------------------------------------------------------------------
@router.post(
    "",
    response_model=DataResponse[ResumeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new resume",
    responses={
        201: {"description": "Resume created successfully"},
        403: {"description": "Resume limit reached for the subscription tier"},
    },
)
async def create_resume(
    data: ResumeCreate,
    user_id: UUID = Depends(get_current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> DataResponse[ResumeResponse]:
    """
    Create a new draft resume.

    Example:
        POST /resumes
        {
            "title": "Backend Engineer",
            "templateId": "modern",
            "content": {"basics": {"name": "Ada Lovelace"}}
        }
    """
    logger.info(f"Creating resume: {data.title}")

    resume = await service.create(user_id, data)
    return DataResponse(data=ResumeResponse.model_validate(resume))


@router.post(
    "/import",
    response_model=DataResponse[ResumeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Import a resume from an export envelope",
)
async def import_resume(
    payload: Any = Body(..., examples=[{"version": "1.0", "resume": {"title": "CV", "content": {}}}]),
    user_id: UUID = Depends(get_current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> DataResponse[ResumeResponse]:
    """Create a draft resume from a previously exported document."""
    resume = await service.import_resume(user_id, payload)
    return DataResponse(data=ResumeResponse.model_validate(resume))


@router.post(
    "/bulk-export",
    response_model=DataResponse[BulkExportResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Export many resumes",
)
async def bulk_export_resumes(
    data: Optional[BulkExportRequest] = None,
    user_id: UUID = Depends(get_current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> DataResponse[BulkExportResponse]:
    """Export all of the caller's resumes, or the listed subset."""
    resume_ids = data.resume_ids if data else None
    return DataResponse(data=await service.bulk_export(user_id, resume_ids))


# -----------------------------------------------------------------------------
# Read Operations
# -----------------------------------------------------------------------------
@router.get(
    "",
    response_model=PaginatedResponse[ResumeSummary],
    summary="List resumes",
    description="List the caller's resumes with optional filtering and pagination.",
)
async def list_resumes(
    options: ResumeListOptions = Depends(list_options),
    user_id: UUID = Depends(get_current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> PaginatedResponse[ResumeSummary]:
    """
    List resumes without their content.

    Example:
        GET /resumes?page=2&limit=20&status=draft&sortBy=title&sortOrder=asc
    """
    page = await service.list_resumes(user_id, options)
    return _paginated(page, options, ResumeSummary)


@router.get(
    "/search",
    response_model=PaginatedResponse[ResumeResponse],
    summary="Search resumes",
    description="Case-insensitive match on title and description.",
)
async def search_resumes(
    q: str = Query("", description="Search text"),
    options: ResumeListOptions = Depends(search_options),
    user_id: UUID = Depends(get_current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> PaginatedResponse[ResumeResponse]:
    """Search the caller's resumes."""
    page = await service.search(user_id, q, options)
    return _paginated(page, options, ResumeResponse)


@router.get(
    "/{resume_id}",
    response_model=DataResponse[ResumeResponse],
    summary="Get a resume",
    responses={404: {"description": "Resume not found"}},
)
async def get_resume(
    resume_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> DataResponse[ResumeResponse]:
    """Get a single resume including its content."""
    resume = await service.get_by_id(resume_id, user_id)
    return DataResponse(data=ResumeResponse.model_validate(resume))


@router.get(
    "/{resume_id}/export",
    response_model=DataResponse[ResumeExport],
    summary="Export a resume",
)
async def export_resume(
    resume_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> DataResponse[ResumeExport]:
    """Export a resume as a portable JSON envelope and count the export."""
    return DataResponse(data=await service.export(resume_id, user_id))


# -----------------------------------------------------------------------------
# Update Operations
# -----------------------------------------------------------------------------
@router.put(
    "/{resume_id}",
    response_model=DataResponse[ResumeResponse],
    summary="Update a resume",
)
async def update_resume(
    resume_id: UUID,
    data: ResumeUpdate,
    user_id: UUID = Depends(get_current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> DataResponse[ResumeResponse]:
    """Apply a partial update; only the fields sent are changed."""
    resume = await service.update(resume_id, user_id, data)
    return DataResponse(data=ResumeResponse.model_validate(resume))


@router.post(
    "/{resume_id}/duplicate",
    response_model=DataResponse[ResumeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate a resume",
)
async def duplicate_resume(
    resume_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> DataResponse[ResumeResponse]:
    """Copy a resume into a new draft."""
    resume = await service.duplicate(resume_id, user_id)
    return DataResponse(data=ResumeResponse.model_validate(resume))


# -----------------------------------------------------------------------------
# Delete Operations
# -----------------------------------------------------------------------------
@router.delete(
    "/{resume_id}",
    response_model=MessageResponse,
    summary="Delete a resume",
)
async def delete_resume(
    resume_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> MessageResponse:
    """Soft-delete a resume."""
    await service.delete(resume_id, user_id)
    return MessageResponse(message="Resume deleted successfully")
