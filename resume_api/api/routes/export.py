# =============================================================================
# PDF Export Routes
# =============================================================================
"""
API route that renders client-supplied HTML and CSS to a PDF download.

The renderer works on raw markup, not on stored resumes.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from resume_api.api.dependencies import get_current_user_id, get_pdf_renderer
from resume_api.models.export import PdfExportRequest
from resume_api.services.pdf_service import PdfRenderer


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Router Configuration
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/resumes/export", tags=["export"])

PDF_FILENAME = "resume.pdf"


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@router.post(
    "",
    response_class=Response,
    summary="Export resume as PDF",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF document"},
        400: {"description": "HTML content is required"},
        500: {"description": "Rendering failed or timed out"},
    },
)
async def export_pdf(
    data: PdfExportRequest,
    user_id: UUID = Depends(get_current_user_id),
    renderer: PdfRenderer = Depends(get_pdf_renderer),
) -> Response:
    """
    Render HTML and CSS to a US Letter PDF.

    Example:
        POST /resumes/export
        {"html": "<main>...</main>", "css": "main { font-family: Inter; }"}
    """
    logger.info(f"Rendering PDF for user {user_id}")

    pdf = await renderer.render(data.html, data.css)

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{PDF_FILENAME}"'},
    )
