# =============================================================================
# PDF Export Pydantic Models
# =============================================================================
"""
Request model for HTML to PDF rendering.
"""

from typing import Optional

from pydantic import Field

from resume_api.models.common import CamelModel


class PdfExportRequest(CamelModel):
    """
    Rendered resume markup to convert to PDF.

    Attributes:
        html: Body markup produced by the web client.
        css: Stylesheet injected inline into the document head.
    """

    html: str = Field("", description="HTML fragment to render")
    css: Optional[str] = Field(None, description="CSS applied to the fragment")
