# =============================================================================
# Common Pydantic Models
# =============================================================================
"""
Response envelopes and the camelCase base model shared by all API schemas.

Every successful response is wrapped as ``{"data": ...}`` or
``{"message": ...}``; paginated lists add a ``pagination`` block and errors
use ``{"error": {...}}``.
"""

import math
from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base model serialized with camelCase keys.

    Input accepts both camelCase and snake_case field names, and instances
    can be built directly from ORM objects.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(CamelModel):
    """
    Pagination metadata for list responses.

    Example:
        {"page": 1, "limit": 10, "total": 42, "totalPages": 5}
    """

    page: int = Field(..., description="Current page number (1-indexed)")
    limit: int = Field(..., description="Items per page")
    total: int = Field(..., description="Total count matching filters")
    total_pages: int = Field(..., description="Number of pages")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        """
        Compute pagination metadata.

        Args:
            page: Requested page number.
            limit: Page size.
            total: Total number of matching items.

        Returns:
            Pagination with total_pages = ceil(total / limit).
        """
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
        )


class DataResponse(BaseModel, Generic[T]):
    """Envelope for a single payload."""

    data: T


class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope for a page of items plus pagination metadata."""

    data: list[T]
    pagination: Pagination


class MessageResponse(BaseModel):
    """Envelope for operations that return no payload."""

    message: str


class ErrorDetail(BaseModel):
    """
    Error body returned for every failed request.

    Attributes:
        code: Stable machine-readable error code.
        message: Human readable description.
        timestamp: When the error was produced.
        path: Request path that failed.
        details: Diagnostic text for render failures.
    """

    code: str
    message: str
    timestamp: datetime
    path: str
    details: Optional[str] = None


class ErrorResponse(BaseModel):
    """Envelope for error bodies."""

    error: ErrorDetail
