# =============================================================================
# Domain Exceptions
# =============================================================================
"""
Typed failures raised by the service layer.

Services never deal with HTTP; the API layer maps each exception class to a
status code in resume_api.api.errors.
"""

from typing import Optional


class ResumeBuilderError(Exception):
    """
    Base exception for all domain errors.

    Attributes:
        message: Error description safe to show to the caller.
        code: Stable machine-readable error code.
    """

    code = "ERROR"

    def __init__(self, message: str) -> None:
        """
        Initialize the exception.

        Args:
            message: Error description.
        """
        super().__init__(message)
        self.message = message


class UnauthorizedError(ResumeBuilderError):
    """Missing, invalid or expired credentials."""

    code = "UNAUTHORIZED"


class ForbiddenError(ResumeBuilderError):
    """Caller does not own the requested resource."""

    code = "FORBIDDEN"


class LimitExceededError(ForbiddenError):
    """Subscription tier does not allow another resume."""

    code = "LIMIT_EXCEEDED"


class NotFoundError(ResumeBuilderError):
    """Entity is absent, soft-deleted or outside the caller's ownership."""

    code = "NOT_FOUND"


class InvalidInputError(ResumeBuilderError):
    """Malformed request content."""

    code = "INVALID_INPUT"


class UnsupportedVersionError(InvalidInputError):
    """Import payload uses an export format version we cannot read."""

    code = "UNSUPPORTED_VERSION"


class UnsupportedOperationError(ResumeBuilderError):
    """Operation is exposed by the API but not supported by the backend."""

    code = "NOT_IMPLEMENTED"


class RenderError(ResumeBuilderError):
    """
    PDF rendering failed.

    Attributes:
        details: Underlying engine error, for diagnostics.
    """

    code = "RENDER_FAILED"

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error description.
            details: Underlying error string.
        """
        super().__init__(message)
        self.details = details


class RenderTimeoutError(RenderError):
    """PDF rendering did not finish within the configured timeout."""

    code = "RENDER_TIMEOUT"
