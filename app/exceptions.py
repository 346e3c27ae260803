# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors carry a machine-readable code and, where possible, how to fix them.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class TutorialsException(Exception):
    """
    Base exception for the Tutorials API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "TUTORIALS_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Tutorial Exceptions
# =============================================================================

class TutorialNotFoundError(TutorialsException):
    """Raised when a tutorial ID doesn't exist."""

    def __init__(self, tutorial_id: str):
        super().__init__(
            message=f"Not found Tutorial with id {tutorial_id}",
            code="TUTORIAL_NOT_FOUND",
            status_code=404,
            suggestion="Check that the tutorial id is correct",
            details={"tutorial_id": tutorial_id}
        )


class EmptyContentError(TutorialsException):
    """Raised when a tutorial is created without a title."""

    def __init__(self):
        super().__init__(
            message="Content can not be empty!",
            code="EMPTY_CONTENT",
            status_code=400,
            suggestion="Send a body with a non-empty 'title' field",
        )


class EmptyUpdateError(TutorialsException):
    """Raised when an update request carries no fields."""

    def __init__(self):
        super().__init__(
            message="Data to update can not be empty!",
            code="EMPTY_UPDATE",
            status_code=400,
            suggestion="Send at least one of 'title', 'description' or 'published'",
        )


class InvalidBodyError(TutorialsException):
    """Raised when a request body cannot be parsed."""

    def __init__(self, content_type: str, error: str):
        super().__init__(
            message=f"Malformed request body: {error}",
            code="INVALID_JSON_BODY" if "json" in content_type else "INVALID_BODY",
            status_code=400,
            suggestion="Check that the body matches its Content-Type header",
            details={"content_type": content_type}
        )


class BodyTooLargeError(TutorialsException):
    """Raised when a request body exceeds the configured size limit."""

    def __init__(self, limit: int):
        super().__init__(
            message=f"Request body exceeds {limit} bytes",
            code="BODY_TOO_LARGE",
            status_code=413,
            details={"limit": limit}
        )


class TutorialValidationError(TutorialsException):
    """Raised when tutorial fields have the wrong type."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__(
            message="Invalid tutorial fields",
            code="VALIDATION_ERROR",
            status_code=422,
            suggestion="'title' and 'description' must be strings, 'published' a boolean",
            details={"errors": errors}
        )


# =============================================================================
# Database Exceptions
# =============================================================================

class DatabaseUnavailableError(TutorialsException):
    """Raised when a route needs the database and it cannot be reached."""

    def __init__(self, error: str | None = None):
        super().__init__(
            message="Database is not available",
            code="DATABASE_UNAVAILABLE",
            status_code=503,
            suggestion="Check MONGODB_URL and that the database server is running",
            details={"error": error} if error else None
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def tutorials_exception_handler(
    request: Request,
    exc: TutorialsException
) -> JSONResponse:
    """
    Convert TutorialsException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors (path and query parameters).
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
                for error in exc.errors()
            ],
        }
    )
