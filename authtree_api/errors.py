"""
API Error Handling

Standardized error handling for the API. Tree exceptions are mapped to
HTTP status codes and the common {"ok": false, "error": {...}} body.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from authtree.schemas.errors import AuthTreeException, ErrorCodes

from authtree_api.models.responses import ErrorDetail, ErrorResponse


# HTTP status for each tree error code; anything else is a 500
STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.INVALID_INDEX: 400,
    ErrorCodes.INVALID_LEAF_INDEX: 400,
    ErrorCodes.INVALID_DEPTH: 400,
    ErrorCodes.INVALID_ARGUMENT: 400,
    ErrorCodes.INVALID_HASH: 409,
    ErrorCodes.STORAGE_ERROR: 503,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    @classmethod
    def from_exception(cls, exc: AuthTreeException) -> "APIError":
        return cls(
            code=exc.code,
            message=exc.message,
            status_code=STATUS_BY_CODE.get(exc.code, 500),
            details=exc.details,
        )

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def authtree_error_handler(request: Request, exc: AuthTreeException) -> JSONResponse:
    """Handle tree, argument and storage exceptions raised by route handlers."""
    return await api_error_handler(request, APIError.from_exception(exc))


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
