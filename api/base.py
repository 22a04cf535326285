"""Response bodies and error codes shared by all endpoints."""

from typing import Any

from pydantic import BaseModel, Field
from starlette.responses import JSONResponse


class APIErrorResponse(BaseModel):
    """
    Error body returned by every failing endpoint.

    `errors` maps field names to messages for validation failures and is
    omitted otherwise.
    """

    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")
    errors: dict[str, list[str]] | None = None


class DataResponse(BaseModel):
    """Single resource wrapped in `data`."""

    data: Any


class PageMeta(BaseModel):
    current_page: int
    per_page: int
    total: int
    last_page: int


class PaginatedResponse(BaseModel):
    """One page of resources plus paging metadata."""

    data: list[Any]
    meta: PageMeta


class MessageResponse(BaseModel):
    message: str


def error_response(code: str, message: str, errors: dict[str, list[str]] | None = None) -> dict:
    """Build a JSON-ready error body."""
    return APIErrorResponse(
        message=message,
        code=code,
        errors=errors,
    ).model_dump(mode="json", exclude_none=True)


class ErrorCodes:
    """Standard error codes for consistent error handling."""

    # Authentication & Authorization
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    FORBIDDEN = "FORBIDDEN"

    # Resource Errors
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Infrastructure
    INTERNAL_ERROR = "INTERNAL_ERROR"


def unauthenticated_response(message: str = "Unauthenticated.") -> JSONResponse:
    """401 response with a bearer challenge."""
    return JSONResponse(
        status_code=401,
        headers={"WWW-Authenticate": "Bearer"},
        content=error_response(ErrorCodes.NOT_AUTHENTICATED, message),
    )


def internal_error_response() -> JSONResponse:
    """500 response that reveals nothing about the failure."""
    return JSONResponse(
        status_code=500,
        content=error_response(ErrorCodes.INTERNAL_ERROR, "An internal error occurred"),
    )
