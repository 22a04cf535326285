"""API modules for HTTP interface."""

from api.base import (
    APIErrorResponse,
    DataResponse,
    PageMeta,
    PaginatedResponse,
    MessageResponse,
    error_response,
    unauthenticated_response,
    internal_error_response,
    ErrorCodes,
)
