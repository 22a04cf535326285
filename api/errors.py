"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from api.base import error_response, internal_error_response, unauthenticated_response, ErrorCodes
from auth.exceptions import (
    DuplicateIdentityError,
    InvalidCredentialsError,
    NotAuthenticatedError,
)
from core.exceptions import ForbiddenError, NotFoundError, TaskValidationError

logger = logging.getLogger(__name__)

_LOCATIONS = {"body", "query", "path", "header"}


def field_errors(errors: list[dict]) -> dict[str, list[str]]:
    """Group pydantic/FastAPI error entries by field name."""
    grouped: dict[str, list[str]] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATIONS and len(loc) > 1:
            loc = loc[1:]
        field = ".".join(loc) or "body"
        grouped.setdefault(field, []).append(err.get("msg", "Invalid value."))
    return grouped


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=error_response(
                ErrorCodes.VALIDATION_ERROR,
                "The given data was invalid.",
                field_errors(exc.errors()),
            ),
        )

    @app.exception_handler(TaskValidationError)
    async def task_validation_error_handler(request: Request, exc: TaskValidationError):
        return JSONResponse(
            status_code=422,
            content=error_response(ErrorCodes.VALIDATION_ERROR, str(exc), exc.errors),
        )

    @app.exception_handler(DuplicateIdentityError)
    async def duplicate_identity_handler(request: Request, exc: DuplicateIdentityError):
        return JSONResponse(
            status_code=422,
            content=error_response(ErrorCodes.ALREADY_EXISTS, str(exc), {"email": [str(exc)]}),
        )

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
        return JSONResponse(
            status_code=422,
            content=error_response(ErrorCodes.INVALID_CREDENTIALS, str(exc), {"email": [str(exc)]}),
        )

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
        return unauthenticated_response(str(exc))

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError):
        return JSONResponse(
            status_code=403,
            content=error_response(ErrorCodes.FORBIDDEN, str(exc)),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=error_response(ErrorCodes.NOT_FOUND, str(exc)),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return internal_error_response()
