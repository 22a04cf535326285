"""Request-scoped middleware for API requests."""

import logging
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from api.base import internal_error_response
from utils.logging_setup import request_id_var

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a unique request ID to every request and its log records.

    Unhandled errors are turned into the 500 response here, while the
    request id is still set, so the log line and the response carry it.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled exception")
            response = internal_error_response()
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response
