"""Security middleware for FastAPI - bearer token validation."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from api.base import unauthenticated_response
from auth.service import AuthService


def bearer_token(request: Request) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    header = request.headers.get("Authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that resolves the bearer token to an identity.

    For protected routes:
    1. Extracts the token from the Authorization header
    2. Resolves it via AuthService (token record + user)
    3. Stores user, token record and raw token on request.state
    4. Rejects with 401 before any handler runs if that fails

    Public paths bypass authentication entirely.
    """

    PUBLIC_PATHS = [
        "/auth/register",
        "/auth/login",
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
    ]

    def __init__(self, app, auth_service: AuthService):
        super().__init__(app)
        self._auth_service = auth_service

    def _is_public_path(self, path: str) -> bool:
        """Check if path is in public paths list."""
        for public_path in self.PUBLIC_PATHS:
            if path == public_path or path.startswith(public_path + "/"):
                return True
        return False

    async def dispatch(self, request: Request, call_next):
        """Process request through middleware."""
        if self._is_public_path(request.url.path):
            return await call_next(request)

        raw_token = bearer_token(request)
        if raw_token is None:
            return unauthenticated_response()

        identity = self._auth_service.resolve(raw_token)
        if identity is None:
            return unauthenticated_response()

        request.state.user = identity.user
        request.state.access_token = identity.access_token
        request.state.bearer_token = raw_token

        return await call_next(request)
