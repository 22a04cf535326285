"""HTTP routes for authentication."""

from fastapi import APIRouter, Request

from api.base import MessageResponse
from auth.exceptions import NotAuthenticatedError
from auth.service import AuthService
from auth.types import LoginRequest, RegisterRequest


def create_auth_router(auth_service: AuthService) -> APIRouter:
    """Create auth router with injected service."""
    router = APIRouter(tags=["auth"])

    @router.post("/auth/register", status_code=201)
    async def register(body: RegisterRequest):
        """Create an account. Returns the first token and the new user."""
        result = auth_service.register(body)
        return result.model_dump(mode="json")

    @router.post("/auth/login")
    async def login(body: LoginRequest):
        """Exchange email and password for a new token.

        Unknown email and wrong password produce the same 422 response.
        """
        result = auth_service.login(body)
        return result.model_dump(mode="json")

    @router.post("/auth/logout")
    async def logout(request: Request):
        """Revoke the token used for this request only."""
        raw_token = getattr(request.state, "bearer_token", None)
        if raw_token is None:
            raise NotAuthenticatedError()

        auth_service.logout(raw_token)
        return MessageResponse(message="Logged out").model_dump(mode="json")

    @router.get("/user")
    async def get_current_user(request: Request):
        """Get current authenticated user."""
        user = getattr(request.state, "user", None)
        if user is None:
            raise NotAuthenticatedError()

        return user.model_dump(mode="json")

    return router
