"""Authentication: credentials, bearer tokens and request identity."""

from auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    DuplicateIdentityError,
    NotAuthenticatedError,
)
from auth.types import (
    User,
    UserCredentials,
    AccessToken,
    IssuedToken,
    AuthenticatedUser,
    AuthTokenResponse,
    RegisterRequest,
    LoginRequest,
)
from auth.config import AuthConfig
from auth.passwords import hash_password, verify_password
from auth.database import AuthDatabase
from auth.tokens import TokenManager, hash_token
from auth.service import AuthService
from auth.security_middleware import AuthMiddleware
from auth.api import create_auth_router
