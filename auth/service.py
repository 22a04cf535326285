"""Authentication service - orchestrates registration, login and logout."""

import logging
import secrets

from auth.config import AuthConfig
from auth.exceptions import DuplicateIdentityError, InvalidCredentialsError
from auth.passwords import hash_password, verify_password
from auth.tokens import TokenManager
from auth.types import (
    AuthenticatedUser,
    AuthTokenResponse,
    LoginRequest,
    RegisterRequest,
    User,
)
from core.ports import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Orchestrates password authentication and bearer tokens.

    Handles:
    - Registration (ends with a fresh token)
    - Login (ends with a fresh token, enumeration-safe failures)
    - Logout of the current token only
    - Resolving a bearer token to an identity
    """

    def __init__(
        self,
        config: AuthConfig,
        users: UserRepository,
        tokens: TokenManager,
    ):
        self._config = config
        self._users = users
        self._tokens = tokens
        # Compared against when the email is unknown so both failure paths pay for bcrypt
        self._dummy_hash = hash_password(secrets.token_urlsafe(16), rounds=config.bcrypt_rounds)

    def register(self, data: RegisterRequest) -> AuthTokenResponse:
        """Create an account and issue its first token.

        Raises:
            DuplicateIdentityError: Email already registered.
        """
        email = data.email.lower().strip()

        if self._users.get_user_by_email(email) is not None:
            raise DuplicateIdentityError(email)

        # The store's unique index still catches a concurrent registration
        user = self._users.create_user(
            name=data.name,
            email=email,
            password_hash=hash_password(data.password, rounds=self._config.bcrypt_rounds),
        )
        logger.info(f"Registered user {user.id}")

        issued = self._tokens.issue(user.id, data.device_name)
        return AuthTokenResponse(token=issued.plain_text_token, user=user)

    def login(self, data: LoginRequest) -> AuthTokenResponse:
        """Check email/password and issue a new token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password (indistinguishable).
        """
        email = data.email.lower().strip()
        credentials = self._users.get_user_by_email(email)

        if credentials is None:
            verify_password(data.password, self._dummy_hash)
            raise InvalidCredentialsError()

        if not verify_password(data.password, credentials.password_hash):
            raise InvalidCredentialsError()

        user = credentials.public()
        issued = self._tokens.issue(user.id, data.device_name)
        return AuthTokenResponse(token=issued.plain_text_token, user=user)

    def logout(self, raw_token: str) -> bool:
        """Revoke the presented token. The user's other tokens stay valid."""
        return self._tokens.revoke(raw_token)

    def resolve(self, raw_token: str | None) -> AuthenticatedUser | None:
        """Resolve a bearer token to its user.

        Returns None for a missing, unknown or expired token, or when the
        owning user no longer exists.
        """
        access_token = self._tokens.validate(raw_token)
        if access_token is None:
            return None

        user: User | None = self._users.get_user_by_id(access_token.user_id)
        if user is None:
            logger.debug(f"Token {access_token.id} belongs to a missing user")
            return None

        return AuthenticatedUser(user=user, access_token=access_token)
