"""Database operations for authentication.

Uses the users table. Emails are stored lower-cased and a unique index on
lower(email) backs the uniqueness rule.
"""

from uuid import UUID

import psycopg2.errors

from clients.postgres_client import PostgresClient
from auth.exceptions import DuplicateIdentityError
from auth.types import User, UserCredentials

_USER_COLUMNS = "id, name, email, created_at, updated_at"


class AuthDatabase:
    """Database operations for authentication."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    def get_user_by_email(self, email: str) -> UserCredentials | None:
        """Find user with password hash by email (case-insensitive)."""
        row = self._db.execute_single(
            f"""SELECT {_USER_COLUMNS}, password_hash
                FROM users WHERE email = lower(%s)""",
            (email,),
        )
        if row is None:
            return None
        return UserCredentials.model_validate(row)

    def get_user_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID."""
        row = self._db.execute_single(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            (user_id,),
        )
        if row is None:
            return None
        return User.model_validate(row)

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        """Create new user with email (lowercased).

        Raises:
            DuplicateIdentityError: Email already registered.
        """
        try:
            rows = self._db.execute_returning(
                f"""INSERT INTO users (name, email, password_hash)
                    VALUES (%s, lower(%s), %s)
                    RETURNING {_USER_COLUMNS}""",
                (name, email, password_hash),
            )
        except psycopg2.errors.UniqueViolation as e:
            raise DuplicateIdentityError(email) from e
        return User.model_validate(rows[0])
