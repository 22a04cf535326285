"""Password hashing with bcrypt."""

import bcrypt

# bcrypt only ever reads the first 72 bytes of its input.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a fresh salt."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a password against a stored bcrypt hash.

    A malformed stored hash verifies as False rather than raising.
    """
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except ValueError:
        return False
