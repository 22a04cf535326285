"""Bearer token lifecycle management.

Tokens are stored in Valkey keyed by the SHA-256 digest of the raw value, so
a leaked keyspace does not yield usable credentials. The raw value is only
ever returned from `issue`.
"""

import hashlib
import logging
import secrets
from datetime import timedelta
from uuid import UUID, uuid4

from clients.valkey_client import ValkeyClient
from auth.config import AuthConfig
from auth.types import AccessToken, IssuedToken
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


def hash_token(raw_token: str) -> str:
    """One-way digest used as the storage key for a token."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


class TokenManager:
    """Issue, validate and revoke opaque bearer tokens.

    Many tokens may exist per user (one per device). Revocation removes a
    single token and leaves the user's other tokens intact.
    """

    KEY_PREFIX = "access_token:"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig):
        self._valkey = valkey
        self._config = config

    def _key(self, raw_token: str) -> str:
        """Generate Valkey key for a raw token."""
        return f"{self.KEY_PREFIX}{hash_token(raw_token)}"

    def issue(self, user_id: UUID, device_name: str | None = None) -> IssuedToken:
        """Mint a new token for user.

        Returns the raw value together with the stored record. The raw value
        cannot be recovered afterwards.
        """
        raw_token = secrets.token_urlsafe(self._config.token_bytes)
        now = now_utc()

        expires_at = None
        expire_seconds = None
        if self._config.token_expiry_hours is not None:
            expires_at = now + timedelta(hours=self._config.token_expiry_hours)
            expire_seconds = self._config.token_expiry_hours * 3600

        token = AccessToken(
            id=uuid4(),
            user_id=user_id,
            name=device_name or self._config.default_device_name,
            created_at=now,
            last_used_at=None,
            expires_at=expires_at,
        )

        self._valkey.set_json(
            self._key(raw_token),
            token.model_dump(mode="json"),
            expire_seconds=expire_seconds,
        )
        logger.info(f"Issued token {token.id} ({token.name}) for user {user_id}")

        return IssuedToken(plain_text_token=raw_token, access_token=token)

    def validate(self, raw_token: str | None) -> AccessToken | None:
        """Look up the token record for a raw token.

        Returns None for a missing, unknown or expired token. Refreshes
        last_used_at when configured.
        """
        if not raw_token:
            return None

        key = self._key(raw_token)
        data = self._valkey.get_json(key)

        if data is None:
            logger.debug("Token validation failed: unknown token")
            return None

        token = AccessToken.model_validate(data)
        now = now_utc()

        # Valkey TTL should already have removed it
        if token.expires_at is not None and now >= token.expires_at:
            self._valkey.delete(key)
            logger.debug(f"Token validation failed: token {token.id} expired")
            return None

        if self._config.touch_last_used:
            token = token.model_copy(update={"last_used_at": now})
            # xx: a logout between the read and this write must not recreate the key
            touched = self._valkey.set_json(key, token.model_dump(mode="json"), keep_ttl=True, xx=True)
            if not touched:
                logger.debug(f"Token validation failed: token {token.id} revoked during validation")
                return None

        return token

    def revoke(self, raw_token: str) -> bool:
        """Delete the record for exactly this token.

        Returns False if the token was unknown. Safe to call repeatedly.
        """
        revoked = self._valkey.delete(self._key(raw_token))
        if revoked:
            logger.info("Revoked token")
        return revoked
