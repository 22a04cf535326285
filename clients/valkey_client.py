"""
Valkey connection used as the access-token store.

Wraps redis-py (Valkey speaks the Redis protocol). Connection problems
surface as redis exceptions; a missing key is None, never an error.
"""

import json
import logging

import redis

logger = logging.getLogger(__name__)


class ValkeyClient:
    """
    String and JSON values with optional TTLs.

    Usage:
        store = ValkeyClient("redis://localhost:6379/0")
        store.set_json("access_token:<digest>", record, expire_seconds=3600)
        record = store.get_json("access_token:<digest>")
    """

    def __init__(self, url: str):
        self._client = redis.from_url(url, decode_responses=True)
        # Refuse to start against an unreachable store
        self._client.ping()
        logger.info("Valkey connected")

    def ping(self) -> bool:
        self._client.ping()
        return True

    def get(self, key: str) -> str | None:
        return self._client.get(key)

    def set(
        self,
        key: str,
        value: str,
        expire_seconds: int | None = None,
        keep_ttl: bool = False,
        xx: bool = False,
    ) -> bool:
        """
        Store value under key.

        With `expire_seconds` the key gets a fresh TTL. With `keep_ttl` an
        overwrite leaves the current TTL in place. With neither, the key
        persists until deleted. With `xx` the write only happens if the key
        already exists.

        Returns False when `xx` skipped the write.
        """
        if expire_seconds is not None:
            written = self._client.set(key, value, ex=expire_seconds, xx=xx)
        elif keep_ttl:
            written = self._client.set(key, value, keepttl=True, xx=xx)
        else:
            written = self._client.set(key, value, xx=xx)
        return bool(written)

    def delete(self, key: str) -> bool:
        """True if the key existed."""
        return self._client.delete(key) > 0

    def ttl(self, key: str) -> int:
        """Seconds left; -1 for no expiry, -2 for a missing key."""
        return self._client.ttl(key)

    def set_json(
        self,
        key: str,
        value: dict | list,
        expire_seconds: int | None = None,
        keep_ttl: bool = False,
        xx: bool = False,
    ) -> bool:
        return self.set(key, json.dumps(value), expire_seconds, keep_ttl, xx)

    def get_json(self, key: str) -> dict | list | None:
        """Decoded value, or None if missing. Corrupt JSON raises ValueError."""
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in key '{key}': {e}") from e

    def close(self) -> None:
        self._client.close()
        logger.info("Valkey connection closed")
