"""
Secrets for the todo API, read from HashiCorp Vault.

AppRole login from VAULT_* environment variables. Every path is read from
the KV v2 `todo/` subtree. Missing configuration or secrets stop startup.
"""

import logging
import os

import hvac
from hvac.exceptions import Forbidden, InvalidPath, Unauthorized

logger = logging.getLogger(__name__)

SECRET_PREFIX = "todo"


class VaultError(Exception):
    """Vault could not supply a secret the service needs to start."""


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} environment variable is required")
    return value


class VaultClient:
    """AppRole-authenticated reader for `todo/` KV v2 secrets."""

    def __init__(self, vault_addr: str | None = None, vault_namespace: str | None = None):
        self.vault_addr = vault_addr or _require_env("VAULT_ADDR")
        namespace = vault_namespace or os.getenv("VAULT_NAMESPACE")
        role_id = _require_env("VAULT_ROLE_ID")
        secret_id = _require_env("VAULT_SECRET_ID")

        if namespace:
            self.client = hvac.Client(url=self.vault_addr, namespace=namespace)
        else:
            self.client = hvac.Client(url=self.vault_addr)

        self._authenticate(role_id, secret_id)
        logger.info(f"Vault authenticated at {self.vault_addr}")

    def _authenticate(self, role_id: str, secret_id: str) -> None:
        try:
            response = self.client.auth.approle.login(role_id=role_id, secret_id=secret_id)
        except (Unauthorized, Forbidden) as e:
            raise VaultError(f"AppRole login rejected: {e}") from e

        self.client.token = response["auth"]["client_token"]
        if not self.client.is_authenticated():
            raise VaultError("Vault did not accept the AppRole token")

    def get_secret(self, path: str, field: str) -> str:
        """
        Read one field of `todo/<path>`.

        Raises:
            VaultError: Path missing or not readable with this role.
            KeyError: Secret exists but has no such field.
        """
        full_path = f"{SECRET_PREFIX}/{path}"
        try:
            response = self.client.secrets.kv.v2.read_secret_version(
                path=full_path, raise_on_deleted_version=True
            )
        except InvalidPath as e:
            raise VaultError(f"Secret '{full_path}' not found in Vault") from e
        except (Unauthorized, Forbidden) as e:
            raise VaultError(f"Access denied to secret '{full_path}': {e}") from e

        data = response["data"]["data"]
        if field not in data:
            raise KeyError(f"Secret '{full_path}' has no field '{field}'")
        return data[field]


# Process-wide client and secret cache; secrets are read once per process
_client: VaultClient | None = None
_cache: dict[tuple[str, str], str] = {}


def get_secret(path: str, field: str) -> str:
    """Cached `VaultClient.get_secret` through a shared client."""
    global _client
    key = (path, field)
    if key not in _cache:
        if _client is None:
            _client = VaultClient()
        _cache[key] = _client.get_secret(path, field)
    return _cache[key]


def reset_vault() -> None:
    """Forget the shared client and cached secrets."""
    global _client
    _client = None
    _cache.clear()


def get_database_url() -> str:
    return get_secret("database", "url")


def get_valkey_url() -> str:
    return get_secret("valkey", "url")
