"""Infrastructure clients: Postgres storage, Valkey token store, Vault secrets."""

from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from clients.vault_client import VaultClient, VaultError, get_database_url, get_valkey_url

__all__ = [
    "PostgresClient",
    "ValkeyClient",
    "VaultClient",
    "VaultError",
    "get_database_url",
    "get_valkey_url",
]
