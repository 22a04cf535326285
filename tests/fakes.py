"""In-memory stand-ins for Valkey and the Postgres-backed repositories.

They implement the same methods as ValkeyClient, AuthDatabase and
TaskDatabase so services and routes run unchanged without external services.
"""

import json
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from auth.exceptions import DuplicateIdentityError
from auth.types import User, UserCredentials
from core.models import Task, UPDATABLE_FIELDS
from utils.timezone import now_utc


class FakeValkeyClient:
    """
    Dict-backed ValkeyClient with a manual clock for TTLs.

    Call `advance(seconds)` to move time forward; keys past their TTL vanish.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._expires: dict[str, float] = {}
        self.clock = 0.0

    def advance(self, seconds: float) -> None:
        self.clock += seconds

    def _purge(self, key: str) -> None:
        expires = self._expires.get(key)
        if expires is not None and self.clock >= expires:
            self._data.pop(key, None)
            self._expires.pop(key, None)

    def keys(self) -> list[str]:
        for key in list(self._data):
            self._purge(key)
        return list(self._data)

    def ping(self) -> bool:
        return True

    def get(self, key: str) -> str | None:
        self._purge(key)
        return self._data.get(key)

    def set(
        self,
        key: str,
        value: str,
        expire_seconds: int | None = None,
        keep_ttl: bool = False,
        xx: bool = False,
    ) -> bool:
        self._purge(key)
        if xx and key not in self._data:
            return False
        if expire_seconds is not None:
            self._expires[key] = self.clock + expire_seconds
        elif not keep_ttl:
            self._expires.pop(key, None)
        self._data[key] = value
        return True

    def delete(self, key: str) -> bool:
        self._purge(key)
        self._expires.pop(key, None)
        return self._data.pop(key, None) is not None

    def ttl(self, key: str) -> int:
        self._purge(key)
        if key not in self._data:
            return -2
        if key not in self._expires:
            return -1
        return int(self._expires[key] - self.clock)

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
        value = self.get(key)
        return None if value is None else json.loads(value)

    def close(self) -> None:
        pass


class InMemoryUserRepository:
    """UserRepository over a dict, enforcing case-insensitive email uniqueness."""

    def __init__(self) -> None:
        self.users: dict[UUID, UserCredentials] = {}

    def get_user_by_email(self, email: str) -> UserCredentials | None:
        email = email.lower()
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def get_user_by_id(self, user_id: UUID) -> User | None:
        user = self.users.get(user_id)
        return user.public() if user else None

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        if self.get_user_by_email(email) is not None:
            raise DuplicateIdentityError(email)
        now = now_utc()
        user = UserCredentials(
            id=uuid4(),
            name=name,
            email=email.lower(),
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        return user.public()

    def delete_user(self, user_id: UUID) -> None:
        self.users.pop(user_id, None)


class InMemoryTaskRepository:
    """TaskRepository over a dict, newest-first like the SQL version."""

    def __init__(self) -> None:
        self.tasks: dict[UUID, Task] = {}

    def _owned(self, owner_id: UUID) -> list[Task]:
        owned = [t for t in self.tasks.values() if t.user_id == owner_id]
        return sorted(owned, key=lambda t: (t.created_at, str(t.id)), reverse=True)

    def list_by_owner(self, owner_id: UUID, limit: int, offset: int) -> list[Task]:
        return self._owned(owner_id)[offset:offset + limit]

    def count_by_owner(self, owner_id: UUID) -> int:
        return len(self._owned(owner_id))

    def get(self, task_id: UUID) -> Task | None:
        return self.tasks.get(task_id)

    def insert(self, task: Task) -> Task:
        self.tasks[task.id] = task
        return task

    def update(self, task_id: UUID, changes: dict[str, Any], updated_at: datetime) -> Task | None:
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update task fields: {', '.join(sorted(unknown))}")
        current = self.tasks.get(task_id)
        if current is None:
            return None
        updated = current.model_copy(update={**changes, "updated_at": updated_at})
        self.tasks[task_id] = updated
        return updated

    def delete(self, task_id: UUID) -> bool:
        return self.tasks.pop(task_id, None) is not None
