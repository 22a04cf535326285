"""
Storage ports used by the services.

Services depend on these Protocols instead of concrete database classes.
Every method that scopes by owner takes the owner id explicitly.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol
from uuid import UUID

from core.models import Task

if TYPE_CHECKING:
    from auth.types import User, UserCredentials


class UserRepository(Protocol):
    def get_user_by_email(self, email: str) -> UserCredentials | None: ...
    def get_user_by_id(self, user_id: UUID) -> User | None: ...
    def create_user(self, name: str, email: str, password_hash: str) -> User: ...


class TaskRepository(Protocol):
    def list_by_owner(self, owner_id: UUID, limit: int, offset: int) -> list[Task]: ...
    def count_by_owner(self, owner_id: UUID) -> int: ...
    def get(self, task_id: UUID) -> Task | None: ...
    def insert(self, task: Task) -> Task: ...
    def update(self, task_id: UUID, changes: dict[str, Any], updated_at: datetime) -> Task | None: ...
    def delete(self, task_id: UUID) -> bool: ...
