"""Database operations for tasks.

Queries never read an ambient current user: listing takes the owner id as an
argument, and single-row operations work by task id. Ownership checks belong
to the policy layer above.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from clients.postgres_client import PostgresClient
from core.models import Task, UPDATABLE_FIELDS

_TASK_COLUMNS = "id, user_id, title, description, is_completed, due_at, created_at, updated_at"


class TaskDatabase:
    """Postgres-backed task storage."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    def list_by_owner(self, owner_id: UUID, limit: int, offset: int) -> list[Task]:
        """Owner's tasks, newest first."""
        rows = self._db.execute(
            f"""SELECT {_TASK_COLUMNS}
                FROM tasks
                WHERE user_id = %s
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s""",
            (owner_id, limit, offset),
        )
        return [Task.model_validate(row) for row in rows]

    def count_by_owner(self, owner_id: UUID) -> int:
        count = self._db.execute_scalar(
            "SELECT count(*) FROM tasks WHERE user_id = %s",
            (owner_id,),
        )
        return int(count or 0)

    def get(self, task_id: UUID) -> Task | None:
        row = self._db.execute_single(
            f"SELECT {_TASK_COLUMNS} FROM tasks WHERE id = %s",
            (task_id,),
        )
        if row is None:
            return None
        return Task.model_validate(row)

    def insert(self, task: Task) -> Task:
        rows = self._db.execute_returning(
            f"""INSERT INTO tasks ({_TASK_COLUMNS})
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {_TASK_COLUMNS}""",
            (
                task.id,
                task.user_id,
                task.title,
                task.description,
                task.is_completed,
                task.due_at,
                task.created_at,
                task.updated_at,
            ),
        )
        return Task.model_validate(rows[0])

    def update(self, task_id: UUID, changes: dict[str, Any], updated_at: datetime) -> Task | None:
        """Apply changes to updatable columns.

        Keys outside UPDATABLE_FIELDS are rejected, so `user_id` can never be
        rewritten. Returns None if the task no longer exists.
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update task fields: {', '.join(sorted(unknown))}")

        # Column names come from the whitelist above, values are parameters
        columns = [field for field in UPDATABLE_FIELDS if field in changes]
        assignments = ", ".join(f"{column} = %s" for column in columns + ["updated_at"])
        params = [changes[column] for column in columns] + [updated_at, task_id]

        rows = self._db.execute_returning(
            f"""UPDATE tasks
                SET {assignments}
                WHERE id = %s
                RETURNING {_TASK_COLUMNS}""",
            tuple(params),
        )
        if not rows:
            return None
        return Task.model_validate(rows[0])

    def delete(self, task_id: UUID) -> bool:
        """Hard delete. Returns False if nothing was removed."""
        rows = self._db.execute_returning(
            "DELETE FROM tasks WHERE id = %s RETURNING id",
            (task_id,),
        )
        return len(rows) > 0
