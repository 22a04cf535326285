"""
Task service: CRUD over a user's to-do items.

The caller's identity is always passed in explicitly. This service does not
check ownership; routes consult `core.policies` before calling it.
"""

import logging
from uuid import UUID, uuid4

from core.exceptions import NotFoundError, TaskValidationError
from core.models import Task, TaskCreate, TaskPage, TaskUpdate
from core.ports import TaskRepository
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 15
MAX_PER_PAGE = 100

# Postgres OFFSET is a bigint
MAX_OFFSET = 2**63 - 1


def clamp_per_page(per_page: int) -> int:
    """Force a requested page size into [1, MAX_PER_PAGE]."""
    return max(1, min(MAX_PER_PAGE, per_page))


class TaskService:
    """Service for task operations."""

    def __init__(self, tasks: TaskRepository):
        self.tasks = tasks

    def list_for_owner(self, owner_id: UUID, per_page: int = DEFAULT_PER_PAGE, page: int = 1) -> TaskPage:
        """
        List one page of an owner's tasks.

        Args:
            owner_id: User whose tasks to list
            per_page: Page size, clamped into [1, 100] rather than rejected
            page: 1-based page number, values below 1 mean the first page;
                pages past the end come back empty

        Returns:
            TaskPage ordered by creation time DESC
        """
        per_page = clamp_per_page(per_page)
        page = max(1, page)

        # A page far past the end is empty, not an out-of-range error
        offset = min((page - 1) * per_page, MAX_OFFSET)
        items = self.tasks.list_by_owner(owner_id, limit=per_page, offset=offset)
        total = self.tasks.count_by_owner(owner_id)

        return TaskPage(items=items, total=total, current_page=page, per_page=per_page)

    def get(self, task_id: UUID) -> Task | None:
        """Get task by ID, or None."""
        return self.tasks.get(task_id)

    def require(self, task_id: UUID) -> Task:
        """
        Get task by ID.

        Raises:
            NotFoundError: If no task has this id
        """
        task = self.tasks.get(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    def create(self, owner_id: UUID, data: TaskCreate) -> Task:
        """
        Create a task owned by owner_id.

        Raises:
            TaskValidationError: If the title is blank
        """
        if not data.title or not data.title.strip():
            raise TaskValidationError({"title": ["The title field is required."]})

        now = now_utc()
        task = Task(
            id=uuid4(),
            user_id=owner_id,
            title=data.title,
            description=data.description,
            is_completed=False,
            due_at=data.due_at,
            created_at=now,
            updated_at=now,
        )

        created = self.tasks.insert(task)
        logger.info(f"Task {created.id} created for user {owner_id}")
        return created

    def update(self, task: Task, data: TaskUpdate) -> Task:
        """
        Apply a partial update. Fields not present in `data` are left untouched.

        Raises:
            TaskValidationError: If a supplied title is blank
            NotFoundError: If the task was deleted in the meantime
        """
        changes = data.changes()
        if not changes:
            return task

        if "title" in changes and not (changes["title"] or "").strip():
            raise TaskValidationError({"title": ["The title field is required."]})

        updated = self.tasks.update(task.id, changes, updated_at=now_utc())
        if updated is None:
            raise NotFoundError("Task", task.id)
        return updated

    def delete(self, task_id: UUID) -> bool:
        """
        Delete a task. Idempotent.

        Returns:
            True if deleted, False if it was already gone
        """
        deleted = self.tasks.delete(task_id)
        if deleted:
            logger.info(f"Task {task_id} deleted")
        return deleted
