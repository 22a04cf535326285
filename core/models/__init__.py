"""Core domain models."""

from core.models.task import Task, TaskCreate, TaskUpdate, TaskPage, UPDATABLE_FIELDS

__all__ = [
    "Task", "TaskCreate", "TaskUpdate", "TaskPage", "UPDATABLE_FIELDS",
]
