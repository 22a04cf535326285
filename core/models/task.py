"""Task (to-do item) domain models."""

from datetime import datetime
from math import ceil
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from utils.timezone import assume_utc

# Fields a client may change after creation. Ownership is never among them.
UPDATABLE_FIELDS = ("title", "description", "is_completed", "due_at")


def _clean_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("The title field is required.")
    return value


class TaskCreate(BaseModel):
    """Data required to create a task. The owner comes from the caller's identity."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=65535)
    due_at: datetime | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _clean_title(value)

    @field_validator("due_at")
    @classmethod
    def due_at_utc(cls, value: datetime | None) -> datetime | None:
        return assume_utc(value)


class TaskUpdate(BaseModel):
    """
    Partial update of a task. All fields optional.

    Only fields present in the payload are applied. `title` and `is_completed`
    may be omitted but not sent as null; `description` and `due_at` may be
    nulled to clear them. Unknown fields such as `user_id` are ignored.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=65535)
    is_completed: bool | None = None
    due_at: datetime | None = None

    @field_validator("title", "is_completed", mode="before")
    @classmethod
    def not_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            raise ValueError(f"The {info.field_name} field cannot be null.")
        return value

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _clean_title(value)

    @field_validator("due_at")
    @classmethod
    def due_at_utc(cls, value: datetime | None) -> datetime | None:
        return assume_utc(value)

    def changes(self) -> dict[str, Any]:
        """Fields explicitly supplied by the client."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if field in UPDATABLE_FIELDS
        }


class Task(BaseModel):
    """Full task entity as stored."""

    id: UUID
    user_id: UUID
    title: str
    description: str | None = None
    is_completed: bool = False
    due_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TaskPage(BaseModel):
    """One page of a user's tasks, newest first."""

    items: list[Task]
    total: int
    current_page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, ceil(self.total / self.per_page))
