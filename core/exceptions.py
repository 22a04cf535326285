"""Typed exceptions for task access and storage."""


class TodoError(Exception):
    """Base class for task domain errors."""


class NotFoundError(TodoError):
    """No resource exists with the requested id."""

    def __init__(self, resource: str, resource_id):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} not found")


class ForbiddenError(TodoError):
    """Authenticated identity may not perform this action on the resource."""

    def __init__(self, message: str = "This action is unauthorized."):
        super().__init__(message)


class TaskValidationError(TodoError):
    """Task data failed validation. Carries field-level messages."""

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        super().__init__("The given data was invalid.")
