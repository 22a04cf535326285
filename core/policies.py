"""
Authorization policies.

A policy is a pure decision over (identity, action, resource). It performs
no I/O and never raises; `authorize` converts a refusal into an exception
for the HTTP layer.
"""

from enum import Enum
from typing import Any, Protocol

from auth.exceptions import NotAuthenticatedError
from auth.types import User
from core.exceptions import ForbiddenError
from core.models import Task


class Action(Enum):
    """Operations a caller may attempt on a resource type."""

    LIST = "list"
    CREATE = "create"
    VIEW = "view"
    UPDATE = "update"
    DELETE = "delete"


class Decision(Enum):
    ALLOW = "allow"
    FORBIDDEN = "forbidden"
    UNAUTHENTICATED = "unauthenticated"


class Policy(Protocol):
    def decide(self, identity: User | None, action: Action, resource: Any | None) -> Decision: ...


class TaskPolicy:
    """Ownership policy for tasks.

    - No identity: UNAUTHENTICATED, whatever the action.
    - LIST and CREATE: any identity (results and new tasks are scoped to it).
    - VIEW, UPDATE, DELETE: only the task's owner.
    """

    # Actions that operate on one existing task
    OWNER_ACTIONS = frozenset({Action.VIEW, Action.UPDATE, Action.DELETE})

    def decide(self, identity: User | None, action: Action, resource: Task | None) -> Decision:
        if identity is None:
            return Decision.UNAUTHENTICATED

        if action in (Action.LIST, Action.CREATE):
            return Decision.ALLOW

        if action in self.OWNER_ACTIONS and resource is not None and resource.user_id == identity.id:
            return Decision.ALLOW

        return Decision.FORBIDDEN


def authorize(policy: Policy, identity: User | None, action: Action, resource: Any | None = None) -> None:
    """
    Enforce a policy decision.

    Raises:
        NotAuthenticatedError: No identity.
        ForbiddenError: Identity may not perform the action on this resource.
    """
    decision = policy.decide(identity, action, resource)
    if decision is Decision.UNAUTHENTICATED:
        raise NotAuthenticatedError()
    if decision is Decision.FORBIDDEN:
        raise ForbiddenError()
