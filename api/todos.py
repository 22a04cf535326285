"""/todos: CRUD over the caller's own tasks."""

from uuid import UUID

from fastapi import APIRouter, Query, Request, Response

from api.base import DataResponse, PageMeta, PaginatedResponse
from auth.exceptions import NotAuthenticatedError
from auth.types import User
from core.models import Task, TaskCreate, TaskUpdate
from core.policies import Action, Policy, TaskPolicy, authorize
from core.services.task_service import DEFAULT_PER_PAGE, TaskService


def _identity(request: Request) -> User | None:
    """Identity attached by AuthMiddleware, if any."""
    return getattr(request.state, "user", None)


def _int_query(raw: str | None, default: int) -> int:
    """Lenient integer query value: missing gives the default, non-numeric gives 0."""
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return 0


def _task_body(task: Task) -> dict:
    return DataResponse(data=task.model_dump(mode="json")).model_dump(mode="json")


def create_todos_router(task_service: TaskService, policy: Policy | None = None) -> APIRouter:
    router = APIRouter(tags=["todos"])
    policy = policy or TaskPolicy()

    def load_authorized(request: Request, task_id: UUID, action: Action) -> tuple[User, Task]:
        # Unauthenticated before lookup, then 404 for unknown ids, then 403 for other owners
        identity = _identity(request)
        if identity is None:
            raise NotAuthenticatedError()
        task = task_service.require(task_id)
        authorize(policy, identity, action, task)
        return identity, task

    @router.get("/todos")
    async def list_todos(
        request: Request,
        per_page: str | None = Query(None),
        page: str | None = Query(None),
    ):
        """Newest first. Paging values are clamped, never rejected."""
        identity = _identity(request)
        authorize(policy, identity, Action.LIST)

        result = task_service.list_for_owner(
            identity.id,
            per_page=_int_query(per_page, DEFAULT_PER_PAGE),
            page=_int_query(page, 1),
        )
        return PaginatedResponse(
            data=[t.model_dump(mode="json") for t in result.items],
            meta=PageMeta(
                current_page=result.current_page,
                per_page=result.per_page,
                total=result.total,
                last_page=result.last_page,
            ),
        ).model_dump(mode="json")

    @router.post("/todos", status_code=201)
    async def create_todo(request: Request, body: TaskCreate):
        identity = _identity(request)
        authorize(policy, identity, Action.CREATE)

        task = task_service.create(identity.id, body)
        return _task_body(task)

    @router.get("/todos/{task_id}")
    async def show_todo(request: Request, task_id: UUID):
        _, task = load_authorized(request, task_id, Action.VIEW)
        return _task_body(task)

    @router.api_route("/todos/{task_id}", methods=["PUT", "PATCH"])
    async def update_todo(request: Request, task_id: UUID, body: TaskUpdate):
        _, task = load_authorized(request, task_id, Action.UPDATE)
        updated = task_service.update(task, body)
        return _task_body(updated)

    @router.delete("/todos/{task_id}", status_code=204)
    async def delete_todo(request: Request, task_id: UUID):
        _, task = load_authorized(request, task_id, Action.DELETE)
        task_service.delete(task.id)
        return Response(status_code=204)

    return router
