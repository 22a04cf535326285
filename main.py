"""Application entry point.

`create_app` assembles the FastAPI app from already-built services, which
is what the tests use. `build_app` wires real infrastructure from Vault:

    uvicorn main:build_app --factory
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from api.todos import create_todos_router
from auth.api import create_auth_router
from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.security_middleware import AuthMiddleware
from auth.service import AuthService
from auth.tokens import TokenManager
from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from clients.vault_client import get_database_url, get_valkey_url
from core.database import TaskDatabase
from core.services.task_service import TaskService
from utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def create_app(auth_service: AuthService, task_service: TaskService, lifespan=None) -> FastAPI:
    """FastAPI app with auth middleware, error handlers, and auth/todo routes."""
    app = FastAPI(title="Todo API", lifespan=lifespan)

    # Last added runs first: request id wraps authentication
    app.add_middleware(AuthMiddleware, auth_service=auth_service)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_auth_router(auth_service))
    app.include_router(create_todos_router(task_service))

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def build_app(config: AuthConfig | None = None) -> FastAPI:
    """Connect to Postgres and Valkey using Vault secrets and build the app."""
    load_dotenv()
    setup_logging()

    config = config or AuthConfig()
    postgres = PostgresClient(get_database_url())
    valkey = ValkeyClient(get_valkey_url())

    auth_service = AuthService(
        config=config,
        users=AuthDatabase(postgres),
        tokens=TokenManager(valkey, config),
    )
    task_service = TaskService(TaskDatabase(postgres))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        postgres.close()
        valkey.close()

    app = create_app(auth_service, task_service, lifespan=lifespan)

    logger.info("Todo API ready")
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:build_app", factory=True, host="0.0.0.0", port=8000)
