"""Shared test fixtures for the todo API test suite."""

from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from auth.config import AuthConfig
from auth.service import AuthService
from auth.tokens import TokenManager
from core.services.task_service import TaskService
from main import create_app
from fakes import FakeValkeyClient, InMemoryTaskRepository, InMemoryUserRepository


# =============================================================================
# TEST USER CONSTANTS
# =============================================================================

# Primary test user - use for single-user tests
TEST_USER_ID = UUID("00000000-0000-0000-0000-000000000001")
TEST_USER_EMAIL = "testuser@example.com"

# Secondary test user - use for isolation tests
TEST_USER_B_ID = UUID("00000000-0000-0000-0000-000000000002")
TEST_USER_B_EMAIL = "testuser-b@example.com"

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def test_user_id() -> UUID:
    """The primary test user's ID."""
    return TEST_USER_ID


@pytest.fixture
def test_user_b_id() -> UUID:
    """The secondary test user's ID (for isolation tests)."""
    return TEST_USER_B_ID


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def config() -> AuthConfig:
    """Auth config with cheap bcrypt so tests stay fast."""
    return AuthConfig(bcrypt_rounds=4)


@pytest.fixture
def valkey() -> FakeValkeyClient:
    return FakeValkeyClient()


@pytest.fixture
def token_manager(valkey, config) -> TokenManager:
    return TokenManager(valkey, config)


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def task_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture
def auth_service(config, user_repo, token_manager) -> AuthService:
    return AuthService(config=config, users=user_repo, tokens=token_manager)


@pytest.fixture
def task_service(task_repo) -> TaskService:
    return TaskService(task_repo)


# =============================================================================
# HTTP FIXTURES
# =============================================================================


@pytest.fixture
def app(auth_service, task_service):
    return create_app(auth_service, task_service)


@pytest.fixture
def client(app):
    """TestClient that turns unhandled errors into 500 responses."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user over HTTP and return the response JSON."""

    def _register(email: str = TEST_USER_EMAIL, name: str = "Test User", password: str = TEST_PASSWORD, **extra):
        response = client.post(
            "/auth/register",
            json={
                "name": name,
                "email": email,
                "password": password,
                "password_confirmation": password,
                **extra,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def auth_headers(register) -> dict[str, str]:
    """Headers for a freshly registered primary user."""
    return {"Authorization": f"Bearer {register()['token']}"}
