"""Pytest configuration and fixtures for taskflow.

Every test that touches storage gets its own in-memory SQLite database
(sqlite+aiosqlite, StaticPool) with the full schema, so services run against
a real transactional store. HTTP tests use httpx AsyncClient over ASGI with
the unit-of-work dependency pointed at that database.
"""

import os
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta

# Settings are validated on first get_settings(); set env before app imports.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["ALGORITHM"] = "HS256"

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from taskflow.api.v1.dependencies import get_uow_factory
from taskflow.application.dtos.task import TaskCreate, TaskResult
from taskflow.application.dtos.user import UserResult
from taskflow.application.interfaces.repositories import UnitOfWorkFactory
from taskflow.application.services import AssignmentHistoryService, DependencyGraphService
from taskflow.application.use_cases import TaskLifecycleService, WorkflowMembershipService
from taskflow.core.config import get_settings
from taskflow.domain.enums import TaskStatus, UserRole
from taskflow.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
    init_models,
)
from taskflow.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork
from taskflow.main import create_app
from taskflow.shared.utils.datetime import utc_now

get_settings.cache_clear()

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Fresh in-memory database with all tables; disposed after the test."""
    db_engine = build_engine(TEST_DATABASE_URL)
    await init_models(db_engine)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def uow_factory(engine) -> UnitOfWorkFactory:
    """Factory of units of work bound to the per-test database."""
    session_factory = build_session_factory(engine)
    return lambda: SqlAlchemyUnitOfWork(session_factory)


@pytest.fixture
def graph() -> DependencyGraphService:
    return DependencyGraphService()


@pytest.fixture
def history(uow_factory) -> AssignmentHistoryService:
    return AssignmentHistoryService(uow_factory)


@pytest.fixture
def workflow_service(uow_factory, graph) -> WorkflowMembershipService:
    return WorkflowMembershipService(uow_factory, graph)


@pytest.fixture
def task_service(uow_factory, graph, history) -> TaskLifecycleService:
    return TaskLifecycleService(uow_factory, graph, history)


async def _create_user(
    uow_factory: UnitOfWorkFactory, username: str, role: UserRole
) -> UserResult:
    async with uow_factory() as uow:
        user = await uow.users.create_user(
            username,
            f"{username}@example.com",
            "not-a-real-hash",
            role,
            now=utc_now(),
        )
        await uow.commit()
    return user


@pytest.fixture
async def admin(uow_factory) -> UserResult:
    """User with the Admin role."""
    return await _create_user(uow_factory, "admin", UserRole.ADMIN)


@pytest.fixture
async def alice(uow_factory) -> UserResult:
    """Regular user; default assignee of tasks made by make_task."""
    return await _create_user(uow_factory, "alice", UserRole.USER)


@pytest.fixture
async def bob(uow_factory) -> UserResult:
    """Second regular user."""
    return await _create_user(uow_factory, "bob", UserRole.USER)


@pytest.fixture
def make_task(
    task_service, alice
) -> Callable[..., Awaitable[TaskResult]]:
    """Create a task through the lifecycle service (assignee alice unless given)."""

    async def _make(
        title: str = "Task",
        *,
        status: str = TaskStatus.PENDING.value,
        assignee_id: int | None = None,
        workflow_id: int | None = None,
    ) -> TaskResult:
        return await task_service.create_task(
            TaskCreate(
                title=title,
                description=f"{title} description",
                status=status,
                assignee_id=assignee_id or alice.id,
                workflow_id=workflow_id,
            )
        )

    return _make


@pytest.fixture
async def client(uow_factory) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), wired to the per-test database."""
    app = create_app()
    app.dependency_overrides[get_uow_factory] = lambda: uow_factory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def _sign(sub: str, expires_in: timedelta) -> str:
    """Sign a bearer token the way the external identity service would."""
    settings = get_settings()
    return jwt.encode(
        {"sub": sub, "exp": datetime.now(UTC) + expires_in},
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )


@pytest.fixture
def token_for() -> Callable[..., str]:
    """Return a signer: token_for(user_id, expires_in=timedelta(minutes=15))."""

    def _token(user_id: int, expires_in: timedelta = timedelta(minutes=15)) -> str:
        return _sign(str(user_id), expires_in)

    return _token


@pytest.fixture
def admin_headers(admin, token_for) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(admin.id)}"}


@pytest.fixture
def alice_headers(alice, token_for) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(alice.id)}"}


@pytest.fixture
def bob_headers(bob, token_for) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(bob.id)}"}


@pytest.fixture
def edge_pairs(uow_factory) -> Callable[..., Awaitable[set[tuple[int, int]]]]:
    """Return (task_item_id, dependent_task_item_id) pairs touching any given task id."""

    async def _pairs(*task_ids: int) -> set[tuple[int, int]]:
        async with uow_factory() as uow:
            edges = await uow.dependencies.get_touching(task_ids)
        return {(e.task_item_id, e.dependent_task_item_id) for e in edges}

    return _pairs


@pytest.fixture
def member_ids(uow_factory) -> Callable[[int], Awaitable[set[int]]]:
    """Return ids of the tasks currently in a workflow."""

    async def _members(workflow_id: int) -> set[int]:
        async with uow_factory() as uow:
            return {t.id for t in await uow.tasks.get_by_workflow(workflow_id)}

    return _members
