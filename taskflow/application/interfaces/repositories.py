"""Repository and unit-of-work interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain value objects only; no
infrastructure imports. Together they form the Entity Store contract: point
lookups, filtered scans, writes, and one atomic commit per unit of work.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from types import TracebackType
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from taskflow.application.dtos.task import TaskResult
    from taskflow.application.dtos.task_assignment import TaskAssignmentResult
    from taskflow.application.dtos.user import UserResult
    from taskflow.application.dtos.workflow import WorkflowResult
    from taskflow.domain.dependency_graph import DependencyEdge
    from taskflow.domain.enums import UserRole


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for task repository (DIP)."""

    async def get_by_id(self, task_id: int) -> TaskResult | None:
        """Return task by ID."""

    async def get_many(self, task_ids: Iterable[int]) -> list[TaskResult]:
        """Return the tasks that exist among task_ids (ascending id)."""

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[TaskResult]:
        """Return tasks with pagination (ascending id)."""

    async def get_by_workflow(self, workflow_id: int) -> list[TaskResult]:
        """Return member tasks of a workflow (ascending id)."""

    async def create_task(
        self,
        title: str,
        description: str,
        status: str,
        assignee_id: int,
        *,
        workflow_id: int | None = None,
        due_date: datetime | None = None,
        now: datetime,
    ) -> TaskResult:
        """Create a task stamped with created_at = updated_at = now."""

    async def update_fields(self, task_id: int, fields: dict[str, Any]) -> TaskResult:
        """Apply column values to an existing task and return it."""

    async def set_workflow(self, task_ids: Iterable[int], workflow_id: int | None) -> int:
        """Set (or clear with None) workflow membership for tasks. Returns rows changed."""

    async def delete(self, task_id: int) -> None:
        """Delete the task row."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user repository (DIP). Lookup only for the core."""

    async def get_by_id(self, user_id: int) -> UserResult | None:
        """Return user by ID."""

    async def get_by_email(self, email: str) -> UserResult | None:
        """Return user by (unique) email."""

    async def create_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        role: UserRole,
        *,
        now: datetime,
    ) -> UserResult:
        """Create a user (seeding and tests; hashing happens elsewhere)."""


# Workflow repository interface
class IWorkflowRepository(Protocol):
    """Protocol for workflow repository (DIP)."""

    async def get_by_id(self, workflow_id: int) -> WorkflowResult | None:
        """Return workflow by ID (task_ids not populated)."""

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[WorkflowResult]:
        """Return workflows with pagination (task_ids not populated)."""

    async def create_workflow(
        self, name: str, description: str, *, now: datetime
    ) -> WorkflowResult:
        """Create a workflow stamped with created_at = updated_at = now."""

    async def delete(self, workflow_id: int) -> None:
        """Delete the workflow row."""


# Task dependency repository interface
class ITaskDependencyRepository(Protocol):
    """Protocol for dependency-edge repository (DIP)."""

    async def get_touching(self, task_ids: Iterable[int]) -> list[DependencyEdge]:
        """Return edges where any of task_ids is either endpoint (ascending id)."""

    async def get_dependencies_of(self, task_id: int) -> list[DependencyEdge]:
        """Return edges where task_id is the depending side (task_item_id)."""

    async def get_dependents_of(self, task_id: int) -> list[DependencyEdge]:
        """Return edges where task_id is depended on (dependent_task_item_id)."""

    async def exists(self, task_item_id: int, dependent_task_item_id: int) -> bool:
        """Return whether the exact directed edge exists."""

    async def create(
        self, task_item_id: int, dependent_task_item_id: int
    ) -> DependencyEdge:
        """Insert one edge."""

    async def delete_touching(self, task_ids: Iterable[int]) -> int:
        """Delete edges touching any of task_ids. Returns rows deleted."""

    async def rewire(self, old_task_id: int, new_task_id: int) -> int:
        """Replace old_task_id by new_task_id on either endpoint. Returns rows changed."""


# Task assignment repository interface
class ITaskAssignmentRepository(Protocol):
    """Protocol for append-only assignment history (DIP)."""

    async def create(
        self, task_item_id: int, user_id: int, assigned_at: datetime
    ) -> TaskAssignmentResult:
        """Append one assignment row."""

    async def get_by_task(self, task_item_id: int) -> list[TaskAssignmentResult]:
        """Return history for a task (oldest first)."""

    async def delete_by_task(self, task_item_id: int) -> int:
        """Delete history rows of a task (only when the task itself is deleted)."""


class IUnitOfWork(Protocol):
    """One logical transaction against the store.

    Use as `async with uow_factory() as uow:`; call `await uow.commit()` once
    all writes are issued. Leaving the block without commit, or with an
    exception, rolls every write back.
    """

    tasks: ITaskRepository
    users: IUserRepository
    workflows: IWorkflowRepository
    dependencies: ITaskDependencyRepository
    assignments: ITaskAssignmentRepository

    async def __aenter__(self) -> IUnitOfWork: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    async def commit(self) -> None:
        """Commit all writes; raises StoreConflictException on concurrent modification."""


# Zero-argument callable returning a fresh, not yet entered unit of work.
UnitOfWorkFactory = Callable[[], IUnitOfWork]
