"""Task lifecycle: create, update (authorization-gated), status gating, delete, assignment."""

from __future__ import annotations

import logging
from typing import Any

from taskflow.application.dtos.task import TaskCreate, TaskPatch, TaskResult
from taskflow.application.dtos.task_assignment import TaskAssignmentResult
from taskflow.application.dtos.user import ActorContext
from taskflow.application.interfaces.repositories import IUnitOfWork, UnitOfWorkFactory
from taskflow.application.services.assignment_history_service import (
    AssignmentHistoryService,
)
from taskflow.application.services.dependency_graph_service import (
    DependencyGraphService,
)
from taskflow.domain.dependency_graph import DependencyEdge, dependencies_of
from taskflow.domain.exceptions import (
    DependenciesIncompleteException,
    ResourceNotFoundException,
    TaskHasDependenciesException,
    ValidationException,
)
from taskflow.domain.policies import (
    can_change_assignee,
    can_change_workflow,
    is_completed,
)
from taskflow.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

_REQUIRED_TEXT_FIELDS = ("title", "description", "status")


def _require_text(obj: Any, *, allow_none: bool) -> None:
    """Raise ValidationException for blank title/description/status."""
    for name in _REQUIRED_TEXT_FIELDS:
        value = getattr(obj, name)
        if value is None and allow_none:
            continue
        if value is None or not value.strip():
            raise ValidationException(f"{name.capitalize()} is required", name)


class TaskLifecycleService:
    """Task CRUD with dependency-gated status changes and assignment history."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        graph: DependencyGraphService,
        history: AssignmentHistoryService,
    ) -> None:
        self._uow_factory = uow_factory
        self._graph = graph
        self._history = history

    async def _require_task(self, uow: IUnitOfWork, task_id: int) -> TaskResult:
        task = await uow.tasks.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def _require_user(self, uow: IUnitOfWork, user_id: int) -> None:
        if await uow.users.get_by_id(user_id) is None:
            raise ResourceNotFoundException("user", user_id)

    async def _pending_dependencies(self, uow: IUnitOfWork, task_id: int) -> list[int]:
        """Return ids of tasks task_id depends on whose status is not Completed."""
        edges = await uow.dependencies.get_dependencies_of(task_id)
        required = dependencies_of(edges, task_id)
        if not required:
            return []
        return [t.id for t in await uow.tasks.get_many(required) if not is_completed(t.status)]

    async def create_task(self, data: TaskCreate) -> TaskResult:
        """Create a task and its initial assignment row.

        Raises:
            ValidationException: Title, description or status is blank.
            ResourceNotFoundException: Assignee or workflow does not exist.
        """
        _require_text(data, allow_none=False)
        async with self._uow_factory() as uow:
            await self._require_user(uow, data.assignee_id)
            workflow_id = data.workflow_id
            if workflow_id is not None and await uow.workflows.get_by_id(workflow_id) is None:
                raise ResourceNotFoundException("workflow", data.workflow_id)
            now = utc_now()
            task = await uow.tasks.create_task(
                data.title,
                data.description,
                data.status,
                data.assignee_id,
                workflow_id=data.workflow_id,
                due_date=data.due_date,
                now=now,
            )
            await self._history.record_assignment(
                uow, task.id, task.assignee_id, assigned_at=now
            )
            await uow.commit()
        logger.info("Task created: id=%s assignee=%s", task.id, task.assignee_id)
        return task

    async def get_task(self, task_id: int) -> TaskResult:
        async with self._uow_factory() as uow:
            return await self._require_task(uow, task_id)

    async def list_tasks(self, skip: int = 0, limit: int = 100) -> list[TaskResult]:
        async with self._uow_factory() as uow:
            return await uow.tasks.get_all(skip=skip, limit=limit)

    async def can_transition_status(self, task_id: int) -> bool:
        """Return whether every task this task depends on is Completed."""
        async with self._uow_factory() as uow:
            await self._require_task(uow, task_id)
            return not await self._pending_dependencies(uow, task_id)

    async def update_task(
        self, task_id: int, patch: TaskPatch, actor: ActorContext
    ) -> TaskResult | None:
        """Apply a partial update on behalf of actor.

        Status changes require every dependency to be Completed (any target
        value is accepted). Moving the task to another workflow is admin only
        and drops the task's dependency edges. Changing the assignee is
        allowed to admins and the current assignee. A disallowed workflow or
        assignee change returns None and writes nothing.

        Raises:
            ResourceNotFoundException: Task, target workflow or new assignee missing.
            DependenciesIncompleteException: Status change while a dependency is not Completed.
            ValidationException: A provided title/description/status is blank.
        """
        _require_text(patch, allow_none=True)
        async with self._uow_factory() as uow:
            current = await self._require_task(uow, task_id)
            fields: dict[str, Any] = {}

            if patch.status is not None and patch.status != current.status:
                pending = await self._pending_dependencies(uow, task_id)
                if pending:
                    logger.warning(
                        "Status change of task %s rejected: dependencies %s not completed",
                        task_id,
                        pending,
                    )
                    raise DependenciesIncompleteException(task_id, pending)
                fields["status"] = patch.status

            if patch.workflow_id is not None and patch.workflow_id != current.workflow_id:
                if not can_change_workflow(actor.is_admin):
                    logger.info(
                        "User %s not permitted to move task %s to workflow %s",
                        actor.actor_id,
                        task_id,
                        patch.workflow_id,
                    )
                    return None
                if await uow.workflows.get_by_id(patch.workflow_id) is None:
                    raise ResourceNotFoundException("workflow", patch.workflow_id)
                fields["workflow_id"] = patch.workflow_id

            if patch.assignee_id is not None and patch.assignee_id != current.assignee_id:
                if not can_change_assignee(actor.actor_id, actor.is_admin, current.assignee_id):
                    logger.info(
                        "User %s not permitted to reassign task %s", actor.actor_id, task_id
                    )
                    return None
                await self._require_user(uow, patch.assignee_id)
                fields["assignee_id"] = patch.assignee_id

            for name in ("title", "description", "due_date"):
                value = getattr(patch, name)
                if value is not None and value != getattr(current, name):
                    fields[name] = value

            if not fields:
                return current
            now = utc_now()
            fields["updated_at"] = now
            updated = await uow.tasks.update_fields(task_id, fields)
            if "workflow_id" in fields:
                # Edges never span workflows.
                await self._graph.cascade_remove_task_dependencies(uow, task_id)
            if "assignee_id" in fields:
                await self._history.record_assignment(
                    uow, task_id, patch.assignee_id, assigned_at=now
                )
            await uow.commit()
        logger.info("Task %s updated: %s", task_id, sorted(k for k in fields if k != "updated_at"))
        return updated

    async def delete_task(self, task_id: int) -> None:
        """Delete a task with its assignment history.

        Raises:
            ResourceNotFoundException: Task does not exist.
            TaskHasDependenciesException: Task is a workflow member with dependency edges.
        """
        async with self._uow_factory() as uow:
            task = await self._require_task(uow, task_id)
            edges = await self._graph.list_dependencies(uow, task_id)
            if task.workflow_id is not None and edges:
                logger.warning(
                    "Delete of task %s rejected: %d dependency edges in workflow %s",
                    task_id,
                    len(edges),
                    task.workflow_id,
                )
                raise TaskHasDependenciesException(task_id, task.workflow_id)
            if task.workflow_id is not None:
                await uow.tasks.set_workflow([task_id], None)
            await uow.assignments.delete_by_task(task_id)
            if edges:
                await self._graph.cascade_remove_task_dependencies(uow, task_id)
            await uow.tasks.delete(task_id)
            await uow.commit()
        logger.info("Task deleted: id=%s", task_id)

    async def assign_or_reassign_user(self, task_id: int, user_id: int) -> TaskAssignmentResult:
        """Set the assignee and always append a history row (even for the same user)."""
        async with self._uow_factory() as uow:
            await self._require_task(uow, task_id)
            await self._require_user(uow, user_id)
            now = utc_now()
            await uow.tasks.update_fields(task_id, {"assignee_id": user_id, "updated_at": now})
            assignment = await self._history.record_assignment(
                uow, task_id, user_id, assigned_at=now
            )
            await uow.commit()
        logger.info("Task %s assigned to user %s", task_id, user_id)
        return assignment

    async def get_task_assignments(self, task_id: int) -> list[TaskAssignmentResult]:
        return await self._history.history(task_id)

    async def get_task_dependencies(self, task_id: int) -> list[DependencyEdge]:
        """Return dependency edges touching task_id (both directions)."""
        async with self._uow_factory() as uow:
            await self._require_task(uow, task_id)
            return await self._graph.list_dependencies(uow, task_id)
