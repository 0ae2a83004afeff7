"""Assignment history: append-only log of task -> user assignment events."""

from __future__ import annotations

from datetime import datetime

from taskflow.application.dtos.task_assignment import TaskAssignmentResult
from taskflow.application.interfaces.repositories import IUnitOfWork, UnitOfWorkFactory
from taskflow.domain.exceptions import ResourceNotFoundException
from taskflow.shared.utils.datetime import utc_now


class AssignmentHistoryService:
    """Appends assignment rows and reads a task's history.

    The current assignee is Task.assignee_id; this log is never used to
    derive it and rows are never updated.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def record_assignment(
        self,
        uow: IUnitOfWork,
        task_id: int,
        user_id: int,
        *,
        assigned_at: datetime | None = None,
    ) -> TaskAssignmentResult:
        """Append one history row inside the caller's unit of work."""
        return await uow.assignments.create(task_id, user_id, assigned_at or utc_now())

    async def history(self, task_id: int) -> list[TaskAssignmentResult]:
        """Return the task's assignment history, oldest first.

        Raises:
            ResourceNotFoundException: If the task does not exist.
        """
        async with self._uow_factory() as uow:
            if await uow.tasks.get_by_id(task_id) is None:
                raise ResourceNotFoundException("task", task_id)
            return await uow.assignments.get_by_task(task_id)
