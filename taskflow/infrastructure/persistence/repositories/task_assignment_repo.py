"""Task assignment history repository (append-only)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.application.dtos.task_assignment import TaskAssignmentResult
from taskflow.infrastructure.persistence.models.task_assignment import TaskAssignment
from taskflow.infrastructure.persistence.repositories.base import BaseRepository
from taskflow.shared.utils.datetime import ensure_utc


def _to_result(a: TaskAssignment) -> TaskAssignmentResult:
    return TaskAssignmentResult(
        id=a.id,
        task_item_id=a.task_item_id,
        user_id=a.user_id,
        assigned_at=ensure_utc(a.assigned_at),
    )


class TaskAssignmentRepository(BaseRepository[TaskAssignment]):
    """Assignment history repository. Implements ITaskAssignmentRepository."""

    resource_type = "task_assignment"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TaskAssignment)

    async def create(
        self, task_item_id: int, user_id: int, assigned_at: datetime
    ) -> TaskAssignmentResult:
        row = TaskAssignment(
            task_item_id=task_item_id,
            user_id=user_id,
            assigned_at=assigned_at,
        )
        return _to_result(await self._add(row))

    async def get_by_task(self, task_item_id: int) -> list[TaskAssignmentResult]:
        result = await self.db.execute(
            select(TaskAssignment)
            .where(TaskAssignment.task_item_id == task_item_id)
            .order_by(TaskAssignment.assigned_at.asc(), TaskAssignment.id.asc())
        )
        return [_to_result(a) for a in result.scalars().all()]

    async def delete_by_task(self, task_item_id: int) -> int:
        result = await self.db.execute(
            select(TaskAssignment).where(TaskAssignment.task_item_id == task_item_id)
        )
        rows = list(result.scalars().all())
        for row in rows:
            await self.db.delete(row)
        await self.db.flush()
        return len(rows)
