"""Task repository."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.application.dtos.task import TaskResult
from taskflow.infrastructure.persistence.models.task import Task
from taskflow.infrastructure.persistence.repositories.base import BaseRepository
from taskflow.shared.utils.datetime import ensure_utc

_UPDATABLE_FIELDS = frozenset(
    {"title", "description", "status", "due_date", "workflow_id", "assignee_id", "updated_at"}
)


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        title=t.title,
        description=t.description,
        status=t.status,
        assignee_id=t.assignee_id,
        workflow_id=t.workflow_id,
        due_date=ensure_utc(t.due_date),
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    resource_type = "task"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def get_by_id(self, task_id: int) -> TaskResult | None:
        task = await self._get_model(task_id)
        return _to_result(task) if task else None

    async def get_many(self, task_ids: Iterable[int]) -> list[TaskResult]:
        ids = set(task_ids)
        if not ids:
            return []
        result = await self.db.execute(
            select(Task).where(Task.id.in_(ids)).order_by(Task.id.asc())
        )
        return [_to_result(t) for t in result.scalars().all()]

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[TaskResult]:
        result = await self.db.execute(
            select(Task).order_by(Task.id.asc()).offset(skip).limit(limit)
        )
        return [_to_result(t) for t in result.scalars().all()]

    async def get_by_workflow(self, workflow_id: int) -> list[TaskResult]:
        result = await self.db.execute(
            select(Task).where(Task.workflow_id == workflow_id).order_by(Task.id.asc())
        )
        return [_to_result(t) for t in result.scalars().all()]

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
        """Create a task and return the result DTO."""
        task = Task(
            title=title,
            description=description,
            status=status,
            assignee_id=assignee_id,
            workflow_id=workflow_id,
            due_date=due_date,
            created_at=now,
            updated_at=now,
        )
        return _to_result(await self._add(task))

    async def update_fields(self, task_id: int, fields: dict[str, Any]) -> TaskResult:
        """Apply column values to an existing task. Unknown columns are a programming error."""
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update task columns: {sorted(unknown)}")
        task = await self._require_model(task_id)
        return _to_result(await self._save(task, fields))

    async def set_workflow(self, task_ids: Iterable[int], workflow_id: int | None) -> int:
        """Set or clear workflow membership. Returns number of rows whose value changed."""
        ids = set(task_ids)
        if not ids:
            return 0
        result = await self.db.execute(select(Task).where(Task.id.in_(ids)))
        changed = 0
        for task in result.scalars().all():
            if task.workflow_id != workflow_id:
                task.workflow_id = workflow_id
                changed += 1
        await self.db.flush()
        return changed

    async def delete(self, task_id: int) -> None:
        task = await self._require_model(task_id)
        await self._remove(task)
