"""Task dependency (edge) repository."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.domain.dependency_graph import DependencyEdge
from taskflow.infrastructure.persistence.models.task_dependency import TaskDependency
from taskflow.infrastructure.persistence.repositories.base import BaseRepository


def _to_edge(d: TaskDependency) -> DependencyEdge:
    """Map TaskDependency ORM to the domain edge value object."""
    return DependencyEdge(
        task_item_id=d.task_item_id,
        dependent_task_item_id=d.dependent_task_item_id,
        id=d.id,
    )


class TaskDependencyRepository(BaseRepository[TaskDependency]):
    """Dependency-edge repository. Implements ITaskDependencyRepository."""

    resource_type = "task_dependency"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TaskDependency)

    async def _select_touching(self, task_ids: set[int]) -> list[TaskDependency]:
        if not task_ids:
            return []
        result = await self.db.execute(
            select(TaskDependency)
            .where(
                or_(
                    TaskDependency.task_item_id.in_(task_ids),
                    TaskDependency.dependent_task_item_id.in_(task_ids),
                )
            )
            .order_by(TaskDependency.id.asc())
        )
        return list(result.scalars().all())

    async def get_touching(self, task_ids: Iterable[int]) -> list[DependencyEdge]:
        return [_to_edge(d) for d in await self._select_touching(set(task_ids))]

    async def get_dependencies_of(self, task_id: int) -> list[DependencyEdge]:
        result = await self.db.execute(
            select(TaskDependency)
            .where(TaskDependency.task_item_id == task_id)
            .order_by(TaskDependency.id.asc())
        )
        return [_to_edge(d) for d in result.scalars().all()]

    async def get_dependents_of(self, task_id: int) -> list[DependencyEdge]:
        result = await self.db.execute(
            select(TaskDependency)
            .where(TaskDependency.dependent_task_item_id == task_id)
            .order_by(TaskDependency.id.asc())
        )
        return [_to_edge(d) for d in result.scalars().all()]

    async def exists(self, task_item_id: int, dependent_task_item_id: int) -> bool:
        result = await self.db.execute(
            select(TaskDependency.id).where(
                TaskDependency.task_item_id == task_item_id,
                TaskDependency.dependent_task_item_id == dependent_task_item_id,
            )
        )
        return result.first() is not None

    async def create(
        self, task_item_id: int, dependent_task_item_id: int
    ) -> DependencyEdge:
        edge = TaskDependency(
            task_item_id=task_item_id,
            dependent_task_item_id=dependent_task_item_id,
        )
        return _to_edge(await self._add(edge))

    async def delete_touching(self, task_ids: Iterable[int]) -> int:
        rows = await self._select_touching(set(task_ids))
        for row in rows:
            await self.db.delete(row)
        await self.db.flush()
        return len(rows)

    async def rewire(self, old_task_id: int, new_task_id: int) -> int:
        """Point every edge endpoint at old_task_id to new_task_id.

        An edge that would end up duplicating an existing pair, or joining
        new_task_id to itself, is dropped instead of rewritten.
        """
        rows = await self._select_touching({old_task_id})
        if not rows:
            return 0
        pairs = {
            (d.task_item_id, d.dependent_task_item_id)
            for d in await self._select_touching({new_task_id})
        }
        changed = 0
        for row in rows:
            src = new_task_id if row.task_item_id == old_task_id else row.task_item_id
            dst = (
                new_task_id
                if row.dependent_task_item_id == old_task_id
                else row.dependent_task_item_id
            )
            if src == dst or (src, dst) in pairs:
                await self.db.delete(row)
            else:
                row.task_item_id = src
                row.dependent_task_item_id = dst
                pairs.add((src, dst))
            changed += 1
        await self.db.flush()
        return changed
