"""Workflow repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.application.dtos.workflow import WorkflowResult
from taskflow.infrastructure.persistence.models.workflow import Workflow
from taskflow.infrastructure.persistence.repositories.base import BaseRepository
from taskflow.shared.utils.datetime import ensure_utc


def _to_result(w: Workflow) -> WorkflowResult:
    """Map Workflow ORM to WorkflowResult (members are attached by the service)."""
    return WorkflowResult(
        id=w.id,
        name=w.name,
        description=w.description,
        created_at=ensure_utc(w.created_at),
        updated_at=ensure_utc(w.updated_at),
    )


class WorkflowRepository(BaseRepository[Workflow]):
    """Workflow repository. Implements IWorkflowRepository."""

    resource_type = "workflow"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Workflow)

    async def get_by_id(self, workflow_id: int) -> WorkflowResult | None:
        workflow = await self._get_model(workflow_id)
        return _to_result(workflow) if workflow else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[WorkflowResult]:
        result = await self.db.execute(
            select(Workflow).order_by(Workflow.id.asc()).offset(skip).limit(limit)
        )
        return [_to_result(w) for w in result.scalars().all()]

    async def create_workflow(
        self, name: str, description: str, *, now: datetime
    ) -> WorkflowResult:
        """Create workflow; return created entity."""
        workflow = Workflow(
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )
        return _to_result(await self._add(workflow))

    async def delete(self, workflow_id: int) -> None:
        workflow = await self._require_model(workflow_id)
        await self._remove(workflow)
