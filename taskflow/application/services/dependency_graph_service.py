"""Dependency graph operations: cycle check, edge insert, chain rebuild, cascade removal.

Every method runs inside a unit of work owned by the caller (workflow and task
services), so graph reads and the writes they justify commit together.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from taskflow.application.interfaces.repositories import IUnitOfWork
from taskflow.domain.dependency_graph import (
    DependencyEdge,
    is_direct_reversal,
    linear_chain,
)
from taskflow.domain.exceptions import (
    CyclicDependencyException,
    ResourceNotFoundException,
    WorkflowMismatchException,
)

logger = logging.getLogger(__name__)


class DependencyGraphService:
    """Reads and rewrites TaskDependency edges.

    Edge (task_item_id, dependent_task_item_id): task_item_id depends on
    dependent_task_item_id.
    """

    async def has_cycle(
        self, uow: IUnitOfWork, task_item_id: int, dependent_task_item_id: int
    ) -> bool:
        """Return True if inserting (task_item_id -> dependent_task_item_id) would close a cycle.

        One-hop check: only the immediate reverse edge is looked for.
        """
        edges = await uow.dependencies.get_touching({task_item_id, dependent_task_item_id})
        return is_direct_reversal(edges, task_item_id, dependent_task_item_id)

    async def add_dependency(
        self, uow: IUnitOfWork, task_item_id: int, dependent_task_item_id: int
    ) -> DependencyEdge:
        """Insert edge task_item_id -> dependent_task_item_id.

        Both tasks must exist and share a workflow; the edge must not close a
        cycle. Adding an edge that already exists returns it unchanged.

        Raises:
            ResourceNotFoundException: If either task does not exist.
            WorkflowMismatchException: If the tasks are not in the same workflow.
            CyclicDependencyException: If the reverse edge exists (or it is a self-edge).
        """
        tasks = {
            t.id: t
            for t in await uow.tasks.get_many([task_item_id, dependent_task_item_id])
        }
        for task_id in (task_item_id, dependent_task_item_id):
            if task_id not in tasks:
                raise ResourceNotFoundException("task", task_id)
        workflow_id = tasks[task_item_id].workflow_id
        if workflow_id is None or tasks[dependent_task_item_id].workflow_id != workflow_id:
            raise WorkflowMismatchException(dependent_task_item_id, workflow_id)
        if await self.has_cycle(uow, task_item_id, dependent_task_item_id):
            logger.warning(
                "Rejected cyclic dependency %s -> %s in workflow %s",
                task_item_id,
                dependent_task_item_id,
                workflow_id,
            )
            raise CyclicDependencyException(task_item_id, dependent_task_item_id)
        if await uow.dependencies.exists(task_item_id, dependent_task_item_id):
            return DependencyEdge(task_item_id, dependent_task_item_id)
        edge = await uow.dependencies.create(task_item_id, dependent_task_item_id)
        logger.info(
            "Dependency added: task %s depends on task %s (workflow %s)",
            task_item_id,
            dependent_task_item_id,
            workflow_id,
        )
        return edge

    async def reassign_dependency_chain(
        self,
        uow: IUnitOfWork,
        workflow_id: int,
        anchor_task_id: int,
        new_order: Sequence[int],
    ) -> list[DependencyEdge]:
        """Drop the anchor's edges, chain new_order linearly, evict tasks not in new_order.

        Callers have already made every task in new_order a workflow member.
        The chain is not cycle-checked; an edge that already exists is kept
        rather than inserted twice. Edges of evicted tasks other than the
        anchor are left in place.
        """
        removed = await uow.dependencies.delete_touching([anchor_task_id])
        chain: list[DependencyEdge] = []
        for current, following in linear_chain(new_order):
            if await uow.dependencies.exists(current, following):
                chain.append(DependencyEdge(current, following))
                continue
            chain.append(await uow.dependencies.create(current, following))
        keep = set(new_order)
        members = await uow.tasks.get_by_workflow(workflow_id)
        evicted = [t.id for t in members if t.id not in keep]
        await uow.tasks.set_workflow(evicted, None)
        logger.info(
            "Dependency chain rebuilt in workflow %s around task %s: "
            "%d edges removed, %d chained, evicted %s",
            workflow_id,
            anchor_task_id,
            removed,
            len(chain),
            evicted,
        )
        return chain

    async def replace_task_in_edges(
        self, uow: IUnitOfWork, old_task_id: int, new_task_id: int
    ) -> int:
        """Point every edge touching old_task_id at new_task_id. Returns edges rewritten."""
        return await uow.dependencies.rewire(old_task_id, new_task_id)

    async def cascade_remove_task_dependencies(self, uow: IUnitOfWork, task_id: int) -> int:
        """Delete every edge where task_id is either endpoint. Returns edges deleted."""
        removed = await uow.dependencies.delete_touching([task_id])
        if removed:
            logger.debug("Removed %d dependency edges of task %s", removed, task_id)
        return removed

    async def list_dependencies(self, uow: IUnitOfWork, task_id: int) -> list[DependencyEdge]:
        """Return edges touching task_id in either direction."""
        return await uow.dependencies.get_touching([task_id])
