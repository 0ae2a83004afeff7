"""Workflow membership: create/read/delete workflows and move tasks in and out of them.

Each public method is one unit of work. Every NotFound/Conflict condition is
raised before the unit of work commits, so a rejected operation leaves no
partial effect.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from taskflow.application.dtos.task import TaskResult
from taskflow.application.dtos.workflow import WorkflowResult
from taskflow.application.interfaces.repositories import IUnitOfWork, UnitOfWorkFactory
from taskflow.application.services.dependency_graph_service import (
    DependencyGraphService,
)
from taskflow.domain.dependency_graph import (
    DependencyEdge,
    dependents_of,
    has_other_dependencies,
)
from taskflow.domain.exceptions import (
    CyclicDependencyException,
    ResourceNotFoundException,
    TaskInAnotherWorkflowException,
    ValidationException,
    WorkflowMismatchException,
)
from taskflow.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class WorkflowMembershipService:
    """Workflow lifecycle and single-workflow task membership."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        graph: DependencyGraphService,
    ) -> None:
        self._uow_factory = uow_factory
        self._graph = graph

    async def _require_workflow(self, uow: IUnitOfWork, workflow_id: int) -> WorkflowResult:
        workflow = await uow.workflows.get_by_id(workflow_id)
        if workflow is None:
            raise ResourceNotFoundException("workflow", workflow_id)
        return workflow

    async def _require_task(self, uow: IUnitOfWork, task_id: int) -> TaskResult:
        task = await uow.tasks.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def _with_members(self, uow: IUnitOfWork, workflow: WorkflowResult) -> WorkflowResult:
        members = await uow.tasks.get_by_workflow(workflow.id)
        return replace(workflow, task_ids=tuple(t.id for t in members))

    async def create_workflow(self, name: str, description: str = "") -> WorkflowResult:
        """Create an empty workflow stamped with the current time."""
        if not name or not name.strip():
            raise ValidationException("Name is required", "name")
        async with self._uow_factory() as uow:
            workflow = await uow.workflows.create_workflow(
                name, description or "", now=utc_now()
            )
            await uow.commit()
        logger.info("Workflow created: id=%s name=%s", workflow.id, workflow.name)
        return workflow

    async def get_workflow(self, workflow_id: int) -> WorkflowResult:
        """Return workflow with its member task ids; raise ResourceNotFoundException if missing."""
        async with self._uow_factory() as uow:
            workflow = await self._require_workflow(uow, workflow_id)
            return await self._with_members(uow, workflow)

    async def list_workflows(self, skip: int = 0, limit: int = 100) -> list[WorkflowResult]:
        async with self._uow_factory() as uow:
            workflows = await uow.workflows.get_all(skip=skip, limit=limit)
            return [await self._with_members(uow, w) for w in workflows]

    async def _add_task(
        self,
        uow: IUnitOfWork,
        workflow_id: int,
        task_id: int,
        depends_on_id: int | None = None,
    ) -> None:
        """Make task_id a member of workflow_id, optionally wiring a dependency.

        With depends_on_id the stored edge is (depends_on_id -> task_id): the
        existing member is the depending side and the task being added is
        the one it depends on.
        """
        await self._require_workflow(uow, workflow_id)
        task = await self._require_task(uow, task_id)
        if task.workflow_id is not None and task.workflow_id != workflow_id:
            raise TaskInAnotherWorkflowException(task_id, workflow_id, task.workflow_id)
        if depends_on_id is not None:
            target = await self._require_task(uow, depends_on_id)
            if target.workflow_id != workflow_id:
                raise WorkflowMismatchException(depends_on_id, workflow_id)
            if await self._graph.has_cycle(uow, depends_on_id, task_id):
                logger.warning(
                    "Rejected adding task %s to workflow %s: cyclic dependency with task %s",
                    task_id,
                    workflow_id,
                    depends_on_id,
                )
                raise CyclicDependencyException(depends_on_id, task_id)
        if task.workflow_id is None:
            await uow.tasks.set_workflow([task_id], workflow_id)
            logger.info("Task %s added to workflow %s", task_id, workflow_id)
        if depends_on_id is not None:
            await self._graph.add_dependency(uow, depends_on_id, task_id)

    async def add_task_to_workflow(
        self,
        workflow_id: int,
        task_id: int,
        depends_on_id: int | None = None,
    ) -> TaskResult:
        """Add task to workflow (idempotent on membership) and return the task.

        Raises:
            ResourceNotFoundException: Workflow, task or depends_on task missing.
            TaskInAnotherWorkflowException: Task already belongs to another workflow.
            WorkflowMismatchException: depends_on task is not a member of this workflow.
            CyclicDependencyException: The requested edge would close a cycle.
        """
        async with self._uow_factory() as uow:
            await self._add_task(uow, workflow_id, task_id, depends_on_id)
            task = await self._require_task(uow, task_id)
            await uow.commit()
        return task

    async def replace_task_in_workflow(
        self, workflow_id: int, old_task_id: int, new_task_id: int
    ) -> TaskResult:
        """Swap old_task_id for new_task_id: new joins, edges move over, old is evicted.

        Returns the new task.
        """
        if old_task_id == new_task_id:
            raise ValidationException("Old and new task must differ", "new_task_id")
        async with self._uow_factory() as uow:
            await self._require_workflow(uow, workflow_id)
            old_task = await self._require_task(uow, old_task_id)
            new_task = await self._require_task(uow, new_task_id)
            if old_task.workflow_id != workflow_id:
                raise WorkflowMismatchException(old_task_id, workflow_id)
            if new_task.workflow_id is not None and new_task.workflow_id != workflow_id:
                raise TaskInAnotherWorkflowException(
                    new_task_id, workflow_id, new_task.workflow_id
                )
            if new_task.workflow_id is None:
                await self._add_task(uow, workflow_id, new_task_id)
            rewired = await self._graph.replace_task_in_edges(uow, old_task_id, new_task_id)
            await uow.tasks.set_workflow([old_task_id], None)
            result = await self._require_task(uow, new_task_id)
            await uow.commit()
        logger.info(
            "Task %s replaced by task %s in workflow %s (%d edges rewired)",
            old_task_id,
            new_task_id,
            workflow_id,
            rewired,
        )
        return result

    async def reassign_dependent_tasks(
        self,
        workflow_id: int,
        anchor_task_id: int,
        new_order: Sequence[int],
    ) -> list[DependencyEdge]:
        """Re-chain the workflow along new_order around anchor_task_id.

        Tasks in new_order that are not yet members are added first; the
        anchor's edges are dropped; new_order is chained so each task
        depends on the next; members missing from new_order are evicted.

        Raises:
            ValidationException: new_order is empty or repeats a task id.
            ResourceNotFoundException: Anchor is not a member of the workflow,
                or a task in new_order does not exist.
            TaskInAnotherWorkflowException: A task in new_order belongs to another workflow.
        """
        order = list(new_order)
        if not order:
            raise ValidationException("new_order must not be empty", "new_order")
        if len(set(order)) != len(order):
            raise ValidationException("new_order contains duplicate task ids", "new_order")
        async with self._uow_factory() as uow:
            anchor = await uow.tasks.get_by_id(anchor_task_id)
            if anchor is None or anchor.workflow_id != workflow_id:
                raise ResourceNotFoundException("task", anchor_task_id)
            for task_id in order:
                task = await self._require_task(uow, task_id)
                if task.workflow_id != workflow_id:
                    await self._add_task(uow, workflow_id, task_id)
            chain = await self._graph.reassign_dependency_chain(
                uow, workflow_id, anchor_task_id, order
            )
            await uow.commit()
        return chain

    async def delete_workflow(self, workflow_id: int) -> None:
        """Remove every member's edges, clear membership, then delete the workflow."""
        async with self._uow_factory() as uow:
            await self._require_workflow(uow, workflow_id)
            member_ids = [t.id for t in await uow.tasks.get_by_workflow(workflow_id)]
            for task_id in member_ids:
                await self._graph.cascade_remove_task_dependencies(uow, task_id)
            await uow.tasks.set_workflow(member_ids, None)
            await uow.workflows.delete(workflow_id)
            await uow.commit()
        logger.info("Workflow deleted: id=%s (released %d tasks)", workflow_id, len(member_ids))

    async def delete_task_from_workflow(self, workflow_id: int, task_id: int) -> list[int]:
        """Evict task_id and, one level deep, the members that depended only on it.

        Dependents outside workflow_id (left with stale edges by a chain
        rebuild) keep their membership.

        Returns ids of every evicted task, task_id first.

        Raises:
            ResourceNotFoundException: Task does not exist.
            WorkflowMismatchException: Task is not a member of workflow_id.
        """
        async with self._uow_factory() as uow:
            task = await self._require_task(uow, task_id)
            if task.workflow_id != workflow_id:
                raise WorkflowMismatchException(task_id, workflow_id)
            dependents = [
                t.id
                for t in await uow.tasks.get_many(
                    dependents_of(await uow.dependencies.get_dependents_of(task_id), task_id)
                )
                if t.workflow_id == workflow_id
            ]
            cascade: list[int] = []
            if dependents:
                dependent_edges = await uow.dependencies.get_touching(dependents)
                cascade = [
                    d
                    for d in dependents
                    if not has_other_dependencies(dependent_edges, d, excluding=task_id)
                ]
            await self._graph.cascade_remove_task_dependencies(uow, task_id)
            evicted = [task_id, *cascade]
            await uow.tasks.set_workflow(evicted, None)
            await uow.commit()
        logger.info(
            "Task %s removed from workflow %s; cascaded eviction of %s",
            task_id,
            workflow_id,
            cascade,
        )
        return evicted
