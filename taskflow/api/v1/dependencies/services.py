"""Application service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from taskflow.api.v1.dependencies.db import get_uow_factory
from taskflow.application.interfaces.repositories import UnitOfWorkFactory
from taskflow.application.services import AssignmentHistoryService, DependencyGraphService
from taskflow.application.use_cases import TaskLifecycleService, WorkflowMembershipService


def get_graph_service() -> DependencyGraphService:
    return DependencyGraphService()


def get_history_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
) -> AssignmentHistoryService:
    return AssignmentHistoryService(uow_factory)


def get_workflow_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
    graph: Annotated[DependencyGraphService, Depends(get_graph_service)],
) -> WorkflowMembershipService:
    """Workflow membership service (composition root)."""
    return WorkflowMembershipService(uow_factory, graph)


def get_task_service(
    uow_factory: Annotated[UnitOfWorkFactory, Depends(get_uow_factory)],
    graph: Annotated[DependencyGraphService, Depends(get_graph_service)],
    history: Annotated[AssignmentHistoryService, Depends(get_history_service)],
) -> TaskLifecycleService:
    """Task lifecycle service (composition root)."""
    return TaskLifecycleService(uow_factory, graph, history)
