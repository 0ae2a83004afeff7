"""Workflow API: thin routes delegating to WorkflowMembershipService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from taskflow.api.v1.dependencies import get_actor, get_workflow_service, require_admin
from taskflow.application.dtos.user import ActorContext
from taskflow.application.use_cases.workflows import WorkflowMembershipService
from taskflow.schemas.task import TaskDependencyResponse, TaskResponse
from taskflow.schemas.workflow import (
    DependencyOrderRequest,
    WorkflowCreateRequest,
    WorkflowResponse,
    WorkflowTaskAddRequest,
    WorkflowTaskRemovalResponse,
    WorkflowTaskReplaceRequest,
)

router = APIRouter()


@router.post("", response_model=WorkflowResponse, status_code=201)
async def create_workflow(
    body: WorkflowCreateRequest,
    service: Annotated[WorkflowMembershipService, Depends(get_workflow_service)],
    _: Annotated[ActorContext, Depends(require_admin("workflow", "create"))],
):
    """Create an empty workflow (admin)."""
    workflow = await service.create_workflow(body.name, body.description)
    return WorkflowResponse.model_validate(workflow)


@router.get("", response_model=list[WorkflowResponse])
async def list_workflows(
    service: Annotated[WorkflowMembershipService, Depends(get_workflow_service)],
    _: Annotated[ActorContext, Depends(get_actor)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    workflows = await service.list_workflows(skip=skip, limit=limit)
    return [WorkflowResponse.model_validate(w) for w in workflows]


@router.get("/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: int,
    service: Annotated[WorkflowMembershipService, Depends(get_workflow_service)],
    _: Annotated[ActorContext, Depends(get_actor)],
):
    return WorkflowResponse.model_validate(await service.get_workflow(workflow_id))


@router.delete("/{workflow_id}", status_code=204)
async def delete_workflow(
    workflow_id: int,
    service: Annotated[WorkflowMembershipService, Depends(get_workflow_service)],
    _: Annotated[ActorContext, Depends(require_admin("workflow", "delete"))],
) -> None:
    """Delete workflow; member tasks are released and lose their dependency edges."""
    await service.delete_workflow(workflow_id)


@router.post("/{workflow_id}/tasks", response_model=TaskResponse)
async def add_task_to_workflow(
    workflow_id: int,
    body: WorkflowTaskAddRequest,
    service: Annotated[WorkflowMembershipService, Depends(get_workflow_service)],
    _: Annotated[ActorContext, Depends(require_admin("workflow", "update"))],
):
    task = await service.add_task_to_workflow(
        workflow_id, body.task_id, depends_on_id=body.depends_on_task_id
    )
    return TaskResponse.model_validate(task)


@router.put("/{workflow_id}/tasks/{old_task_id}", response_model=TaskResponse)
async def replace_task_in_workflow(
    workflow_id: int,
    old_task_id: int,
    body: WorkflowTaskReplaceRequest,
    service: Annotated[WorkflowMembershipService, Depends(get_workflow_service)],
    _: Annotated[ActorContext, Depends(require_admin("workflow", "update"))],
):
    """Replace a member task; its dependency edges move to the new task."""
    task = await service.replace_task_in_workflow(workflow_id, old_task_id, body.new_task_id)
    return TaskResponse.model_validate(task)


@router.put(
    "/{workflow_id}/tasks/{task_id}/dependencies",
    response_model=list[TaskDependencyResponse],
)
async def reorder_dependencies(
    workflow_id: int,
    task_id: int,
    body: DependencyOrderRequest,
    service: Annotated[WorkflowMembershipService, Depends(get_workflow_service)],
    _: Annotated[ActorContext, Depends(require_admin("workflow", "update"))],
):
    """Re-chain the workflow along new_order around task_id; returns the chain edges."""
    chain = await service.reassign_dependent_tasks(workflow_id, task_id, body.new_order)
    return [TaskDependencyResponse.model_validate(e) for e in chain]


@router.delete("/{workflow_id}/tasks/{task_id}", response_model=WorkflowTaskRemovalResponse)
async def delete_task_from_workflow(
    workflow_id: int,
    task_id: int,
    service: Annotated[WorkflowMembershipService, Depends(get_workflow_service)],
    _: Annotated[ActorContext, Depends(require_admin("workflow", "update"))],
):
    evicted = await service.delete_task_from_workflow(workflow_id, task_id)
    return WorkflowTaskRemovalResponse(workflow_id=workflow_id, evicted_task_ids=evicted)
