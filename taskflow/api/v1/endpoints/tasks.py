"""Task API: thin routes delegating to TaskLifecycleService."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from taskflow.api.v1.dependencies import get_actor, get_task_service, require_admin
from taskflow.application.dtos.task import TaskCreate, TaskPatch
from taskflow.application.dtos.user import ActorContext
from taskflow.application.use_cases.tasks import TaskLifecycleService
from taskflow.schemas.task import (
    TaskAssignmentResponse,
    TaskAssignRequest,
    TaskCreateRequest,
    TaskDependencyResponse,
    TaskResponse,
    TaskUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreateRequest,
    service: Annotated[TaskLifecycleService, Depends(get_task_service)],
    _: Annotated[ActorContext, Depends(get_actor)],
):
    """Create a task; the assignee gets an initial assignment history row."""
    task = await service.create_task(TaskCreate(**body.model_dump()))
    return TaskResponse.model_validate(task)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    service: Annotated[TaskLifecycleService, Depends(get_task_service)],
    _: Annotated[ActorContext, Depends(get_actor)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    tasks = await service.list_tasks(skip=skip, limit=limit)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    service: Annotated[TaskLifecycleService, Depends(get_task_service)],
    _: Annotated[ActorContext, Depends(get_actor)],
):
    return TaskResponse.model_validate(await service.get_task(task_id))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    body: TaskUpdateRequest,
    service: Annotated[TaskLifecycleService, Depends(get_task_service)],
    actor: Annotated[ActorContext, Depends(get_actor)],
):
    """Partial update. Workflow moves are admin only; reassignment needs admin or current assignee."""
    task = await service.update_task(
        task_id, TaskPatch(**body.model_dump(exclude_unset=True)), actor
    )
    if task is None:
        raise HTTPException(status_code=403, detail="Not permitted")
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: int,
    service: Annotated[TaskLifecycleService, Depends(get_task_service)],
    _: Annotated[ActorContext, Depends(require_admin("task", "delete"))],
) -> None:
    await service.delete_task(task_id)


@router.get("/{task_id}/assignments", response_model=list[TaskAssignmentResponse])
async def get_task_assignments(
    task_id: int,
    service: Annotated[TaskLifecycleService, Depends(get_task_service)],
    _: Annotated[ActorContext, Depends(get_actor)],
):
    """Assignment history, oldest first."""
    history = await service.get_task_assignments(task_id)
    return [TaskAssignmentResponse.model_validate(a) for a in history]


@router.post("/{task_id}/assign", response_model=TaskAssignmentResponse, status_code=201)
async def assign_task(
    task_id: int,
    body: TaskAssignRequest,
    service: Annotated[TaskLifecycleService, Depends(get_task_service)],
    _: Annotated[ActorContext, Depends(require_admin("task", "assign"))],
):
    assignment = await service.assign_or_reassign_user(task_id, body.user_id)
    return TaskAssignmentResponse.model_validate(assignment)


@router.get("/{task_id}/dependencies", response_model=list[TaskDependencyResponse])
async def get_task_dependencies(
    task_id: int,
    service: Annotated[TaskLifecycleService, Depends(get_task_service)],
    _: Annotated[ActorContext, Depends(get_actor)],
):
    edges = await service.get_task_dependencies(task_id)
    return [TaskDependencyResponse.model_validate(e) for e in edges]
