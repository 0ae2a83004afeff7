"""Workflow API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class WorkflowCreateRequest(BaseModel):
    """Request body for creating a workflow."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""


class WorkflowResponse(BaseModel):
    """Workflow response with member task ids."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
    task_ids: list[int] = Field(default_factory=list)


class WorkflowTaskAddRequest(BaseModel):
    """Request body for adding a task to a workflow.

    With depends_on_task_id the stored edge is (depends_on_task_id -> task_id).
    """

    task_id: int = Field(..., gt=0)
    depends_on_task_id: int | None = Field(default=None, gt=0)


class WorkflowTaskReplaceRequest(BaseModel):
    """Request body for replacing a member task with another task."""

    new_task_id: int = Field(..., gt=0)


class DependencyOrderRequest(BaseModel):
    """Request body for re-chaining a workflow: each task depends on the next."""

    new_order: list[int] = Field(..., min_length=1)


class WorkflowTaskRemovalResponse(BaseModel):
    """Tasks evicted by removing a task from a workflow (removed task first)."""

    workflow_id: int
    evicted_task_ids: list[int]
