"""Task API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1, max_length=64)
    assignee_id: int = Field(..., gt=0)
    workflow_id: int | None = Field(default=None, gt=0)
    due_date: datetime | None = None


class TaskUpdateRequest(BaseModel):
    """Request body for updating a task (partial; omitted fields are unchanged)."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    status: str | None = Field(default=None, min_length=1, max_length=64)
    due_date: datetime | None = None
    workflow_id: int | None = Field(default=None, gt=0)
    assignee_id: int | None = Field(default=None, gt=0)


class TaskAssignRequest(BaseModel):
    """Request body for assigning (or reassigning) a task to a user."""

    user_id: int = Field(..., gt=0)


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    status: str
    assignee_id: int
    workflow_id: int | None
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime


class TaskAssignmentResponse(BaseModel):
    """One assignment history entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    task_item_id: int
    user_id: int
    assigned_at: datetime


class TaskDependencyResponse(BaseModel):
    """Dependency edge: task_item_id depends on dependent_task_item_id."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None
    task_item_id: int
    dependent_task_item_id: int
