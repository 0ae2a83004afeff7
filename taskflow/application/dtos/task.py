"""DTOs for tasks (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TaskResult:
    """Task read-model (result of get_by_id, create_task, update_task)."""

    id: int
    title: str
    description: str
    status: str
    assignee_id: int
    workflow_id: int | None
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TaskCreate:
    """Input for creating a task."""

    title: str
    description: str
    status: str
    assignee_id: int
    workflow_id: int | None = None
    due_date: datetime | None = None


@dataclass(frozen=True)
class TaskPatch:
    """Partial update for a task. None means leave the field unchanged."""

    title: str | None = None
    description: str | None = None
    status: str | None = None
    due_date: datetime | None = None
    workflow_id: int | None = None
    assignee_id: int | None = None
