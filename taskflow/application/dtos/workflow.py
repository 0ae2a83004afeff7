"""DTOs for workflows (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class WorkflowResult:
    """Workflow read-model. task_ids lists current member tasks (ascending id)."""

    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
    task_ids: tuple[int, ...] = field(default_factory=tuple)
