"""DTOs for task assignment history (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TaskAssignmentResult:
    """One append-only assignment event: task_item_id was assigned to user_id."""

    id: int
    task_item_id: int
    user_id: int
    assigned_at: datetime
