"""SQLAlchemy repository implementations of the application ports."""

from taskflow.infrastructure.persistence.repositories.base import BaseRepository
from taskflow.infrastructure.persistence.repositories.task_assignment_repo import (
    TaskAssignmentRepository,
)
from taskflow.infrastructure.persistence.repositories.task_dependency_repo import (
    TaskDependencyRepository,
)
from taskflow.infrastructure.persistence.repositories.task_repo import TaskRepository
from taskflow.infrastructure.persistence.repositories.user_repo import UserRepository
from taskflow.infrastructure.persistence.repositories.workflow_repo import (
    WorkflowRepository,
)

__all__ = [
    "BaseRepository",
    "TaskAssignmentRepository",
    "TaskDependencyRepository",
    "TaskRepository",
    "UserRepository",
    "WorkflowRepository",
]
