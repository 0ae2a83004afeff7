"""Persistence models: ORM entities and mixins."""

from taskflow.infrastructure.persistence.models.mixins import (
    IntegerIdMixin,
    TimestampedModel,
    TimestampMixin,
)
from taskflow.infrastructure.persistence.models.task import Task
from taskflow.infrastructure.persistence.models.task_assignment import TaskAssignment
from taskflow.infrastructure.persistence.models.task_dependency import TaskDependency
from taskflow.infrastructure.persistence.models.user import User
from taskflow.infrastructure.persistence.models.workflow import Workflow

__all__ = [
    "Task",
    "TaskAssignment",
    "TaskDependency",
    "User",
    "Workflow",
    "IntegerIdMixin",
    "TimestampMixin",
    "TimestampedModel",
]
