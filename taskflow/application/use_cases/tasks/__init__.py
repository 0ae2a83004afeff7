"""Task use cases: create, update with status gating, delete, assignment."""

from taskflow.application.use_cases.tasks.task_operations import TaskLifecycleService

__all__ = ["TaskLifecycleService"]
