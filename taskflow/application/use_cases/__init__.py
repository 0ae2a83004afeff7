"""Application use cases: workflow membership and task lifecycle."""

from taskflow.application.use_cases.tasks import TaskLifecycleService
from taskflow.application.use_cases.workflows import WorkflowMembershipService

__all__ = [
    "TaskLifecycleService",
    "WorkflowMembershipService",
]
