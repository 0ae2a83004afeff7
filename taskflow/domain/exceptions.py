"""Domain exceptions for the Taskflow application.

Every rule a workflow, dependency or task operation can break has a class
here. Nothing in this module knows about HTTP; taskflow.core.exception_handlers
turns error_code into a status code.
"""

from typing import Any


class TaskflowException(Exception):
    """Base exception for all Taskflow application errors.

    Attributes:
        message: Text shown to API callers.
        error_code: Stable code clients branch on.
        details: Ids and fields involved in the failure.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskflowException):
    """Raised when input validation fails (e.g. blank required field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(TaskflowException):
    """Raised when authentication fails (e.g. invalid or expired token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(TaskflowException):
    """Raised when the actor lacks the role required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(TaskflowException):
    """Raised when a referenced task, user or workflow does not exist."""

    def __init__(self, resource_type: str, resource_id: int | str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(TaskflowException):
    """Raised when an operation would violate a workflow or dependency invariant.

    Subclasses carry a specific error_code; callers that only care about the
    taxonomy can catch ConflictException.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONFLICT",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class TaskInAnotherWorkflowException(ConflictException):
    """Raised when a task already belongs to a different workflow."""

    def __init__(self, task_id: int, workflow_id: int, current_workflow_id: int) -> None:
        super().__init__(
            "Task is already part of another workflow",
            "TASK_IN_ANOTHER_WORKFLOW",
            {
                "task_id": task_id,
                "workflow_id": workflow_id,
                "current_workflow_id": current_workflow_id,
            },
        )


class WorkflowMismatchException(ConflictException):
    """Raised when a task is expected to be a member of a workflow but is not."""

    def __init__(self, task_id: int, workflow_id: int | None) -> None:
        super().__init__(
            f"Task {task_id} is not part of workflow {workflow_id}",
            "WORKFLOW_MISMATCH",
            {"task_id": task_id, "workflow_id": workflow_id},
        )


class CyclicDependencyException(ConflictException):
    """Raised when inserting a dependency edge would close a cycle."""

    def __init__(self, task_item_id: int, dependent_task_item_id: int) -> None:
        super().__init__(
            "Cyclic dependency detected",
            "CYCLIC_DEPENDENCY",
            {
                "task_item_id": task_item_id,
                "dependent_task_item_id": dependent_task_item_id,
            },
        )


class DependenciesIncompleteException(ConflictException):
    """Raised when a status change is attempted before all dependencies are completed."""

    def __init__(self, task_id: int, pending_task_ids: list[int]) -> None:
        super().__init__(
            "Dependent tasks not completed",
            "DEPENDENCIES_INCOMPLETE",
            {"task_id": task_id, "pending_task_ids": pending_task_ids},
        )


class TaskHasDependenciesException(ConflictException):
    """Raised when deleting a workflow member that still has dependency edges."""

    def __init__(self, task_id: int, workflow_id: int) -> None:
        super().__init__(
            "Task has dependencies",
            "TASK_HAS_DEPENDENCIES",
            {"task_id": task_id, "workflow_id": workflow_id},
        )


class StoreConflictException(TaskflowException):
    """Raised when the store could not commit because of a concurrent modification.

    Retry policy is the caller's responsibility; details.retryable is always True.
    """

    def __init__(self, message: str = "Concurrent modification; retry the operation") -> None:
        super().__init__(message, "STORE_CONFLICT", {"retryable": True})


class SqlNotConfiguredException(TaskflowException):
    """Raised when an operation requires the database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            "DATABASE_URL is not set or not usable; storage is unavailable.",
            "SERVICE_UNAVAILABLE",
        )
