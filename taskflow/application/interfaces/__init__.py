"""Application ports (Protocols) implemented by infrastructure."""

from taskflow.application.interfaces.repositories import (
    ITaskAssignmentRepository,
    ITaskDependencyRepository,
    ITaskRepository,
    IUnitOfWork,
    IUserRepository,
    IWorkflowRepository,
    UnitOfWorkFactory,
)

__all__ = [
    "ITaskAssignmentRepository",
    "ITaskDependencyRepository",
    "ITaskRepository",
    "IUnitOfWork",
    "IUserRepository",
    "IWorkflowRepository",
    "UnitOfWorkFactory",
]
