"""Application services: dependency graph operations, assignment history."""

from taskflow.application.services.assignment_history_service import (
    AssignmentHistoryService,
)
from taskflow.application.services.dependency_graph_service import (
    DependencyGraphService,
)

__all__ = [
    "AssignmentHistoryService",
    "DependencyGraphService",
]
