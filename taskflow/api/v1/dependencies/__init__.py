"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on infrastructure directly.
"""

from taskflow.api.v1.dependencies.auth import get_actor, require_admin
from taskflow.api.v1.dependencies.db import get_uow_factory
from taskflow.api.v1.dependencies.services import (
    get_graph_service,
    get_history_service,
    get_task_service,
    get_workflow_service,
)

__all__ = [
    "get_actor",
    "get_graph_service",
    "get_history_service",
    "get_task_service",
    "get_uow_factory",
    "get_workflow_service",
    "require_admin",
]
