"""Workflow use cases: membership, replacement, chain reordering, deletion."""

from taskflow.application.use_cases.workflows.workflow_operations import (
    WorkflowMembershipService,
)

__all__ = ["WorkflowMembershipService"]
