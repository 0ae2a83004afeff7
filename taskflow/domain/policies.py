"""Task policies: status gating and field-level authorization rules."""

from taskflow.domain.enums import TaskStatus


def is_completed(status: str) -> bool:
    """Return whether status is exactly the Completed literal (case-sensitive)."""
    return status == TaskStatus.COMPLETED.value


def can_change_workflow(is_admin: bool) -> bool:
    """Only admins may move a task between workflows through an update."""
    return is_admin


def can_change_assignee(actor_id: int, is_admin: bool, current_assignee_id: int) -> bool:
    """Admins, or the current assignee handing the task off, may reassign it."""
    return is_admin or actor_id == current_assignee_id
