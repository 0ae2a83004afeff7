"""Tests for task policies: Completed literal and field-level authorization."""

import pytest

from taskflow.domain.enums import TaskStatus, UserRole
from taskflow.domain.policies import can_change_assignee, can_change_workflow, is_completed


def test_completed_is_exact_literal() -> None:
    assert is_completed("Completed")
    assert is_completed(TaskStatus.COMPLETED)


@pytest.mark.parametrize("status", ["completed", "COMPLETED", "Completed ", "Done", ""])
def test_other_spellings_are_not_completed(status: str) -> None:
    assert not is_completed(status)


def test_only_admin_changes_workflow() -> None:
    assert can_change_workflow(True)
    assert not can_change_workflow(False)


def test_assignee_change_allowed_for_admin_or_current_assignee() -> None:
    assert can_change_assignee(actor_id=1, is_admin=True, current_assignee_id=2)
    assert can_change_assignee(actor_id=2, is_admin=False, current_assignee_id=2)
    assert not can_change_assignee(actor_id=3, is_admin=False, current_assignee_id=2)


def test_enum_values() -> None:
    assert UserRole.values() == ["Admin", "User"]
    assert "Completed" in TaskStatus.values()
