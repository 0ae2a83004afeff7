"""Domain enumerations for the Taskflow application.

Enums represent fixed sets of domain values (user role, privileged task status).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """User role. Admins may restructure workflows and reassign any task."""

    ADMIN = "Admin"
    USER = "User"


class TaskStatus(_ValuesMixin, str, Enum):
    """Well-known task status values.

    Task.status is free-form; only COMPLETED carries meaning (it unblocks
    dependents). Comparison is an exact string match.
    """

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
