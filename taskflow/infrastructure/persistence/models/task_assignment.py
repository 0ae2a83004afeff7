"""TaskAssignment ORM model. Append-only assignment history."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.infrastructure.persistence.database import Base
from taskflow.infrastructure.persistence.models.mixins import IntegerIdMixin


class TaskAssignment(IntegerIdMixin, Base):
    """One assignment event. Table: task_assignment. Removed only with its task."""

    __tablename__ = "task_assignment"

    task_item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("task.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id"), nullable=False, index=True
    )
    assigned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_task_assignment_task_assigned", "task_item_id", "assigned_at"),
    )
