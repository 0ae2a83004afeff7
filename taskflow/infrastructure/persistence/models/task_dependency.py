"""TaskDependency ORM model: task_item_id depends on dependent_task_item_id."""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.infrastructure.persistence.database import Base
from taskflow.infrastructure.persistence.models.mixins import IntegerIdMixin


class TaskDependency(IntegerIdMixin, Base):
    """Directed dependency edge. Table: task_dependency.

    Unique (task_item_id, dependent_task_item_id); self-edges are rejected.
    """

    __tablename__ = "task_dependency"

    task_item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("task.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    dependent_task_item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("task.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint(
            "task_item_id",
            "dependent_task_item_id",
            name="uq_task_dependency_pair",
        ),
        CheckConstraint(
            "task_item_id <> dependent_task_item_id",
            name="task_dependency_no_self_edge",
        ),
    )
