"""Workflow ORM model. Members reference it through task.workflow_id."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.infrastructure.persistence.database import Base
from taskflow.infrastructure.persistence.models.mixins import TimestampedModel


class Workflow(TimestampedModel, Base):
    """Named container grouping tasks. Table: workflow."""

    __tablename__ = "workflow"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
