"""initial_schema_tasks_workflows_dependencies

Revision ID: 3f2a9c1d7b04
Revises:
Create Date: 2026-10-19 14:20:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "workflow",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "task",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=64), nullable=False),
        sa.Column("assignee_id", sa.Integer(), nullable=False),
        sa.Column("workflow_id", sa.Integer(), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["assignee_id"], ["app_user.id"]),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflow.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_task_assignee_id", "task", ["assignee_id"])
    op.create_index("ix_task_workflow_id", "task", ["workflow_id"])
    op.create_index("ix_task_workflow_status", "task", ["workflow_id", "status"])
    op.create_table(
        "task_dependency",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("task_item_id", sa.Integer(), nullable=False),
        sa.Column("dependent_task_item_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["task_item_id"], ["task.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["dependent_task_item_id"], ["task.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "task_item_id", "dependent_task_item_id", name="uq_task_dependency_pair"
        ),
        sa.CheckConstraint(
            "task_item_id <> dependent_task_item_id",
            name="task_dependency_no_self_edge",
        ),
    )
    op.create_index(
        "ix_task_dependency_task_item_id", "task_dependency", ["task_item_id"]
    )
    op.create_index(
        "ix_task_dependency_dependent_task_item_id",
        "task_dependency",
        ["dependent_task_item_id"],
    )
    op.create_table(
        "task_assignment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("task_item_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["task_item_id"], ["task.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"]),
    )
    op.create_index("ix_task_assignment_user_id", "task_assignment", ["user_id"])
    op.create_index(
        "ix_task_assignment_task_assigned",
        "task_assignment",
        ["task_item_id", "assigned_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_task_assignment_task_assigned", table_name="task_assignment")
    op.drop_index("ix_task_assignment_user_id", table_name="task_assignment")
    op.drop_table("task_assignment")
    op.drop_index("ix_task_dependency_dependent_task_item_id", table_name="task_dependency")
    op.drop_index("ix_task_dependency_task_item_id", table_name="task_dependency")
    op.drop_table("task_dependency")
    op.drop_index("ix_task_workflow_status", table_name="task")
    op.drop_index("ix_task_workflow_id", table_name="task")
    op.drop_index("ix_task_assignee_id", table_name="task")
    op.drop_table("task")
    op.drop_table("workflow")
    op.drop_table("app_user")
