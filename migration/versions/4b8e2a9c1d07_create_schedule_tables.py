"""create schedule tables

Revision ID: 4b8e2a9c1d07
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


revision = "4b8e2a9c1d07"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=11), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("duration_days", sa.Integer(), nullable=True),
        sa.Column("start_after", sa.Date(), nullable=True),
        sa.Column("start_before", sa.Date(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tasks_status", "tasks", ["status"], unique=False)

    op.create_table(
        "task_dependencies",
        sa.Column("predecessor_task_id", sa.String(), nullable=False),
        sa.Column("successor_task_id", sa.String(), nullable=False),
        sa.Column("dependency_type", sa.String(length=16), nullable=False),
        sa.Column("lag_days", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.ForeignKeyConstraint(["predecessor_task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["successor_task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("predecessor_task_id", "successor_task_id"),
    )
    op.create_index("idx_dep_successor", "task_dependencies", ["successor_task_id"], unique=False)

    op.create_table(
        "milestones",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("target_date", sa.Date(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "milestone_tasks",
        sa.Column("milestone_id", sa.String(), nullable=False),
        sa.Column("task_id", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["milestone_id"], ["milestones.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("milestone_id", "task_id"),
    )
    op.create_index("idx_milestone_tasks_task", "milestone_tasks", ["task_id"], unique=False)

    op.create_table(
        "task_milestone_deps",
        sa.Column("task_id", sa.String(), nullable=False),
        sa.Column("milestone_id", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["milestone_id"], ["milestones.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("task_id", "milestone_id"),
    )
    op.create_index(
        "idx_task_milestone_deps_milestone",
        "task_milestone_deps",
        ["milestone_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("idx_task_milestone_deps_milestone", table_name="task_milestone_deps")
    op.drop_table("task_milestone_deps")
    op.drop_index("idx_milestone_tasks_task", table_name="milestone_tasks")
    op.drop_table("milestone_tasks")
    op.drop_table("milestones")
    op.drop_index("idx_dep_successor", table_name="task_dependencies")
    op.drop_table("task_dependencies")
    op.drop_index("idx_tasks_status", table_name="tasks")
    op.drop_table("tasks")
