# infra/db/models.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import DependencyType, TaskStatus


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class TaskORM(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    status: Mapped[TaskStatus] = mapped_column(
        SAEnum(TaskStatus, values_callable=_enum_values, native_enum=False),
        default=TaskStatus.NOT_STARTED,
        nullable=False,
    )
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    duration_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    start_after: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    start_before: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
Index("idx_tasks_status", TaskORM.status)


class TaskDependencyORM(Base):
    __tablename__ = "task_dependencies"

    predecessor_task_id: Mapped[str] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True
    )
    successor_task_id: Mapped[str] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True
    )
    dependency_type: Mapped[DependencyType] = mapped_column(
        SAEnum(DependencyType, values_callable=_enum_values, native_enum=False),
        default=DependencyType.FINISH_TO_START,
        nullable=False,
    )
    lag_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
Index("idx_dep_successor", TaskDependencyORM.successor_task_id)


class MilestoneORM(Base):
    __tablename__ = "milestones"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    target_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    description: Mapped[str] = mapped_column(String, default="")


class MilestoneTaskORM(Base):
    """Tasks contributing to a milestone."""
    __tablename__ = "milestone_tasks"

    milestone_id: Mapped[str] = mapped_column(
        String, ForeignKey("milestones.id", ondelete="CASCADE"), primary_key=True
    )
    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True
    )
Index("idx_milestone_tasks_task", MilestoneTaskORM.task_id)


class TaskMilestoneDepORM(Base):
    """Tasks waiting on a milestone."""
    __tablename__ = "task_milestone_deps"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True
    )
    milestone_id: Mapped[str] = mapped_column(
        String, ForeignKey("milestones.id", ondelete="CASCADE"), primary_key=True
    )
Index("idx_task_milestone_deps_milestone", TaskMilestoneDepORM.milestone_id)
