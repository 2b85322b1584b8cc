from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from core.domain.enums import DependencyType, TaskStatus
from core.domain.identifiers import generate_id


@dataclass
class Task:
    id: str
    name: str
    description: str = ""
    status: TaskStatus = TaskStatus.NOT_STARTED
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration_days: Optional[int] = None
    # hard floor on the earliest start
    start_after: Optional[date] = None
    # soft ceiling, only reported when exceeded
    start_before: Optional[date] = None
    updated_at: Optional[datetime] = None

    @staticmethod
    def create(name: str, description: str = "", **extra) -> "Task":
        return Task(
            id=generate_id(),
            name=name,
            description=description,
            **extra,
        )


@dataclass
class TaskDependency:
    predecessor_task_id: str
    successor_task_id: str
    dependency_type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = 0  # can be negative for lead time

    @staticmethod
    def create(
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> "TaskDependency":
        return TaskDependency(
            predecessor_task_id=predecessor_id,
            successor_task_id=successor_id,
            dependency_type=DependencyType(dependency_type),
            lag_days=int(lag_days),
        )


__all__ = ["Task", "TaskDependency"]
