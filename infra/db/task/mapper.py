from __future__ import annotations

from core.models import DependencyType, Task, TaskDependency, TaskStatus
from infra.db.models import TaskDependencyORM, TaskORM


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        name=task.name,
        description=task.description,
        status=task.status,
        start_date=task.start_date,
        end_date=task.end_date,
        duration_days=task.duration_days,
        start_after=task.start_after,
        start_before=task.start_before,
        updated_at=task.updated_at,
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        name=obj.name,
        description=obj.description or "",
        status=TaskStatus(obj.status),
        start_date=obj.start_date,
        end_date=obj.end_date,
        duration_days=obj.duration_days,
        start_after=obj.start_after,
        start_before=obj.start_before,
        updated_at=obj.updated_at,
    )


def dependency_to_orm(dependency: TaskDependency) -> TaskDependencyORM:
    return TaskDependencyORM(
        predecessor_task_id=dependency.predecessor_task_id,
        successor_task_id=dependency.successor_task_id,
        dependency_type=dependency.dependency_type,
        lag_days=dependency.lag_days,
    )


def dependency_from_orm(obj: TaskDependencyORM) -> TaskDependency:
    return TaskDependency(
        predecessor_task_id=obj.predecessor_task_id,
        successor_task_id=obj.successor_task_id,
        dependency_type=DependencyType(obj.dependency_type),
        lag_days=obj.lag_days or 0,
    )


__all__ = [
    "task_to_orm",
    "task_from_orm",
    "dependency_to_orm",
    "dependency_from_orm",
]
