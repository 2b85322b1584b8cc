from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, TaskRepository
from core.models import Task, TaskDependency
from infra.db.models import TaskDependencyORM, TaskORM
from infra.db.task.mapper import (
    dependency_from_orm,
    dependency_to_orm,
    task_from_orm,
    task_to_orm,
)


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, task: Task) -> None:
        self.session.add(task_to_orm(task))

    def update(self, task: Task) -> None:
        self.session.merge(task_to_orm(task))

    def update_dates(
        self,
        task_id: str,
        start_date: Optional[date],
        end_date: Optional[date],
        updated_at: datetime,
    ) -> None:
        stmt = (
            update(TaskORM)
            .where(TaskORM.id == task_id)
            .values(start_date=start_date, end_date=end_date, updated_at=updated_at)
            .execution_options(synchronize_session="fetch")
        )
        self.session.execute(stmt)

    def delete(self, task_id: str) -> None:
        self.session.execute(delete(TaskORM).where(TaskORM.id == task_id))

    def get(self, task_id: str) -> Optional[Task]:
        obj = self.session.get(TaskORM, task_id)
        return task_from_orm(obj) if obj else None

    def list_all(self) -> List[Task]:
        rows = self.session.execute(select(TaskORM).order_by(TaskORM.id)).scalars().all()
        return [task_from_orm(row) for row in rows]


class SqlAlchemyDependencyRepository(DependencyRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, dependency: TaskDependency) -> None:
        self.session.add(dependency_to_orm(dependency))

    def get(self, predecessor_id: str, successor_id: str) -> Optional[TaskDependency]:
        obj = self.session.get(TaskDependencyORM, (predecessor_id, successor_id))
        return dependency_from_orm(obj) if obj else None

    def delete(self, predecessor_id: str, successor_id: str) -> None:
        self.session.execute(
            delete(TaskDependencyORM).where(
                TaskDependencyORM.predecessor_task_id == predecessor_id,
                TaskDependencyORM.successor_task_id == successor_id,
            )
        )

    def delete_for_task(self, task_id: str) -> None:
        self.session.execute(
            delete(TaskDependencyORM).where(
                or_(
                    TaskDependencyORM.predecessor_task_id == task_id,
                    TaskDependencyORM.successor_task_id == task_id,
                )
            )
        )

    def list_all(self) -> List[TaskDependency]:
        stmt = select(TaskDependencyORM).order_by(
            TaskDependencyORM.predecessor_task_id, TaskDependencyORM.successor_task_id
        )
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]

    def list_by_task(self, task_id: str) -> List[TaskDependency]:
        stmt = select(TaskDependencyORM).where(
            or_(
                TaskDependencyORM.predecessor_task_id == task_id,
                TaskDependencyORM.successor_task_id == task_id,
            )
        )
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]


__all__ = [
    "SqlAlchemyTaskRepository",
    "SqlAlchemyDependencyRepository",
]
