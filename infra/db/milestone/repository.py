from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from core.interfaces import MilestoneRepository
from core.models import Milestone, MilestoneContribution, MilestoneRequirement
from infra.db.milestone.mapper import (
    contribution_from_orm,
    milestone_from_orm,
    milestone_to_orm,
    requirement_from_orm,
)
from infra.db.models import MilestoneORM, MilestoneTaskORM, TaskMilestoneDepORM


class SqlAlchemyMilestoneRepository(MilestoneRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, milestone: Milestone) -> None:
        self.session.add(milestone_to_orm(milestone))

    def get(self, milestone_id: str) -> Optional[Milestone]:
        obj = self.session.get(MilestoneORM, milestone_id)
        return milestone_from_orm(obj) if obj else None

    def delete(self, milestone_id: str) -> None:
        self.session.execute(delete(MilestoneTaskORM).where(MilestoneTaskORM.milestone_id == milestone_id))
        self.session.execute(
            delete(TaskMilestoneDepORM).where(TaskMilestoneDepORM.milestone_id == milestone_id)
        )
        self.session.execute(delete(MilestoneORM).where(MilestoneORM.id == milestone_id))

    def list_all(self) -> List[Milestone]:
        rows = self.session.execute(select(MilestoneORM)).scalars().all()
        return [milestone_from_orm(row) for row in rows]

    def add_contribution(self, link: MilestoneContribution) -> None:
        self.session.add(MilestoneTaskORM(milestone_id=link.milestone_id, task_id=link.task_id))

    def remove_contribution(self, milestone_id: str, task_id: str) -> None:
        self.session.execute(
            delete(MilestoneTaskORM).where(
                MilestoneTaskORM.milestone_id == milestone_id,
                MilestoneTaskORM.task_id == task_id,
            )
        )

    def list_contributions(self) -> List[MilestoneContribution]:
        stmt = select(MilestoneTaskORM).order_by(MilestoneTaskORM.milestone_id, MilestoneTaskORM.task_id)
        rows = self.session.execute(stmt).scalars().all()
        return [contribution_from_orm(row) for row in rows]

    def add_requirement(self, link: MilestoneRequirement) -> None:
        self.session.add(TaskMilestoneDepORM(task_id=link.task_id, milestone_id=link.milestone_id))

    def remove_requirement(self, task_id: str, milestone_id: str) -> None:
        self.session.execute(
            delete(TaskMilestoneDepORM).where(
                TaskMilestoneDepORM.task_id == task_id,
                TaskMilestoneDepORM.milestone_id == milestone_id,
            )
        )

    def list_requirements(self) -> List[MilestoneRequirement]:
        stmt = select(TaskMilestoneDepORM).order_by(
            TaskMilestoneDepORM.task_id, TaskMilestoneDepORM.milestone_id
        )
        rows = self.session.execute(stmt).scalars().all()
        return [requirement_from_orm(row) for row in rows]

    def delete_links_for_task(self, task_id: str) -> None:
        self.session.execute(delete(MilestoneTaskORM).where(MilestoneTaskORM.task_id == task_id))
        self.session.execute(delete(TaskMilestoneDepORM).where(TaskMilestoneDepORM.task_id == task_id))


__all__ = ["SqlAlchemyMilestoneRepository"]
