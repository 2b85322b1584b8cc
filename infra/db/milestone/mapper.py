from __future__ import annotations

from core.models import Milestone, MilestoneContribution, MilestoneRequirement
from infra.db.models import MilestoneORM, MilestoneTaskORM, TaskMilestoneDepORM


def milestone_to_orm(milestone: Milestone) -> MilestoneORM:
    return MilestoneORM(
        id=milestone.id,
        title=milestone.title,
        target_date=milestone.target_date,
        description=milestone.description,
    )


def milestone_from_orm(obj: MilestoneORM) -> Milestone:
    return Milestone(
        id=obj.id,
        title=obj.title,
        target_date=obj.target_date,
        description=obj.description or "",
    )


def contribution_from_orm(obj: MilestoneTaskORM) -> MilestoneContribution:
    return MilestoneContribution(milestone_id=obj.milestone_id, task_id=obj.task_id)


def requirement_from_orm(obj: TaskMilestoneDepORM) -> MilestoneRequirement:
    return MilestoneRequirement(task_id=obj.task_id, milestone_id=obj.milestone_id)


__all__ = [
    "milestone_to_orm",
    "milestone_from_orm",
    "contribution_from_orm",
    "requirement_from_orm",
]
