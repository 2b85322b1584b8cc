from core.domain.enums import DependencyType, ScheduleMode, TaskStatus, WarningType
from core.domain.identifiers import generate_id
from core.domain.milestone import Milestone, MilestoneContribution, MilestoneRequirement
from core.domain.task import Task, TaskDependency

__all__ = [
    "generate_id",
    "TaskStatus",
    "DependencyType",
    "ScheduleMode",
    "WarningType",
    "Task",
    "TaskDependency",
    "Milestone",
    "MilestoneContribution",
    "MilestoneRequirement",
]
