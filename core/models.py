from core.domain import (
    DependencyType,
    Milestone,
    MilestoneContribution,
    MilestoneRequirement,
    ScheduleMode,
    Task,
    TaskDependency,
    TaskStatus,
    WarningType,
    generate_id,
)

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
