from .milestone import MilestoneService
from .scheduling import SchedulingEngine, ScheduleResult, schedule
from .task import TaskService

__all__ = [
    "TaskService",
    "MilestoneService",
    "SchedulingEngine",
    "ScheduleResult",
    "schedule",
]
