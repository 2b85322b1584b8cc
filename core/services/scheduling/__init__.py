from .engine import SchedulingEngine
from .milestones import expand_milestone_dependencies
from .models import ScheduledItem, ScheduleNode, ScheduleResult, ScheduleWarning
from .scheduler import schedule

__all__ = [
    "SchedulingEngine",
    "schedule",
    "expand_milestone_dependencies",
    "ScheduleNode",
    "ScheduledItem",
    "ScheduleResult",
    "ScheduleWarning",
]
