from __future__ import annotations

from enum import Enum


class TaskStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class DependencyType(str, Enum):
    FINISH_TO_START = "finish_to_start"
    START_TO_START = "start_to_start"
    FINISH_TO_FINISH = "finish_to_finish"
    START_TO_FINISH = "start_to_finish"


class ScheduleMode(str, Enum):
    FULL = "full"
    CASCADE = "cascade"


class WarningType(str, Enum):
    NO_DURATION = "no_duration"
    START_BEFORE_VIOLATED = "start_before_violated"
    ALREADY_COMPLETED = "already_completed"


__all__ = ["TaskStatus", "DependencyType", "ScheduleMode", "WarningType"]
