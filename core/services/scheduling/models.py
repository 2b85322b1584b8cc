from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from core.models import Task, WarningType


@dataclass
class ScheduleNode:
    task: Task
    duration: int
    es: date
    ef: date
    ls: Optional[date] = None
    lf: Optional[date] = None


@dataclass(frozen=True)
class ScheduleWarning:
    task_id: str
    type: WarningType
    message: str


@dataclass(frozen=True)
class ScheduledItem:
    task_id: str
    previous_start_date: Optional[date]
    previous_end_date: Optional[date]
    scheduled_start_date: date
    scheduled_end_date: date
    latest_start_date: date
    latest_finish_date: date
    total_float: int
    is_critical: bool

    @property
    def dates_changed(self) -> bool:
        return (
            self.scheduled_start_date != self.previous_start_date
            or self.scheduled_end_date != self.previous_end_date
        )


@dataclass
class ScheduleResult:
    scheduled_items: List[ScheduledItem] = field(default_factory=list)
    critical_path: List[str] = field(default_factory=list)
    warnings: List[ScheduleWarning] = field(default_factory=list)
    # non-empty only when the scheduled subgraph has a circular dependency
    cycle_nodes: List[str] = field(default_factory=list)

    @property
    def has_cycle(self) -> bool:
        return bool(self.cycle_nodes)

    def item_for(self, task_id: str) -> Optional[ScheduledItem]:
        for item in self.scheduled_items:
            if item.task_id == task_id:
                return item
        return None


__all__ = ["ScheduleNode", "ScheduleWarning", "ScheduledItem", "ScheduleResult"]
